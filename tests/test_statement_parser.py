"""Tests for statement_parser module."""

from decimal import Decimal

import polars as pl

from bank_import.ingest.column_mapper import ColumnMapping
from bank_import.ingest.presets import get_preset
from bank_import.ingest.statement_parser import (
    MSG_BAD_AMOUNT,
    MSG_EMPTY_FILE,
    MSG_NO_AMOUNT_COLUMN,
    MSG_NO_DATA_ROWS,
    MSG_NO_DATE_COLUMN,
    ParsedTransaction,
    RowDiagnostic,
    assemble_row,
    parse,
)

TATRA_CSV = (
    "Dátum;Suma;Názov protiúčtu;Protiúčet;Variabilný symbol;Konštantný symbol;"
    "Špecifický symbol;Popis transakcie;Referencia\n"
    "15.03.2025;1 234,56;Firma s.r.o.;SK3112000000198742637541;20250001;0308;;"
    "\"Úhrada; faktúra 1\";REF-1\n"
    "16.03.2025;-45,90;Obchod;;;;;Nákup;\n"
)

CREDIT_DEBIT_CSV = (
    "Date,Credit,Debit,Description\n"
    "2025-03-15,100,,Salary\n"
    "2025-03-16,,50,Rent\n"
)


class TestParse:
    def test_preset_free_slovak_file(self):
        outcome = parse(TATRA_CSV)
        assert outcome.total_data_rows == 2
        assert outcome.diagnostics == []
        first, second = outcome.transactions

        assert first.date == "2025-03-15"
        assert first.amount == Decimal("1234.56")
        assert first.direction == "credit"
        assert first.counterparty_name == "Firma s.r.o."
        assert first.counterparty_iban == "SK3112000000198742637541"
        assert first.variable_symbol == "20250001"
        assert first.constant_symbol == "0308"
        assert first.specific_symbol == ""
        assert first.description == "Úhrada; faktúra 1"
        assert first.reference == "REF-1"

        assert second.amount == Decimal("-45.90")
        assert second.direction == "debit"
        assert second.reference == ""

    def test_raw_row_retained(self):
        tx = parse(TATRA_CSV).transactions[1]
        assert tx.raw_row["Suma"] == "-45,90"
        assert tx.raw_row["Popis transakcie"] == "Nákup"

    def test_with_preset(self):
        outcome = parse(TATRA_CSV, get_preset("tatra_banka"))
        assert len(outcome.transactions) == 2

    def test_row_isolation(self):
        text = (
            "Dátum;Suma;Popis\n"
            "15.03.2025;100,00;A\n"
            "32.13.2025;50,00;B\n"
            "17.03.2025;-20,50;C\n"
        )
        outcome = parse(text)
        assert outcome.total_data_rows == 3
        assert [t.description for t in outcome.transactions] == ["A", "C"]
        assert outcome.diagnostics == [RowDiagnostic(2, 'invalid date format: "32.13.2025"')]

    def test_bad_amount_row(self):
        outcome = parse("Dátum;Suma\n15.03.2025;abc\n16.03.2025;1,00\n")
        assert outcome.diagnostics == [RowDiagnostic(1, MSG_BAD_AMOUNT)]
        assert len(outcome.transactions) == 1

    def test_credit_debit_fallback(self):
        outcome = parse(CREDIT_DEBIT_CSV)
        salary, rent = outcome.transactions
        assert salary.amount == Decimal("100")
        assert salary.direction == "credit"
        assert rent.amount == Decimal("-50")
        assert rent.direction == "debit"

    def test_credit_debit_both_empty(self):
        outcome = parse(CREDIT_DEBIT_CSV + "2025-03-17,,,Nothing\n")
        assert outcome.diagnostics == [RowDiagnostic(3, MSG_BAD_AMOUNT)]

    def test_credit_debit_zero_is_not_an_amount(self):
        outcome = parse("Date,Credit,Debit\n2025-03-17,0,0\n")
        assert outcome.transactions == []
        assert outcome.diagnostics == [RowDiagnostic(1, MSG_BAD_AMOUNT)]

    def test_debit_column_only(self):
        outcome = parse("Dátum;Debet\n1.4.2025;12,00\n")
        assert outcome.transactions[0].amount == Decimal("-12.00")

    def test_zero_unified_amount_is_credit(self):
        outcome = parse("Dátum;Suma\n1.4.2025;0,00\n")
        assert outcome.transactions[0].direction == "credit"

    def test_blank_lines_skipped_before_numbering(self):
        text = "Dátum;Suma\n\n1.1.2025;1\n   \n\nbad;1\n\n"
        outcome = parse(text)
        assert outcome.total_data_rows == 2
        assert outcome.diagnostics == [RowDiagnostic(2, 'invalid date format: "bad"')]

    def test_short_row_padded(self):
        outcome = parse("Dátum;Suma;Popis\n15.03.2025;10,00\n")
        tx = outcome.transactions[0]
        assert tx.description == ""
        assert tx.raw_row == {"Dátum": "15.03.2025", "Suma": "10,00", "Popis": ""}

    def test_crlf_and_tab(self):
        outcome = parse("Date\tAmount\tDescription\r\n2025-03-15\t-1,234.50\tShop\r\n")
        assert outcome.transactions[0].amount == Decimal("-1234.50")

    def test_bare_cr_matches_lf(self):
        body = "Date,Amount\n" + "2025-01-01,1\n" * 4 + "x;y;z;w;v;u;t\n" * 10
        lf = parse(body)
        assert len(lf.transactions) == 4
        assert parse(body.replace("\n", "\r")) == lf
        assert parse(body.replace("\n", "\r\n")) == lf

    def test_idempotent(self):
        assert parse(TATRA_CSV) == parse(TATRA_CSV)
        assert parse(CREDIT_DEBIT_CSV + "x,y,z\n") == parse(CREDIT_DEBIT_CSV + "x,y,z\n")


class TestFileLevelRejection:
    def _assert_rejected(self, outcome, message):
        assert outcome.transactions == []
        assert outcome.total_data_rows == 0
        assert outcome.diagnostics == [RowDiagnostic(0, message)]
        assert outcome.is_rejected

    def test_empty(self):
        self._assert_rejected(parse(""), MSG_EMPTY_FILE)
        self._assert_rejected(parse("  \n\t\n"), MSG_EMPTY_FILE)

    def test_bom_only_is_empty(self):
        self._assert_rejected(parse("\ufeff"), MSG_EMPTY_FILE)
        self._assert_rejected(parse("\ufeff  \r\n\n"), MSG_EMPTY_FILE)

    def test_header_only(self):
        self._assert_rejected(parse("Dátum;Suma\n\n"), MSG_NO_DATA_ROWS)

    def test_no_date_column(self):
        self._assert_rejected(parse("Foo;Suma\nx;1\n"), MSG_NO_DATE_COLUMN)

    def test_no_amount_column(self):
        self._assert_rejected(parse("Dátum;Popis\n1.1.2025;x\n"), MSG_NO_AMOUNT_COLUMN)

    def test_preset_header_missing(self):
        # The preset's date column is used verbatim, so detection does not rescue it
        outcome = parse("Date,Amount\n2025-01-01,1\n", get_preset("tatra_banka"))
        self._assert_rejected(outcome, MSG_NO_DATE_COLUMN)

    def test_row_diagnostics_do_not_reject(self):
        assert not parse("Dátum;Suma\nbad;1\n").is_rejected


class TestAssembleRow:
    def test_transaction(self):
        mapping = ColumnMapping(date="D", amount="A", reference="R")
        result = assemble_row(4, ["2025-01-02", "7,5", "X"], ["D", "A", "R"], mapping, use_amount=True)
        assert isinstance(result, ParsedTransaction)
        assert result.amount == Decimal("7.5")
        assert result.reference == "X"

    def test_date_checked_before_amount(self):
        mapping = ColumnMapping(date="D", amount="A")
        result = assemble_row(4, ["nope", "nope"], ["D", "A"], mapping, use_amount=True)
        assert result == RowDiagnostic(4, 'invalid date format: "nope"')

    def test_extra_fields_ignored(self):
        mapping = ColumnMapping(date="D", amount="A")
        result = assemble_row(1, ["2025-01-02", "1", "extra"], ["D", "A"], mapping, use_amount=True)
        assert result.raw_row == {"D": "2025-01-02", "A": "1"}


class TestFrames:
    def test_to_frame(self):
        df = parse(TATRA_CSV).to_frame()
        assert df.height == 2
        assert df["amount"].to_list() == [1234.56, -45.9]
        assert df.schema["date"] == pl.Utf8
        assert "raw_row" not in df.columns

    def test_empty_frame_has_schema(self):
        df = parse("").to_frame()
        assert df.height == 0
        assert "counterparty_iban" in df.columns

    def test_diagnostics_frame(self):
        df = parse("Dátum;Suma\nbad;1\n").diagnostics_frame()
        assert df.to_dicts() == [{"row_index": 1, "message": 'invalid date format: "bad"'}]
