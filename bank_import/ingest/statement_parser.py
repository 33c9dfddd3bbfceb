"""Parse raw bank statement text into normalized transactions.

parse() is the single entry point. Problems are reported as diagnostics in
the returned ParseOutcome, never raised:

- file-level (row_index 0): empty input, no data rows, no date column,
  no amount column. No transactions are produced.
- row-level (1-based data row index): bad date or amount. The row is
  skipped and parsing continues.
"""

from dataclasses import dataclass, field
from decimal import Decimal

import polars as pl

from bank_import.logging_setup import get_logger
from bank_import.ingest.column_mapper import ColumnMapping, has_column, resolve_mapping
from bank_import.ingest.csv_parser import detect_delimiter, normalize_newlines, parse_line, split_lines
from bank_import.ingest.date_parser import parse_date
from bank_import.ingest.number_parser import parse_amount

logger = get_logger(__name__)

TEXT_FIELDS = (
    "counterparty_name",
    "counterparty_iban",
    "variable_symbol",
    "constant_symbol",
    "specific_symbol",
    "description",
    "reference",
)

TRANSACTION_SCHEMA = {
    "date": pl.Utf8,
    "amount": pl.Float64,
    "direction": pl.Utf8,
    **{name: pl.Utf8 for name in TEXT_FIELDS},
}

MSG_EMPTY_FILE = "empty file"
MSG_NO_DATA_ROWS = "file must contain a header row and at least one data row"
MSG_NO_DATE_COLUMN = "could not find a date column"
MSG_NO_AMOUNT_COLUMN = "could not find an amount column"
MSG_BAD_AMOUNT = "could not read amount"


@dataclass(frozen=True)
class ParsedTransaction:
    """One normalized statement row. Positive amounts are incoming."""
    date: str
    amount: Decimal
    direction: str
    counterparty_name: str = ""
    counterparty_iban: str = ""
    variable_symbol: str = ""
    constant_symbol: str = ""
    specific_symbol: str = ""
    description: str = ""
    reference: str = ""
    raw_row: dict = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict:
        record = {"date": self.date, "amount": self.amount, "direction": self.direction}
        for name in TEXT_FIELDS:
            record[name] = getattr(self, name)
        return record


@dataclass(frozen=True)
class RowDiagnostic:
    row_index: int
    message: str


@dataclass
class ParseOutcome:
    transactions: list[ParsedTransaction] = field(default_factory=list)
    diagnostics: list[RowDiagnostic] = field(default_factory=list)
    total_data_rows: int = 0

    @property
    def is_rejected(self) -> bool:
        """True if the whole file was rejected."""
        return any(d.row_index == 0 for d in self.diagnostics)

    def to_frame(self) -> pl.DataFrame:
        """Transactions as a DataFrame with a fixed schema (also when empty)."""
        records = [{**t.to_dict(), "amount": float(t.amount)} for t in self.transactions]
        return pl.DataFrame(records, schema=TRANSACTION_SCHEMA)

    def diagnostics_frame(self) -> pl.DataFrame:
        return pl.DataFrame(
            [{"row_index": d.row_index, "message": d.message} for d in self.diagnostics],
            schema={"row_index": pl.Int64, "message": pl.Utf8},
        )


def _build_row(headers: list[str], fields: list[str]) -> dict[str, str]:
    """Header -> value lookup. Missing trailing fields are ''; the first duplicate header wins."""
    row = {}
    for i, header in enumerate(headers):
        if header not in row:
            row[header] = fields[i] if i < len(fields) else ""
    return row


def _resolve_amount(row: dict, mapping: ColumnMapping, use_amount: bool) -> Decimal | None:
    if use_amount:
        return parse_amount(mapping.value(row, "amount"))

    credit = parse_amount(mapping.value(row, "credit"))
    debit = parse_amount(mapping.value(row, "debit"))
    if credit is not None and credit > 0:
        return credit
    if debit is not None and debit > 0:
        return -debit
    return None


def assemble_row(
    row_index: int,
    fields: list[str],
    headers: list[str],
    mapping: ColumnMapping,
    use_amount: bool,
) -> ParsedTransaction | RowDiagnostic:
    """Turn one tokenized data row into a transaction or a diagnostic.

    ``use_amount`` selects the unified amount column over the credit/debit pair.
    """
    row = _build_row(headers, fields)

    date_raw = mapping.value(row, "date")
    date_iso = parse_date(date_raw)
    if date_iso is None:
        return RowDiagnostic(row_index, f'invalid date format: "{date_raw}"')

    amount = _resolve_amount(row, mapping, use_amount)
    if amount is None:
        return RowDiagnostic(row_index, MSG_BAD_AMOUNT)

    return ParsedTransaction(
        date=date_iso,
        amount=amount,
        direction="credit" if amount >= 0 else "debit",
        raw_row=row,
        **{name: mapping.value(row, name) for name in TEXT_FIELDS},
    )


def _rejected(message: str) -> ParseOutcome:
    logger.warning("Statement rejected: %s", message)
    return ParseOutcome(diagnostics=[RowDiagnostic(0, message)])


def parse(raw_text: str, mapping: ColumnMapping | None = None) -> ParseOutcome:
    """Parse statement text, optionally with a bank preset mapping.

    Without a mapping, columns are detected from the header row. With one,
    its fields are used as given and only the unset fields are detected.
    """
    text = normalize_newlines(raw_text or "")
    if not text.strip():
        return _rejected(MSG_EMPTY_FILE)

    lines = split_lines(text)
    if len(lines) < 2:
        return _rejected(MSG_NO_DATA_ROWS)

    delimiter = detect_delimiter(text)
    headers = parse_line(lines[0], delimiter)
    effective = resolve_mapping(headers, mapping)

    if not has_column(effective, "date", headers):
        return _rejected(MSG_NO_DATE_COLUMN)

    use_amount = has_column(effective, "amount", headers)
    has_pair = has_column(effective, "credit", headers) or has_column(effective, "debit", headers)
    if not use_amount and not has_pair:
        return _rejected(MSG_NO_AMOUNT_COLUMN)

    outcome = ParseOutcome(total_data_rows=len(lines) - 1)

    for row_index, line in enumerate(lines[1:], start=1):
        result = assemble_row(row_index, parse_line(line, delimiter), headers, effective, use_amount)
        if isinstance(result, RowDiagnostic):
            logger.debug("Row %d skipped: %s", row_index, result.message)
            outcome.diagnostics.append(result)
        else:
            outcome.transactions.append(result)

    return outcome
