"""Column mappings for the export formats of known banks."""

from bank_import.ingest.column_mapper import ColumnMapping

BANK_PRESETS: dict[str, ColumnMapping] = {
    "tatra_banka": ColumnMapping(
        date="Dátum",
        amount="Suma",
        counterparty_name="Názov protiúčtu",
        counterparty_iban="Protiúčet",
        variable_symbol="Variabilný symbol",
        constant_symbol="Konštantný symbol",
        specific_symbol="Špecifický symbol",
        description="Popis transakcie",
        reference="Referencia",
    ),
    "vub": ColumnMapping(
        date="Dátum zaúčtovania",
        amount="Suma",
        counterparty_name="Meno protistrany",
        counterparty_iban="IBAN protistrany",
        variable_symbol="VS",
        constant_symbol="KS",
        specific_symbol="SS",
        description="Popis",
        reference="Referencia platby",
    ),
    "slsp": ColumnMapping(
        date="Dátum",
        amount="Čiastka",
        counterparty_name="Názov účtu príjemcu",
        counterparty_iban="Číslo účtu príjemcu",
        variable_symbol="Variabilný symbol",
        constant_symbol="Konštantný symbol",
        specific_symbol="Špecifický symbol",
        description="Správa pre príjemcu",
        reference="Referencia",
    ),
}


def preset_names() -> list[str]:
    return sorted(BANK_PRESETS)


def get_preset(name: str) -> ColumnMapping:
    """Look up a preset by name; unknown names raise ValueError."""
    try:
        return BANK_PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown bank preset {name!r}. Known presets: {', '.join(preset_names())}"
        ) from None
