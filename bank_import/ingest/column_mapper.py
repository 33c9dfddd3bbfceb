"""Column mapping between raw statement headers and semantic transaction fields.

A mapping is either a bank preset (exact header names for a known export
format) or synthesized from the header row by synonym matching. Synonyms are
tried in priority order per field and the first matching header wins.
"""

from dataclasses import dataclass, fields, replace

from bank_import.ingest.normalizer import normalize_header

SEMANTIC_FIELDS = (
    "date",
    "amount",
    "credit",
    "debit",
    "counterparty_name",
    "counterparty_iban",
    "variable_symbol",
    "constant_symbol",
    "specific_symbol",
    "description",
    "reference",
)

# Ordered synonyms per field, matched against normalized headers by equality or substring
COLUMN_VARIANTS: dict[str, tuple[str, ...]] = {
    "date": ("datum", "date", "dátum zaúčtovania", "dátum spracovania", "dátum",
             "datum uctovani", "datum zauctovani"),
    "amount": ("suma", "amount", "čiastka", "castka", "ciastka", "celková suma"),
    "credit": ("kredit", "credit", "príjem", "prijem", "má dať"),
    "debit": ("debet", "debit", "výdaj", "vydaj", "dal"),
    "counterparty_name": ("nazov protiuctu", "meno protistrany", "nazov uctu prijemcu",
                          "protiucet nazov", "název protiúčtu", "meno", "counterparty"),
    "counterparty_iban": ("protiucet", "iban protistrany", "cislo uctu prijemcu", "iban",
                          "protiúčet", "číslo účtu"),
    "variable_symbol": ("variabilny symbol", "variabilný symbol", "vs", "variable symbol"),
    "constant_symbol": ("konstantny symbol", "konštantný symbol", "ks", "constant symbol"),
    "specific_symbol": ("specificky symbol", "špecifický symbol", "ss", "specific symbol"),
    "description": ("popis", "popis transakcie", "sprava pre prijemcu", "sprava", "description",
                    "poznámka", "poznamka", "správa"),
    "reference": ("referencia", "reference", "referencia platby", "ref"),
}


@dataclass(frozen=True)
class ColumnMapping:
    """Maps each semantic field to the raw header that supplies it, if any."""
    date: str | None = None
    amount: str | None = None
    credit: str | None = None
    debit: str | None = None
    counterparty_name: str | None = None
    counterparty_iban: str | None = None
    variable_symbol: str | None = None
    constant_symbol: str | None = None
    specific_symbol: str | None = None
    description: str | None = None
    reference: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ColumnMapping":
        """Build a mapping from a plain dict, rejecting unknown field names."""
        unknown = sorted(set(data) - set(SEMANTIC_FIELDS))
        if unknown:
            raise ValueError(f"Unknown mapping fields: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if v})

    def get(self, field: str) -> str | None:
        if field not in SEMANTIC_FIELDS:
            raise KeyError(field)
        return getattr(self, field)

    def items(self) -> list[tuple[str, str]]:
        """(field, header) pairs for the fields that are mapped."""
        return [(f.name, getattr(self, f.name)) for f in fields(self) if getattr(self, f.name)]

    def merged_with(self, fallback: "ColumnMapping") -> "ColumnMapping":
        """Fill unmapped fields from ``fallback``; fields already set are kept."""
        updates = {name: header for name, header in fallback.items() if self.get(name) is None}
        return replace(self, **updates)

    def value(self, row: dict, field: str) -> str:
        """Raw value of ``field`` in a header -> value row, '' when unavailable."""
        header = self.get(field)
        if header is None:
            return ""
        return row.get(header, "")


def auto_detect_mapping(headers: list[str]) -> ColumnMapping:
    """Synthesize a mapping by matching headers against the synonym table."""
    normalized = [normalize_header(h) for h in headers]
    found = {}

    for field in SEMANTIC_FIELDS:
        for variant in COLUMN_VARIANTS[field]:
            key = normalize_header(variant)
            match = next((i for i, h in enumerate(normalized) if h == key or key in h), None)
            if match is not None:
                found[field] = headers[match]
                break

    return ColumnMapping(**found)


def resolve_mapping(headers: list[str], preset: ColumnMapping | None = None) -> ColumnMapping:
    """Effective mapping for a file.

    Preset fields are used verbatim; fields the preset leaves unset are
    auto-detected from the header row.
    """
    detected = auto_detect_mapping(headers)
    if preset is None:
        return detected
    return preset.merged_with(detected)


def has_column(mapping: ColumnMapping, field: str, headers: list[str]) -> bool:
    """True if ``field`` is mapped to a header that exists in the header row."""
    header = mapping.get(field)
    return header is not None and header in headers
