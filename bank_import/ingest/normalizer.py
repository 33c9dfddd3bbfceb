"""Header text normalization for column matching."""

import unicodedata


def normalize_header(text: str) -> str:
    """Lowercase, strip diacritics and surrounding whitespace.

    'Dátum zaúčtovania ' -> 'datum zauctovania'
    """
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.strip()
