"""Parse locale-formatted statement amounts like '1 234,56 €' or '1,234.56' into Decimal."""

import re
import unicodedata
from decimal import Decimal

_ISO_CODE_RE = re.compile(r"^[A-Z]{3}|[A-Z]{3}$")
_NUMBER_RE = re.compile(r"^[+-]?\d+(?:\.\d+)?$")


def _strip_decoration(s: str) -> str:
    """Drop currency symbols, ISO currency codes and all whitespace (NBSP included)."""
    s = s.strip()
    s = _ISO_CODE_RE.sub("", s)
    return "".join(
        ch for ch in s
        if not ch.isspace() and unicodedata.category(ch) != "Sc"
    )


def parse_amount(s: str) -> Decimal | None:
    """Parse an amount string into a signed Decimal.

    When both '.' and ',' appear, whichever comes last is the decimal
    separator and the other is a thousands separator. A lone comma is the
    decimal separator. Returns None if the string cannot be parsed,
    including unsupported separators such as apostrophes.
    """
    if not s:
        return None
    cleaned = _strip_decoration(s)

    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            # 1.234,56
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            # 1,234.56
            cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        if cleaned.count(",") > 1:
            return None
        cleaned = cleaned.replace(",", ".")

    if not _NUMBER_RE.match(cleaned):
        return None
    return Decimal(cleaned)
