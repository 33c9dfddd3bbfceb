"""Parse regional statement dates into ISO 'YYYY-MM-DD'."""

import re
from datetime import date

# Order matters: the ISO form must be tried before day-month-year
_ISO_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_DMY_RE = re.compile(r"^(\d{1,2})[./](\d{1,2})[./](\d{4})$")
_DMY_SHORT_RE = re.compile(r"^(\d{1,2})[./](\d{1,2})[./](\d{2})$")

_CENTURY_PIVOT = 50


def _iso(year: int, month: int, day: int) -> str | None:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def parse_date(s: str) -> str | None:
    """Parse '2025-03-15', '15.03.2025', '15/3/2025' or '15.3.25' into '2025-03-15'.

    Two-digit years 00-49 are 20xx, 50-99 are 19xx. Returns None if the
    string has another shape or names a day that does not exist.
    """
    if not s:
        return None
    s = s.strip()

    m = _ISO_RE.match(s)
    if m:
        return _iso(int(m.group(1)), int(m.group(2)), int(m.group(3)))

    m = _DMY_RE.match(s)
    if m:
        return _iso(int(m.group(3)), int(m.group(2)), int(m.group(1)))

    m = _DMY_SHORT_RE.match(s)
    if m:
        short = int(m.group(3))
        year = 1900 + short if short >= _CENTURY_PIVOT else 2000 + short
        return _iso(year, int(m.group(2)), int(m.group(1)))

    return None
