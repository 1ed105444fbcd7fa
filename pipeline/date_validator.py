"""
Calendar-correct parsing of vendor date cells.

Vendor extracts write dates as day/month/year with one or two digit day and
month and a one to four digit year (15/03/24, 5/3/2024). ISO calendar dates
(2024-03-15) are accepted as well.

Two-digit years are always read as 20YY. Malformed or impossible dates
return None; nothing here raises for bad input.
"""
import re
from datetime import date
from typing import Optional

CENTURY_BASE = 2000          # 1-2 digit years are expanded to CENTURY_BASE + YY

_DMY_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{1,4})$", re.ASCII)
_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Proleptic Gregorian leap-year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(month: int, year: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def expand_year(year_text: str) -> int:
    """
    Convert the year component to a full year.

    One or two digits -> 20YY. Three or four digits are taken as written.
    """
    year = int(year_text)
    if len(year_text) <= 2:
        return CENTURY_BASE + year
    return year


def _build_date(year: int, month: int, day: int) -> Optional[date]:
    if year < 1 or not 1 <= month <= 12:
        return None
    if not 1 <= day <= days_in_month(month, year):
        return None
    return date(year, month, day)


def parse_date(text: Optional[str]) -> Optional[date]:
    """
    Parse a D/M/Y (or ISO YYYY-MM-DD) string into a date.

    Returns None for empty, malformed or calendar-invalid input, e.g.
    "00/00/00", "32/13/2024" or "29/02/2023".
    """
    if not text:
        return None
    value = text.strip()
    if not value:
        return None

    m = _DMY_RE.match(value)
    if m:
        day, month, year_text = m.groups()
        return _build_date(expand_year(year_text), int(month), int(day))

    m = _ISO_RE.match(value)
    if m:
        year, month, day = (int(g) for g in m.groups())
        return _build_date(year, month, day)

    return None
