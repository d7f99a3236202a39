"""
Locale-agnostic date parsing for statement rows.

Accepts ISO-like and slash-delimited dates. Anything else falls back to the
injected clock so one bad cell never fails the whole file.
"""

from datetime import date, datetime
from typing import Callable, Optional

Clock = Callable[[], date]

DATE_FORMATS = [
    "%Y-%m-%d",      # 2024-12-01
    "%Y/%m/%d",      # 2024/12/01
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y",      # 12/01/2024 (US exports)
    "%m/%d/%y",      # 12/01/24
    "%m-%d-%Y",      # 12-01-2024
    "%d %b %Y",      # 01 Dec 2024
    "%b %d, %Y",     # Dec 01, 2024
    "%B %d, %Y",     # December 01, 2024
]


def try_parse_date(raw: Optional[str]) -> Optional[date]:
    """Parse a date string, returning None if no known format matches."""
    if raw is None:
        return None

    date_str = str(raw).strip()
    if not date_str:
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def parse_date(raw: Optional[str], today: Optional[Clock] = None) -> date:
    """Parse a date string, defaulting to today() when it cannot be parsed."""
    parsed = try_parse_date(raw)
    if parsed is not None:
        return parsed
    return (today or date.today)()
