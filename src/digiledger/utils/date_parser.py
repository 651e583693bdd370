"""Date parsing for transaction dates and list filters."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser

_RELATIVE_DAYS = {"today": 0, "yesterday": -1, "tomorrow": 1}


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Accepts ISO dates ("2024-01-15"), written dates ("January 15, 2024")
    and the words "today", "yesterday" and "tomorrow". Ambiguous numeric
    dates are read day first when the first number cannot be a month.

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    if text in _RELATIVE_DAYS:
        return date.today() + timedelta(days=_RELATIVE_DAYS[text])

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str.strip()}': {e}")


def parse_date_range(
    start: Optional[str], end: Optional[str]
) -> tuple[Optional[date], Optional[date]]:
    """Parse optional start and end filters.

    Raises:
        ValueError: If either date is invalid or start is after end
    """
    start_date = parse_date(start) if start else None
    end_date = parse_date(end) if end else None
    if start_date and end_date and start_date > end_date:
        raise ValueError(f"Start date {start_date} is after end date {end_date}")
    return start_date, end_date
