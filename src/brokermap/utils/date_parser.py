"""Date parsing utilities."""

from datetime import date
from dateutil import parser as date_parser


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Accepts ISO-like values such as "2024-01-15" or "2024-01-15T09:30:00Z".

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip()
    if not date_str:
        raise ValueError("Empty date string")

    try:
        dt = date_parser.isoparse(date_str)
    except (ValueError, OverflowError):
        try:
            dt = date_parser.parse(date_str)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Could not parse date '{date_str}': {e}")
    return dt.date()
