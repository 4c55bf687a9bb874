"""Date helpers for the YYYY-MM-DD representation used when editing shows."""

from datetime import date, datetime
from typing import Union


def today_string() -> str:
    """Current date as YYYY-MM-DD."""
    return date.today().isoformat()


def to_date_string(value: Union[str, date, datetime]) -> str:
    """
    Reduce a date, datetime or ISO-8601 string to YYYY-MM-DD.

    The roster API stores full timestamps (e.g. "2024-03-01T00:00:00.000Z").
    Strings that don't parse are returned unchanged.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10]).isoformat()
    except ValueError:
        return text
