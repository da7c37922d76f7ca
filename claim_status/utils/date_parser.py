"""
Utility for light date parsing of dataset values.
Loss dates must be ISO calendar dates (2023-06-10); locale forms such as
10/06/2023 are ambiguous between day-first and month-first and are rejected.
Timestamps are normalized to UTC; naive values are taken to be UTC already.
"""

from datetime import date, datetime, timezone
from typing import Optional


def parse_date(text: str) -> Optional[date]:
    """
    Parse an ISO date-only string into a `date`.
    Returns None if the text is not an ISO calendar date.
    """
    if not text:
        return None

    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        return None


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
