"""Datetime utilities for calendar-day comparisons."""

from datetime import datetime, date
from typing import Optional


DATE_FORMATS = [
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y/%m/%d",
]


def parse_date(date_str: str) -> Optional[date]:
    """
    Parse date string in various formats.

    ISO datetimes ("2024-03-01T10:00:00Z") are accepted as well and reduced
    to their calendar day.

    Args:
        date_str: Date string to parse

    Returns:
        Parsed date or None if invalid
    """
    text = date_str.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    return None


def as_date(value: datetime | date | str | None) -> Optional[date]:
    """Reduce a datetime, date or date string to a calendar day."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_date(value)
    return None


def days_inclusive(start: datetime | date | None, end: datetime | date | None) -> int:
    """
    Count calendar days from start to end, both ends included.

    Args:
        start: First day
        end: Last day

    Returns:
        Number of days, or 0 if either bound is missing
    """
    start_day = as_date(start)
    end_day = as_date(end)
    if start_day is None or end_day is None:
        return 0
    return (end_day - start_day).days + 1


def in_date_range(
    value: datetime | date | str | None,
    start: datetime | date | str | None = None,
    end: datetime | date | str | None = None,
) -> bool:
    """
    Check whether a value falls inside an inclusive calendar-day range.

    With neither bound set every value passes, including a missing one.
    With any bound set a missing or unparseable value fails.

    Args:
        value: Date to test
        start: Optional first day of the range
        end: Optional last day of the range

    Returns:
        True if the value is within range
    """
    start_day = as_date(start)
    end_day = as_date(end)
    if start_day is None and end_day is None:
        return True

    day = as_date(value)
    if day is None:
        return False
    if start_day is not None and day < start_day:
        return False
    if end_day is not None and day > end_day:
        return False
    return True
