"""Calendar-day helpers shared by the room board, reports and night audit.

All occupancy comparisons use half-open intervals: a stay ``[check_in,
check_out)`` occupies the room on check_in and every night before
check_out, but not on check_out itself.

Bad input never raises here. A value that cannot be read as a date
normalizes to None, and None never matches any interval, so a single bad
record cannot break a whole board or report.
"""

from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from typing import Union

DateLike = Union[date, datetime, str, None]


def normalize_day(value: DateLike, tz: tzinfo | None = None) -> date | None:
    """Truncate a date-like value to its calendar day.

    Args:
        value: date, datetime or ISO-8601 string ("2025-06-01",
            "2025-06-01T14:30:00+03:00").
        tz: Hotel timezone. Aware datetimes are converted to it before
            truncation; naive ones are taken as already local.

    Returns:
        The calendar day, or None if the value is missing or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return normalize_day(datetime.fromisoformat(text.replace("Z", "+00:00")), tz)
        except ValueError:
            return None
    return None


def in_range(day: date | None, start: date | None, end: date | None) -> bool:
    """Half-open containment test: start <= day < end."""
    if day is None or start is None or end is None:
        return False
    return start <= day < end


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Return (start, end) datetimes covering the whole day, both inclusive."""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)
