"""Time utilities for consistent timestamp handling."""

from datetime import date, datetime, timezone

from .settings import load_settings


def utc_now() -> datetime:
    """Return current UTC timestamp (timezone-aware)."""
    return datetime.now(timezone.utc)


def hotel_today() -> date:
    """Return today's date in the hotel's local timezone."""
    return utc_now().astimezone(load_settings().tz).date()
