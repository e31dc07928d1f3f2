"""Hotel-wide settings read from the environment.

Values are read on every call so tests can patch os.environ.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from innkeep.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEZONE = "Africa/Dar_es_Salaam"
DEFAULT_MAX_RANGE_DAYS = 90


@dataclass(frozen=True)
class HotelSettings:
    """Runtime settings.

    Attributes:
        timezone: IANA name of the hotel's local timezone; day boundaries
                  for the board, reports and audit are taken in this zone.
        max_range_days: Largest date window accepted by trend endpoints.
    """

    timezone: str = DEFAULT_TIMEZONE
    max_range_days: int = DEFAULT_MAX_RANGE_DAYS

    @property
    def tz(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(
                "Invalid timezone %s, falling back to %s",
                self.timezone,
                DEFAULT_TIMEZONE,
            )
            return ZoneInfo(DEFAULT_TIMEZONE)


def load_settings() -> HotelSettings:
    """Build settings from HOTEL_TIMEZONE and MAX_RANGE_DAYS."""
    raw_range = os.environ.get("MAX_RANGE_DAYS", "")
    try:
        max_range_days = int(raw_range) if raw_range else DEFAULT_MAX_RANGE_DAYS
    except ValueError:
        logger.warning("Invalid MAX_RANGE_DAYS %r, using %d", raw_range, DEFAULT_MAX_RANGE_DAYS)
        max_range_days = DEFAULT_MAX_RANGE_DAYS

    return HotelSettings(
        timezone=os.environ.get("HOTEL_TIMEZONE") or DEFAULT_TIMEZONE,
        max_range_days=max_range_days,
    )
