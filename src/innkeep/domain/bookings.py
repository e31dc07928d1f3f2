"""Booking model and the per-room booking matcher used by the room board.

A booking occupies its rooms on [check_in, check_out). One exception: a
checked-in booking still matches on its check_out day so the board can show
the guest as present and due out rather than the room as vacant.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from innkeep.domain.dates import in_range, normalize_day
from innkeep.domain.transitions import check_transition

logger = logging.getLogger(__name__)


class BookingNotFoundError(Exception):
    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__(f"Booking '{booking_id}' not found")


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    STAY_OVER = "stay_over"
    CHECKED_OUT = "checked_out"
    MAINTENANCE = "maintenance"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


# Bookings in these states never hold a room.
INACTIVE_STATUSES = frozenset(
    {BookingStatus.CANCELLED, BookingStatus.NO_SHOW, BookingStatus.CHECKED_OUT}
)

BOOKING_TRANSITIONS: dict[str, frozenset[str]] = {
    BookingStatus.PENDING.value: frozenset({"confirmed", "cancelled"}),
    BookingStatus.CONFIRMED.value: frozenset({"checked_in", "cancelled", "no_show"}),
    BookingStatus.CHECKED_IN.value: frozenset({"stay_over", "checked_out"}),
    BookingStatus.STAY_OVER.value: frozenset({"checked_in", "checked_out"}),
    BookingStatus.MAINTENANCE.value: frozenset({"cancelled"}),
}


class BookedRoom(BaseModel):
    """One room line on a booking."""

    model_config = ConfigDict(extra="ignore")

    type: str
    allocated_room: str | None = None
    suite_type: str | None = None
    price: float = 0


class Booking(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    check_in: date | None = None
    check_out: date | None = None
    status: BookingStatus
    rooms: list[BookedRoom] = Field(default_factory=list)
    adults: int = 0
    children: int = 0
    guest_name: str | None = None

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def _lenient_date(cls, value: Any) -> date | None:
        # An unreadable date becomes None, which never matches a day.
        return normalize_day(value)

    @property
    def room_refs(self) -> set[str]:
        """Room names and room types this booking occupies."""
        refs: set[str] = set()
        for room in self.rooms:
            refs.add(room.type)
            if room.allocated_room:
                refs.add(room.allocated_room)
        return refs

    @property
    def nightly_rate(self) -> float:
        return sum(room.price or 0 for room in self.rooms)

    def occupies(self, day: date) -> bool:
        """True if the stay interval contains day (half-open)."""
        return in_range(day, self.check_in, self.check_out)

    def matches_day(self, day: date) -> bool:
        """Interval containment plus the same-day checkout exception."""
        if self.occupies(day):
            return True
        return (
            self.status == BookingStatus.CHECKED_IN
            and self.check_out is not None
            and self.check_out == day
        )


def find_active_booking(
    day: date,
    room_name: str,
    bookings: Iterable[Booking],
) -> Booking | None:
    """Find the booking holding room_name on day.

    Skips cancelled, no-show and checked-out bookings and bookings that do
    not reference the room. Rooms are never double booked, so at most one
    booking should match; if several do, the first in iteration order wins
    and the conflict is logged.

    Args:
        day: Target calendar day.
        room_name: Physical room name (matched against allocated room and type).
        bookings: Already loaded bookings, in any order.

    Returns:
        The matching booking, or None.
    """
    match: Booking | None = None
    for booking in bookings:
        if booking.status in INACTIVE_STATUSES:
            continue
        if room_name not in booking.room_refs:
            continue
        if not booking.matches_day(day):
            continue
        if match is None:
            match = booking
            continue
        logger.warning(
            "overlapping bookings for room",
            extra={
                "extra_fields": {
                    "room_name": room_name,
                    "date": day.isoformat(),
                    "kept_booking_id": match.id,
                    "ignored_booking_id": booking.id,
                }
            },
        )
    return match


def transition_booking(booking: Booking, new_status: BookingStatus | str) -> Booking:
    """Return a copy of booking moved to new_status.

    Raises:
        InvalidTransitionError: The lifecycle does not allow the move.
    """
    target = BookingStatus(new_status)
    check_transition(
        BOOKING_TRANSITIONS,
        kind="booking",
        current=booking.status.value,
        requested=target.value,
    )
    return booking.model_copy(update={"status": target})
