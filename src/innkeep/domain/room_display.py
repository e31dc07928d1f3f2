"""Room board status resolution.

Each room shows exactly one of five statuses for a day, plus a dirty flag
that only appears on vacant and due-out rooms. Rules, first match wins:

    1. maintenance block booking             -> blocked   "Blocked"
    2. stay-over booking                      -> occupied  "Stay Over"
    3. checked-in booking, departs today and
       room not yet clean                     -> due_out   "Due Out"
       checked-in booking otherwise           -> occupied  "Occupied"
    4. confirmed or pending booking           -> reserved  "Reserved"
    5. no booking, maintenance window active  -> blocked   "Maintenance"
    6. no booking, housekeeping dirty         -> vacant    "Dirty" (dirty flag)
    7. otherwise                              -> vacant    "Vacant"
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable, Sequence

from innkeep.domain.bookings import Booking, BookingStatus, find_active_booking
from innkeep.domain.room_status import (
    HousekeepingStatus,
    Room,
    RoomStatus,
    index_statuses,
    is_maintenance_active,
)


class DisplayStatus(str, Enum):
    VACANT = "vacant"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    BLOCKED = "blocked"
    DUE_OUT = "due_out"


STATUS_FILTERS = frozenset({"all", "dirty", *(s.value for s in DisplayStatus)})


@dataclass(frozen=True)
class StatusResolution:
    status: DisplayStatus
    label: str
    dirty: bool = False


@dataclass(frozen=True)
class RoomDisplay:
    room_name: str
    suite_type: str | None
    status: DisplayStatus
    label: str
    dirty: bool
    housekeeping: str
    booking_id: str | None = None
    guest_name: str | None = None
    check_in: date | None = None
    check_out: date | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        data["check_in"] = self.check_in.isoformat() if self.check_in else None
        data["check_out"] = self.check_out.isoformat() if self.check_out else None
        return data


def resolve_status(
    booking: Booking | None,
    maintenance_active: bool,
    housekeeping: HousekeepingStatus | None,
    day: date,
) -> StatusResolution:
    """Apply the board priority rules to one room for one day.

    Args:
        booking: The booking holding the room today, if any.
        maintenance_active: Whether the room's maintenance window covers day.
        housekeeping: Housekeeping status; None means clean.
        day: Target calendar day.
    """
    housekeeping = housekeeping or HousekeepingStatus.CLEAN
    is_dirty = housekeeping == HousekeepingStatus.DIRTY

    if booking is not None:
        if booking.status == BookingStatus.MAINTENANCE:
            return StatusResolution(DisplayStatus.BLOCKED, "Blocked")
        if booking.status == BookingStatus.STAY_OVER:
            return StatusResolution(DisplayStatus.OCCUPIED, "Stay Over")
        if booking.status == BookingStatus.CHECKED_IN:
            if booking.check_out == day and housekeeping != HousekeepingStatus.CLEAN:
                return StatusResolution(DisplayStatus.DUE_OUT, "Due Out", dirty=is_dirty)
            return StatusResolution(DisplayStatus.OCCUPIED, "Occupied")
        if booking.status in (BookingStatus.CONFIRMED, BookingStatus.PENDING):
            return StatusResolution(DisplayStatus.RESERVED, "Reserved")

    if maintenance_active:
        return StatusResolution(DisplayStatus.BLOCKED, "Maintenance")
    if is_dirty:
        return StatusResolution(DisplayStatus.VACANT, "Dirty", dirty=True)
    return StatusResolution(DisplayStatus.VACANT, "Vacant")


def resolve_room(
    room: Room,
    room_status: RoomStatus | None,
    bookings: Iterable[Booking],
    day: date,
) -> RoomDisplay:
    booking = find_active_booking(day, room.room_name, bookings)
    housekeeping = room_status.housekeeping if room_status else HousekeepingStatus.CLEAN
    resolution = resolve_status(
        booking,
        is_maintenance_active(room_status, day),
        housekeeping,
        day,
    )
    return RoomDisplay(
        room_name=room.room_name,
        suite_type=room.suite_type or (room_status.suite_type if room_status else None),
        status=resolution.status,
        label=resolution.label,
        dirty=resolution.dirty,
        housekeeping=housekeeping.value,
        booking_id=booking.id if booking else None,
        guest_name=booking.guest_name if booking else None,
        check_in=booking.check_in if booking else None,
        check_out=booking.check_out if booking else None,
    )


def matches_filter(display: RoomDisplay, status_filter: str | None) -> bool:
    """Board filter semantics: "occupied" includes due-out rooms."""
    if status_filter is None or status_filter == "all":
        return True
    if status_filter == "dirty":
        return display.dirty
    if status_filter == DisplayStatus.OCCUPIED.value:
        return display.status in (DisplayStatus.OCCUPIED, DisplayStatus.DUE_OUT)
    return display.status.value == status_filter


def build_room_board(
    rooms: Sequence[Room],
    statuses: Sequence[RoomStatus],
    bookings: Sequence[Booking],
    day: date,
    *,
    status_filter: str | None = None,
    suite_type: str | None = None,
) -> list[RoomDisplay]:
    """Resolve every active room for day and apply the board filters.

    Raises:
        ValueError: Unknown status_filter.
    """
    if status_filter is not None and status_filter not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status_filter}")

    by_name = index_statuses(list(statuses))
    board: list[RoomDisplay] = []
    for room in rooms:
        if not room.is_active:
            continue
        if suite_type and suite_type != "all" and room.suite_type != suite_type:
            continue
        display = resolve_room(room, by_name.get(room.room_name), bookings, day)
        if matches_filter(display, status_filter):
            board.append(display)
    return board


def summarize_board(displays: Iterable[RoomDisplay]) -> dict[str, int]:
    """Count rooms per display status, plus dirty and total."""
    counts = {status.value: 0 for status in DisplayStatus}
    counts["dirty"] = 0
    counts["total"] = 0
    for display in displays:
        counts[display.status.value] += 1
        counts["total"] += 1
        if display.dirty:
            counts["dirty"] += 1
    return counts
