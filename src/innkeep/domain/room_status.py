"""Room metadata, per-room operational status and the maintenance window check.

Housekeeping cycle: dirty -> clean (cleaning logged) -> inspected.
Maintenance: available/cleaning -> maintenance -> available (dirty), with an
optional [start_date, end_date) window. A maintenance flag without both
dates stays active until maintenance is completed.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from innkeep.domain.dates import in_range, normalize_day
from innkeep.domain.transitions import InvalidTransitionError, check_transition


class RoomStatusNotFoundError(Exception):
    def __init__(self, room_name: str):
        self.room_name = room_name
        super().__init__(f"No status record for room '{room_name}'")


class OperationalStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    CLEANING = "cleaning"
    MAINTENANCE = "maintenance"
    RESERVED = "reserved"


class HousekeepingStatus(str, Enum):
    CLEAN = "clean"
    DIRTY = "dirty"
    INSPECTED = "inspected"
    NEEDS_ATTENTION = "needs_attention"


class CleaningType(str, Enum):
    CHECKOUT_CLEANING = "checkout_cleaning"
    STAYOVER_CLEANING = "stayover_cleaning"
    DEEP_CLEANING = "deep_cleaning"
    INSPECTION = "inspection"


# Housekeeping states that hold up the night audit.
UNCLEAN_STATUSES = frozenset({HousekeepingStatus.DIRTY, HousekeepingStatus.NEEDS_ATTENTION})

ROOM_STATUS_TRANSITIONS: dict[str, frozenset[str]] = {
    OperationalStatus.AVAILABLE.value: frozenset({"occupied", "cleaning", "maintenance", "reserved"}),
    OperationalStatus.RESERVED.value: frozenset({"available", "occupied", "maintenance"}),
    OperationalStatus.OCCUPIED.value: frozenset({"cleaning", "available"}),
    OperationalStatus.CLEANING.value: frozenset({"available", "maintenance"}),
    OperationalStatus.MAINTENANCE.value: frozenset({"available"}),
}


class Room(BaseModel):
    """Static room metadata."""

    model_config = ConfigDict(extra="ignore")

    room_name: str
    suite_type: str | None = None
    capacity: int = 2
    base_rate: float = 0
    is_active: bool = True


class MaintenanceWindow(BaseModel):
    start_date: date | None = None
    end_date: date | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _lenient_date(cls, value: Any) -> date | None:
        return normalize_day(value)

    @property
    def is_bounded(self) -> bool:
        return self.start_date is not None and self.end_date is not None


class CleaningLogEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    date: datetime
    type: CleaningType
    staff_name: str | None = None
    notes: str | None = None


class RoomStatus(BaseModel):
    """Mutable operational record, one per physical room."""

    model_config = ConfigDict(extra="ignore")

    room_name: str
    suite_type: str | None = None
    status: OperationalStatus = OperationalStatus.AVAILABLE
    housekeeping_status: HousekeepingStatus | None = None
    maintenance_window: MaintenanceWindow | None = None
    maintenance_reason: str | None = None
    cleaning_history: list[CleaningLogEntry] = Field(default_factory=list)

    @property
    def housekeeping(self) -> HousekeepingStatus:
        """Housekeeping status, defaulting to clean when never recorded."""
        return self.housekeeping_status or HousekeepingStatus.CLEAN


def index_statuses(statuses: list[RoomStatus]) -> dict[str, RoomStatus]:
    """Map room_name -> status record; the first record wins on duplicates."""
    indexed: dict[str, RoomStatus] = {}
    for status in statuses:
        indexed.setdefault(status.room_name, status)
    return indexed


def is_maintenance_active(room_status: RoomStatus | None, day: date) -> bool:
    """Whether the room is blocked for maintenance on day.

    Only rooms whose status is maintenance can be blocked. With both window
    dates set the block covers [start_date, end_date); otherwise the block
    is open ended.
    """
    if room_status is None or room_status.status != OperationalStatus.MAINTENANCE:
        return False
    window = room_status.maintenance_window
    if window is None or not window.is_bounded:
        return True
    return in_range(day, window.start_date, window.end_date)


def _move(room_status: RoomStatus, target: OperationalStatus, **changes: Any) -> RoomStatus:
    check_transition(
        ROOM_STATUS_TRANSITIONS,
        kind="room status",
        current=room_status.status.value,
        requested=target.value,
    )
    return room_status.model_copy(update={"status": target, **changes})


def start_maintenance(
    room_status: RoomStatus,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
    reason: str | None = None,
) -> RoomStatus:
    """Block a room for maintenance, optionally for [start_date, end_date).

    Raises:
        InvalidTransitionError: Room is occupied, or already in maintenance.
        ValueError: end_date is not after start_date.
    """
    if room_status.status == OperationalStatus.MAINTENANCE:
        raise InvalidTransitionError("room status", "maintenance", "maintenance")
    if start_date is not None and end_date is not None and end_date <= start_date:
        raise ValueError("end_date must be greater than start_date")
    return _move(
        room_status,
        OperationalStatus.MAINTENANCE,
        maintenance_window=MaintenanceWindow(start_date=start_date, end_date=end_date),
        maintenance_reason=reason,
    )


def complete_maintenance(room_status: RoomStatus) -> RoomStatus:
    """Clear a maintenance block; the room needs cleaning before sale."""
    if room_status.status != OperationalStatus.MAINTENANCE:
        raise InvalidTransitionError("room status", room_status.status.value, "available")
    return _move(
        room_status,
        OperationalStatus.AVAILABLE,
        housekeeping_status=HousekeepingStatus.DIRTY,
        maintenance_window=None,
        maintenance_reason=None,
    )


def record_cleaning(room_status: RoomStatus, entry: CleaningLogEntry) -> RoomStatus:
    """Append a cleaning log entry and update housekeeping accordingly.

    Inspections mark the room inspected. Any other cleaning marks it clean
    and releases a room that was in the cleaning state.
    """
    if room_status.status == OperationalStatus.MAINTENANCE:
        raise InvalidTransitionError("room status", "maintenance", "cleaning")
    history = [*room_status.cleaning_history, entry]
    if entry.type == CleaningType.INSPECTION:
        return room_status.model_copy(
            update={"cleaning_history": history, "housekeeping_status": HousekeepingStatus.INSPECTED}
        )
    changes: dict[str, Any] = {
        "cleaning_history": history,
        "housekeeping_status": HousekeepingStatus.CLEAN,
    }
    if room_status.status == OperationalStatus.CLEANING:
        return _move(room_status, OperationalStatus.AVAILABLE, **changes)
    return room_status.model_copy(update=changes)


def set_housekeeping(room_status: RoomStatus, housekeeping: HousekeepingStatus | str) -> RoomStatus:
    return room_status.model_copy(update={"housekeeping_status": HousekeepingStatus(housekeeping)})
