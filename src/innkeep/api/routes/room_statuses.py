"""Room status endpoints for housekeeping and maintenance.

GET   /room-statuses                                 → list with cleaning history
POST  /room-statuses/{room_name}/maintenance         → block a room
POST  /room-statuses/{room_name}/maintenance/complete → release a block
POST  /room-statuses/{room_name}/cleaning            → log a cleaning
PATCH /room-statuses/{room_name}/housekeeping        → set housekeeping status
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable

from fastapi import APIRouter, HTTPException, Path
from pydantic import BaseModel, ConfigDict

from innkeep.domain.room_status import (
    CleaningLogEntry,
    CleaningType,
    HousekeepingStatus,
    RoomStatus,
    RoomStatusNotFoundError,
    complete_maintenance,
    record_cleaning,
    set_housekeeping,
    start_maintenance,
)
from innkeep.domain.transitions import InvalidTransitionError
from innkeep.infra.time import utc_now
from innkeep.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/room-statuses", tags=["room-statuses"])


# ── Schemas ───────────────────────────────────────────────────────────────────


class StartMaintenanceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start_date: date | None = None
    end_date: date | None = None
    reason: str | None = None


class CleaningRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: CleaningType
    staff_name: str | None = None
    notes: str | None = None
    cleaned_at: datetime | None = None


class HousekeepingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    housekeeping_status: HousekeepingStatus


# ── Helpers ───────────────────────────────────────────────────────────────────


def _status_to_dict(room_status: RoomStatus) -> dict:
    return room_status.model_dump(mode="json")


def _list_statuses() -> list[dict]:
    from innkeep.infra.db import txn
    from innkeep.infra.repositories.room_status_repository import list_room_statuses

    with txn() as cur:
        statuses = list_room_statuses(cur, with_history=True)
    return [_status_to_dict(s) for s in statuses]


def _apply(
    room_name: str,
    change: Callable[[RoomStatus], RoomStatus],
    *,
    cleaning: CleaningLogEntry | None = None,
) -> dict:
    """Lock the room's status, apply change and persist the result.

    Domain errors are translated to HTTP errors: unknown room → 404,
    disallowed transition → 409, invalid dates → 422.
    """
    from innkeep.infra.db import txn
    from innkeep.infra.repositories.room_status_repository import (
        append_cleaning_entry,
        get_room_status,
        save_room_status,
    )

    try:
        with txn() as cur:
            current = get_room_status(cur, room_name, lock=True)
            updated = change(current)
            save_room_status(cur, updated)
            if cleaning is not None:
                append_cleaning_entry(cur, room_name, cleaning)
    except RoomStatusNotFoundError:
        raise HTTPException(status_code=404, detail="Room status not found")
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    logger.info(
        "room status updated",
        extra={
            "extra_fields": {
                "room_name": room_name,
                "from_status": current.status.value,
                "to_status": updated.status.value,
                "housekeeping_status": updated.housekeeping.value,
            }
        },
    )
    return _status_to_dict(updated)


# ── Routes ────────────────────────────────────────────────────────────────────


@router.get("")
def list_room_statuses() -> list[dict]:
    """List every room status record with its cleaning history."""
    return _list_statuses()


@router.post("/{room_name}/maintenance")
def post_start_maintenance(
    body: StartMaintenanceRequest,
    room_name: str = Path(..., description="Room name"),
) -> dict:
    """Block a room for maintenance.

    Without both dates the block stays active until completed.
    """
    return _apply(
        room_name,
        lambda current: start_maintenance(
            current,
            start_date=body.start_date,
            end_date=body.end_date,
            reason=body.reason,
        ),
    )


@router.post("/{room_name}/maintenance/complete")
def post_complete_maintenance(room_name: str = Path(..., description="Room name")) -> dict:
    """Release a maintenance block; the room comes back dirty."""
    return _apply(room_name, complete_maintenance)


@router.post("/{room_name}/cleaning", status_code=201)
def post_cleaning(
    body: CleaningRequest,
    room_name: str = Path(..., description="Room name"),
) -> dict:
    """Append a cleaning entry to the room's history."""
    entry = CleaningLogEntry(
        date=body.cleaned_at or utc_now(),
        type=body.type,
        staff_name=body.staff_name,
        notes=body.notes,
    )
    return _apply(room_name, lambda current: record_cleaning(current, entry), cleaning=entry)


@router.patch("/{room_name}/housekeeping")
def patch_housekeeping(
    body: HousekeepingRequest,
    room_name: str = Path(..., description="Room name"),
) -> dict:
    """Set the housekeeping status (clean, dirty, inspected, needs_attention)."""
    return _apply(room_name, lambda current: set_housekeeping(current, body.housekeeping_status))
