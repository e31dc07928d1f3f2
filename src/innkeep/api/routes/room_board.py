"""Room board endpoint for the front desk.

GET /room-board?target_date=&status=&suite_type=

Returns every active room with its display status for the day, plus a
summary. The status filter only narrows the rooms list; the summary
covers every room of the selected suite type.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Query

from innkeep.domain.bookings import Booking
from innkeep.domain.room_display import STATUS_FILTERS, build_room_board, matches_filter, summarize_board
from innkeep.domain.room_status import Room, RoomStatus
from innkeep.infra.time import hotel_today

router = APIRouter(prefix="/room-board", tags=["room-board"])


def _load_board_inputs(target_date: date) -> tuple[list[Room], list[RoomStatus], list[Booking]]:
    """Load rooms, room statuses and the bookings touching target_date."""
    from innkeep.infra.db import txn
    from innkeep.infra.repositories.bookings_repository import list_bookings_touching
    from innkeep.infra.repositories.room_status_repository import list_room_statuses
    from innkeep.infra.repositories.rooms_repository import list_rooms

    with txn() as cur:
        rooms = list_rooms(cur)
        statuses = list_room_statuses(cur)
        bookings = list_bookings_touching(cur, target_date, target_date)
    return rooms, statuses, bookings


@router.get("")
def get_room_board(
    target_date: date | None = Query(None, description="Date (YYYY-MM-DD), defaults to today"),
    status: str | None = Query(None, description="all, vacant, occupied, reserved, blocked, due_out, dirty"),
    suite_type: str | None = Query(None, description="Suite type filter, or all"),
) -> dict:
    """Get the room board for a day.

    "occupied" also returns due-out rooms; "dirty" returns rooms carrying
    the dirty flag.
    """
    if status is not None and status not in STATUS_FILTERS:
        raise HTTPException(
            status_code=422,
            detail=f"status must be one of {sorted(STATUS_FILTERS)}",
        )

    effective_date = target_date or hotel_today()
    rooms, statuses, bookings = _load_board_inputs(effective_date)

    board = build_room_board(rooms, statuses, bookings, effective_date, suite_type=suite_type)
    return {
        "date": effective_date.isoformat(),
        "summary": summarize_board(board),
        "rooms": [display.to_dict() for display in board if matches_filter(display, status)],
    }
