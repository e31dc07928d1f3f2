"""Front desk booking lifecycle actions.

POST /bookings/{booking_id}/actions/change-status

Moves a booking along its lifecycle (confirm, check in, stay over, check
out, cancel, no-show). Moves the lifecycle does not allow return 409.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Path
from pydantic import BaseModel, ConfigDict

from innkeep.domain.bookings import BookingNotFoundError, BookingStatus, transition_booking
from innkeep.domain.transitions import InvalidTransitionError
from innkeep.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


class ChangeStatusRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: BookingStatus


def _change_status(booking_id: str, status: BookingStatus) -> dict:
    from innkeep.infra.db import txn
    from innkeep.infra.repositories.bookings_repository import get_booking, update_booking_status

    try:
        with txn() as cur:
            current = get_booking(cur, booking_id, lock=True)
            updated = transition_booking(current, status)
            update_booking_status(cur, booking_id, updated.status.value)
    except BookingNotFoundError:
        raise HTTPException(status_code=404, detail="Booking not found")
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    logger.info(
        "booking status updated",
        extra={
            "extra_fields": {
                "booking_id": booking_id,
                "from_status": current.status.value,
                "to_status": updated.status.value,
            }
        },
    )
    return updated.model_dump(mode="json")


@router.post("/{booking_id}/actions/change-status")
def post_change_status(
    body: ChangeStatusRequest,
    booking_id: str = Path(..., description="Booking UUID"),
) -> dict:
    """Move a booking to a new lifecycle status."""
    return _change_status(booking_id, body.status)
