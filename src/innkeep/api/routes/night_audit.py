"""Night audit read endpoints.

GET /night-audit/blockers what must be resolved before the audit runs
GET /night-audit/history  recent audit runs
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query

from innkeep.domain.night_audit import get_audit_blockers
from innkeep.infra.time import hotel_today

router = APIRouter(prefix="/night-audit", tags=["night-audit"])


def _get_blockers(default_date: date) -> dict:
    """Compute blockers for the current business date."""
    from innkeep.infra.db import txn
    from innkeep.infra.repositories.bookings_repository import list_bookings_touching
    from innkeep.infra.repositories.night_audit_repository import get_business_date
    from innkeep.infra.repositories.room_status_repository import list_room_statuses

    with txn() as cur:
        business_date = get_business_date(cur, default=default_date)
        bookings = list_bookings_touching(cur, business_date, business_date)
        statuses = list_room_statuses(cur)

    blockers = get_audit_blockers(business_date, bookings, statuses)
    return {"business_date": business_date.isoformat(), **blockers.to_dict()}


def _get_history(limit: int) -> list[dict]:
    from innkeep.infra.db import txn
    from innkeep.infra.repositories.night_audit_repository import list_audit_logs

    with txn() as cur:
        return list_audit_logs(cur, limit=limit)


@router.get("/blockers")
def get_blockers() -> dict:
    """Pending arrivals, pending departures and unclean rooms for the business date."""
    return _get_blockers(hotel_today())


@router.get("/history")
def get_history(
    limit: int = Query(30, ge=1, le=365, description="Number of audit runs to return"),
) -> dict:
    """Recent night audit runs, newest first."""
    return {"audits": _get_history(limit)}
