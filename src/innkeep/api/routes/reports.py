"""Reports endpoints for the back office.

GET /reports/daily  room, guest and revenue rollup for one day
GET /reports/trends daily income/expenses and audited occupancy
"""

from __future__ import annotations

from datetime import date, timedelta

from fastapi import APIRouter, HTTPException, Query

from innkeep.domain.bookings import Booking
from innkeep.domain.daily_report import (
    LedgerEntry,
    aggregate_daily_report,
    occupancy_trend,
    revenue_trend,
)
from innkeep.domain.dates import day_bounds
from innkeep.infra.settings import load_settings
from innkeep.infra.time import hotel_today

router = APIRouter(prefix="/reports", tags=["reports"])

DEFAULT_TREND_DAYS = 7


def _load_daily_inputs(target_date: date) -> tuple[list[Booking], list[LedgerEntry], int]:
    """Load bookings touching the day, its ledger entries and the room count."""
    from innkeep.infra.db import txn
    from innkeep.infra.repositories.bookings_repository import list_bookings_touching
    from innkeep.infra.repositories.ledger_repository import list_ledger_entries
    from innkeep.infra.repositories.rooms_repository import count_active_rooms

    tz = load_settings().tz
    start, end = day_bounds(target_date)
    with txn() as cur:
        bookings = list_bookings_touching(cur, target_date, target_date)
        entries = list_ledger_entries(cur, start.replace(tzinfo=tz), end.replace(tzinfo=tz))
        total_rooms = count_active_rooms(cur)
    return bookings, entries, total_rooms


def _load_trend_inputs(
    start_date: date,
    end_date: date,
) -> tuple[list[LedgerEntry], list[tuple[date, int]], int]:
    """Load ledger entries in the window, audit summaries and the room count."""
    from innkeep.infra.db import txn
    from innkeep.infra.repositories.ledger_repository import list_ledger_entries
    from innkeep.infra.repositories.night_audit_repository import list_completed_audits
    from innkeep.infra.repositories.rooms_repository import count_active_rooms

    tz = load_settings().tz
    start, _ = day_bounds(start_date)
    _, end = day_bounds(end_date)
    with txn() as cur:
        entries = list_ledger_entries(cur, start.replace(tzinfo=tz), end.replace(tzinfo=tz))
        summaries = list_completed_audits(cur, start_date, end_date)
        total_rooms = count_active_rooms(cur)
    return entries, summaries, total_rooms


@router.get("/daily")
def get_daily_report(
    target_date: date | None = Query(None, description="Date (YYYY-MM-DD), defaults to today"),
) -> dict:
    """Daily operations report: rooms, guests and revenue (ADR, RevPAR)."""
    effective_date = target_date or hotel_today()
    bookings, entries, total_rooms = _load_daily_inputs(effective_date)

    report = aggregate_daily_report(
        effective_date,
        bookings,
        entries,
        total_rooms,
        tz=load_settings().tz,
    )
    return report.to_dict()


@router.get("/trends")
def get_trends(
    end_date: date | None = Query(None, description="Last day of the window (default: today)"),
    days: int = Query(DEFAULT_TREND_DAYS, ge=1, description="Window length in days"),
) -> dict:
    """Revenue and occupancy trends for the days ending on end_date."""
    settings = load_settings()
    if days > settings.max_range_days:
        raise HTTPException(
            status_code=422,
            detail=f"Date range cannot exceed {settings.max_range_days} days",
        )

    effective_end = end_date or hotel_today()
    start_date = effective_end - timedelta(days=days - 1)
    entries, summaries, total_rooms = _load_trend_inputs(start_date, effective_end)

    return {
        "from": start_date.isoformat(),
        "to": effective_end.isoformat(),
        "revenue": revenue_trend(entries, effective_end, days, tz=settings.tz),
        "occupancy": occupancy_trend(summaries, total_rooms, limit=days),
    }
