"""Night audit service: closes the business day.

Steps, all in the caller's transaction:
1. Lock the business day row and read the business date.
2. Check blockers (pending arrivals/departures, unclean rooms); refuse
   unless forced.
3. Open an audit log, post one room charge per checked-in booking to the
   ledger (accounts receivable), record the summary.
4. Roll the business date forward and complete the log.

A failure at any step rolls the whole audit back, including the log row.
"""

from __future__ import annotations

from datetime import datetime, time
from typing import Any

from psycopg2.extensions import cursor as PgCursor

from innkeep.domain.bookings import Booking, BookingStatus
from innkeep.domain.night_audit import (
    AuditStatus,
    NightAuditBlockedError,
    compute_room_charges,
    get_audit_blockers,
    next_business_date,
    summarize_audit,
)
from innkeep.infra.settings import load_settings
from innkeep.infra.time import hotel_today
from innkeep.observability.logging import get_logger

logger = get_logger(__name__)

ROOM_CHARGE_CATEGORY = "room_booking"
AUDIT_SYSTEM_USER = "Night Audit System"


def _merge_bookings(*groups: list[Booking]) -> list[Booking]:
    seen: dict[str, Booking] = {}
    for group in groups:
        for booking in group:
            seen.setdefault(booking.id, booking)
    return list(seen.values())


def run_night_audit(
    cur: PgCursor,
    *,
    audited_by: str,
    force: bool = False,
) -> dict[str, Any]:
    """Run the night audit for the current business date.

    Args:
        cur: Database cursor (caller manages transaction).
        audited_by: Staff identifier recorded on the audit log.
        force: Run even when blockers remain.

    Returns:
        Dict with audit_id, business dates, posted charge count and summary.

    Raises:
        NightAuditBlockedError: Blockers remain and force is False.
    """
    from innkeep.infra.repositories.bookings_repository import (
        list_bookings_by_status,
        list_bookings_touching,
    )
    from innkeep.infra.repositories.ledger_repository import insert_ledger_entry
    from innkeep.infra.repositories.night_audit_repository import (
        create_audit_log,
        get_business_date,
        roll_business_date,
        update_audit_log,
    )
    from innkeep.infra.repositories.room_status_repository import list_room_statuses

    tz = load_settings().tz
    business_date = get_business_date(cur, default=hotel_today(), lock=True)
    tomorrow = next_business_date(business_date)

    in_house = list_bookings_by_status(cur, BookingStatus.CHECKED_IN.value)
    nearby = list_bookings_touching(cur, business_date, tomorrow)
    bookings = _merge_bookings(in_house, nearby)

    blockers = get_audit_blockers(business_date, bookings, list_room_statuses(cur))
    if not blockers.is_clear:
        if not force:
            raise NightAuditBlockedError(blockers)
        logger.warning(
            "night audit forced with blockers",
            extra={"extra_fields": {"business_date": business_date.isoformat(), **blockers.to_dict()}},
        )

    audit_id = create_audit_log(cur, business_date=business_date, audited_by=audited_by)

    charges = compute_room_charges(in_house)
    posted_at = datetime.combine(business_date, time.min, tzinfo=tz)
    for charge in charges:
        insert_ledger_entry(
            cur,
            date=posted_at,
            entry_type="income",
            category=ROOM_CHARGE_CATEGORY,
            amount=charge.amount,
            description=charge.description,
            reference_id=charge.booking_id,
            created_by=AUDIT_SYSTEM_USER,
            notes=f"Posted during audit {audit_id}",
            accounts_receivable=True,
        )

    summary = summarize_audit(business_date, bookings, charges)
    update_audit_log(cur, audit_id, steps={"room_charges_posted": True}, summary=summary)

    roll_business_date(cur, new_date=tomorrow, audited_date=business_date)
    update_audit_log(
        cur,
        audit_id,
        steps={
            "room_status_updated": True,
            "reports_generated": True,
            "business_date_rolled": True,
        },
        status=AuditStatus.COMPLETED,
    )

    logger.info(
        "night audit completed",
        extra={
            "extra_fields": {
                "audit_id": audit_id,
                "business_date": business_date.isoformat(),
                "charges_posted": len(charges),
                "total_revenue": summary.total_revenue,
            }
        },
    )

    return {
        "audit_id": audit_id,
        "business_date": business_date.isoformat(),
        "next_business_date": tomorrow.isoformat(),
        "charges_posted": len(charges),
        "summary": {
            "total_revenue": summary.total_revenue,
            "total_occupied_rooms": summary.total_occupied_rooms,
            "total_arrivals": summary.total_arrivals,
            "total_departures": summary.total_departures,
        },
    }
