"""Night audit domain logic: blockers, nightly room charges and date roll."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable

from innkeep.domain.bookings import Booking, BookingStatus
from innkeep.domain.room_status import UNCLEAN_STATUSES, RoomStatus


class NightAuditBlockedError(Exception):
    """Raised when the audit is started while the business day is not closed out."""

    def __init__(self, blockers: "AuditBlockers"):
        self.blockers = blockers
        super().__init__(
            "Night audit blocked: "
            f"{blockers.pending_arrivals} pending arrivals, "
            f"{blockers.pending_departures} pending departures, "
            f"{blockers.unclean_rooms} unclean rooms"
        )


class AuditStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class AuditBlockers:
    pending_arrivals: int = 0
    pending_departures: int = 0
    unclean_rooms: int = 0

    @property
    def is_clear(self) -> bool:
        return not (self.pending_arrivals or self.pending_departures or self.unclean_rooms)

    def to_dict(self) -> dict:
        return {**asdict(self), "is_clear": self.is_clear}


@dataclass(frozen=True)
class RoomCharge:
    booking_id: str
    room_label: str
    guest_name: str | None
    amount: Decimal

    @property
    def description(self) -> str:
        return f"Night Audit: Room Charge for {self.guest_name or 'Guest'} (Room {self.room_label})"


@dataclass(frozen=True)
class NightAuditSummary:
    total_revenue: Decimal = Decimal("0")
    total_occupied_rooms: int = 0
    total_arrivals: int = 0
    total_departures: int = 0


def get_audit_blockers(
    business_date: date,
    bookings: Iterable[Booking],
    statuses: Iterable[RoomStatus],
) -> AuditBlockers:
    """Count what still needs front desk or housekeeping action today.

    - pending arrivals: confirmed bookings arriving on business_date;
    - pending departures: checked-in bookings departing on business_date;
    - unclean rooms: rooms marked dirty or needing attention.
    """
    arrivals = departures = 0
    for booking in bookings:
        if booking.status == BookingStatus.CONFIRMED and booking.check_in == business_date:
            arrivals += 1
        elif booking.status == BookingStatus.CHECKED_IN and booking.check_out == business_date:
            departures += 1
    unclean = sum(1 for status in statuses if status.housekeeping_status in UNCLEAN_STATUSES)
    return AuditBlockers(arrivals, departures, unclean)


def compute_room_charges(bookings: Iterable[Booking]) -> list[RoomCharge]:
    """One nightly charge per checked-in booking with a positive rate."""
    charges: list[RoomCharge] = []
    for booking in bookings:
        if booking.status != BookingStatus.CHECKED_IN:
            continue
        rate = Decimal(str(booking.nightly_rate))
        if rate <= 0:
            continue
        first = booking.rooms[0]
        charges.append(
            RoomCharge(
                booking_id=booking.id,
                room_label=first.allocated_room or "Unassigned",
                guest_name=booking.guest_name,
                amount=rate,
            )
        )
    return charges


def summarize_audit(
    business_date: date,
    bookings: Iterable[Booking],
    charges: Iterable[RoomCharge],
) -> NightAuditSummary:
    """Audit summary: posted revenue, in-house count and tomorrow's movements."""
    bookings = list(bookings)
    tomorrow = next_business_date(business_date)
    return NightAuditSummary(
        total_revenue=sum((c.amount for c in charges), Decimal("0")),
        total_occupied_rooms=sum(1 for b in bookings if b.status == BookingStatus.CHECKED_IN),
        total_arrivals=sum(
            1 for b in bookings if b.status == BookingStatus.CONFIRMED and b.check_in == tomorrow
        ),
        total_departures=sum(
            1 for b in bookings if b.status == BookingStatus.CHECKED_IN and b.check_out == tomorrow
        ),
    )


def next_business_date(business_date: date) -> date:
    return business_date + timedelta(days=1)
