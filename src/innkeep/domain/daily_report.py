"""Daily operations report: room, guest and revenue rollups for one day.

Room counts follow the board matching rule (half-open stay interval plus the
same-day checkout exception for checked-in guests):

- maintenance blocks count as out of order (ood);
- confirmed and pending bookings are reserved but the room is still vacant;
- every other matched booking counts as rented.

vacant + rented + ood always equals total. Ratios are rounded to two
decimals and are 0 whenever their denominator is 0.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Iterable, Sequence

from pydantic import BaseModel, ConfigDict

from innkeep.domain.bookings import INACTIVE_STATUSES, Booking, BookingStatus
from innkeep.domain.dates import normalize_day

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")
_ZERO = Decimal("0")


class EntryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class LedgerEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    date: datetime
    entry_type: EntryType
    category: str
    amount: Decimal
    description: str = ""
    reference_id: str | None = None


# Category vocabulary, matched case-insensitively.
_ROOM_CATEGORIES = frozenset({"room charge", "room_charge", "room booking", "room_booking", "room"})
_TAX_CATEGORIES = frozenset({"tax", "taxes"})
_FB_CATEGORIES = frozenset({"food/beverage", "food_beverage", "food & beverage", "f&b", "fb"})
_PAYMENT_CATEGORIES = frozenset({"payment", "payments"})


def revenue_bucket(category: str) -> str:
    """Map a ledger category to room_revenue, tax, fb, payments or other."""
    key = (category or "").strip().lower()
    if key in _ROOM_CATEGORIES:
        return "room_revenue"
    if key in _TAX_CATEGORIES:
        return "tax"
    if key in _FB_CATEGORIES:
        return "fb"
    if key in _PAYMENT_CATEGORIES:
        return "payments"
    return "other"


def safe_ratio(numerator: Decimal | int, denominator: Decimal | int) -> Decimal:
    """numerator / denominator rounded to cents, or 0 if denominator is 0."""
    if not denominator:
        return _ZERO.quantize(_CENTS)
    return (Decimal(numerator) / Decimal(denominator)).quantize(_CENTS, rounding=ROUND_HALF_UP)


@dataclass
class RoomCounts:
    total: int = 0
    ood: int = 0
    rented: int = 0
    available: int = 0
    vacant: int = 0
    reserved: int = 0
    occupancy_percentage: Decimal = _ZERO


@dataclass
class GuestCounts:
    adults: int = 0
    children: int = 0
    arrivals: int = 0
    departures: int = 0
    in_house: int = 0


@dataclass
class RevenueTotals:
    room_revenue: Decimal = _ZERO
    tax: Decimal = _ZERO
    fb: Decimal = _ZERO
    other: Decimal = _ZERO
    total_revenue: Decimal = _ZERO
    payments: Decimal = _ZERO
    expenses: Decimal = _ZERO
    adr: Decimal = _ZERO
    rev_par: Decimal = _ZERO


@dataclass
class DailyReport:
    date: date
    rooms: RoomCounts = field(default_factory=RoomCounts)
    guests: GuestCounts = field(default_factory=GuestCounts)
    revenue: RevenueTotals = field(default_factory=RevenueTotals)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data


def _rooms_held(booking: Booking) -> int:
    return max(len(booking.rooms), 1)


def aggregate_daily_report(
    day: date,
    bookings: Iterable[Booking],
    ledger_entries: Iterable[LedgerEntry],
    total_rooms: int,
    *,
    tz: tzinfo | None = None,
) -> DailyReport:
    """Fold bookings and ledger entries into the report for day.

    Args:
        day: Report date.
        bookings: All bookings that may touch day.
        ledger_entries: Ledger entries; entries dated on other days are ignored.
        total_rooms: Number of physical rooms.
        tz: Hotel timezone used to place ledger timestamps on a day.
    """
    report = DailyReport(date=day)
    rooms, guests, revenue = report.rooms, report.guests, report.revenue

    ood = rented = reserved = 0
    for booking in bookings:
        if booking.status in INACTIVE_STATUSES and booking.status != BookingStatus.CHECKED_OUT:
            continue
        is_block = booking.status == BookingStatus.MAINTENANCE

        if not is_block and booking.check_in == day:
            guests.arrivals += 1
        if booking.check_out == day and booking.status in (
            BookingStatus.CHECKED_IN,
            BookingStatus.CHECKED_OUT,
        ):
            guests.departures += 1

        if booking.status == BookingStatus.CHECKED_OUT or not booking.matches_day(day):
            continue
        if is_block:
            ood += _rooms_held(booking)
        elif booking.status in (BookingStatus.CONFIRMED, BookingStatus.PENDING):
            reserved += _rooms_held(booking)
        else:
            rented += _rooms_held(booking)
            guests.adults += booking.adults
            guests.children += booking.children

    total = max(total_rooms, 0)
    if ood + rented > total:
        logger.warning(
            "overbooking detected",
            extra={
                "extra_fields": {
                    "date": day.isoformat(),
                    "total_rooms": total,
                    "rented": rented,
                    "ood": ood,
                }
            },
        )
    rooms.total = total
    rooms.ood = min(ood, total)
    rooms.rented = min(rented, total - rooms.ood)
    rooms.vacant = total - rooms.ood - rooms.rented
    rooms.reserved = min(reserved, rooms.vacant)
    rooms.available = total - rooms.ood
    rooms.occupancy_percentage = safe_ratio(rooms.rented * 100, total)
    guests.in_house = guests.adults + guests.children

    for entry in ledger_entries:
        if normalize_day(entry.date, tz) != day:
            continue
        amount = Decimal(entry.amount)
        if entry.entry_type == EntryType.EXPENSE:
            revenue.expenses += amount
            continue
        bucket = revenue_bucket(entry.category)
        setattr(revenue, bucket, getattr(revenue, bucket) + amount)

    revenue.total_revenue = revenue.room_revenue + revenue.tax + revenue.fb + revenue.other
    revenue.adr = safe_ratio(revenue.room_revenue, rooms.rented)
    revenue.rev_par = safe_ratio(revenue.room_revenue, total)
    return report


def revenue_trend(
    ledger_entries: Iterable[LedgerEntry],
    end_day: date,
    days: int = 7,
    *,
    tz: tzinfo | None = None,
) -> list[dict[str, Any]]:
    """Daily income and expense totals for the days ending on end_day.

    Every day in the window appears, oldest first, even with no entries.
    """
    window = [end_day - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    totals = {d: {"income": _ZERO, "expenses": _ZERO} for d in window}
    for entry in ledger_entries:
        bucket = totals.get(normalize_day(entry.date, tz))
        if bucket is None:
            continue
        key = "income" if entry.entry_type == EntryType.INCOME else "expenses"
        bucket[key] += Decimal(entry.amount)
    return [
        {
            "date": d.isoformat(),
            "name": d.strftime("%a"),
            "income": totals[d]["income"],
            "expenses": totals[d]["expenses"],
        }
        for d in window
    ]


def occupancy_trend(
    audit_summaries: Sequence[tuple[date, int]],
    total_rooms: int,
    *,
    limit: int = 7,
) -> list[dict[str, Any]]:
    """Occupancy rate per audited business date, oldest first.

    Args:
        audit_summaries: (business_date, total_occupied_rooms) per audit run.
        total_rooms: Number of physical rooms.
        limit: Keep only the most recent audits.
    """
    recent = sorted(audit_summaries, key=lambda item: item[0])[-limit:] if limit > 0 else []
    return [
        {
            "date": audit_date.isoformat(),
            "name": audit_date.strftime("%a"),
            "occupancy_rate": safe_ratio(occupied * 100, total_rooms),
        }
        for audit_date, occupied in recent
    ]
