"""Builders for domain records used across tests.

Regular functions, not fixtures, so tests can build several variants inline.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from innkeep.domain.bookings import BookedRoom, Booking
from innkeep.domain.daily_report import LedgerEntry
from innkeep.domain.room_status import MaintenanceWindow, Room, RoomStatus


def make_booking(
    booking_id: str = "bk-1",
    *,
    room: str = "DESERT ROSE",
    check_in="2025-06-01",
    check_out="2025-06-03",
    status: str = "checked_in",
    price: float = 250,
    adults: int = 2,
    children: int = 0,
    guest_name: str | None = "Okafor",
    rooms: list[BookedRoom] | None = None,
) -> Booking:
    return Booking(
        id=booking_id,
        check_in=check_in,
        check_out=check_out,
        status=status,
        rooms=rooms
        if rooms is not None
        else [BookedRoom(type="Garden Suite", allocated_room=room, suite_type="Garden Suite", price=price)],
        adults=adults,
        children=children,
        guest_name=guest_name,
    )


def make_room(name: str = "DESERT ROSE", suite_type: str = "Garden Suite") -> Room:
    return Room(room_name=name, suite_type=suite_type)


def make_status(
    name: str = "DESERT ROSE",
    *,
    status: str = "available",
    housekeeping: str | None = "clean",
    start: date | None = None,
    end: date | None = None,
) -> RoomStatus:
    window = MaintenanceWindow(start_date=start, end_date=end) if (start or end) else None
    return RoomStatus(
        room_name=name,
        suite_type="Garden Suite",
        status=status,
        housekeeping_status=housekeeping,
        maintenance_window=window,
    )


def make_entry(
    category: str,
    amount: str,
    *,
    day: date = date(2025, 6, 3),
    entry_type: str = "income",
) -> LedgerEntry:
    return LedgerEntry(
        date=datetime(day.year, day.month, day.day, 12, 0, tzinfo=timezone.utc),
        entry_type=entry_type,
        category=category,
        amount=Decimal(amount),
    )
