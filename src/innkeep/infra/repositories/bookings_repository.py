"""Bookings repository: bookings with their room lines.

Uses raw SQL with psycopg2 (no ORM). Dates are returned as stored; the
domain layer treats NULL or bad dates as "no match".
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date

from psycopg2.extensions import cursor as PgCursor

from innkeep.domain.bookings import BookedRoom, Booking, BookingNotFoundError

_BOOKING_COLUMNS = "id, check_in, check_out, status, adults, children, guest_name"


def _attach_rooms(cur: PgCursor, rows: list[tuple]) -> list[Booking]:
    booking_ids = [str(row[0]) for row in rows]
    lines: dict[str, list[BookedRoom]] = defaultdict(list)
    if booking_ids:
        cur.execute(
            """
            SELECT booking_id, room_type, allocated_room, suite_type, price
            FROM booking_rooms
            WHERE booking_id::text = ANY(%s)
            ORDER BY booking_id, position
            """,
            (booking_ids,),
        )
        for line in cur.fetchall():
            lines[str(line[0])].append(
                BookedRoom(
                    type=line[1],
                    allocated_room=line[2],
                    suite_type=line[3],
                    price=line[4] or 0,
                )
            )

    return [
        Booking(
            id=str(row[0]),
            check_in=row[1],
            check_out=row[2],
            status=row[3],
            adults=row[4] or 0,
            children=row[5] or 0,
            guest_name=row[6],
            rooms=lines.get(str(row[0]), []),
        )
        for row in rows
    ]


def list_bookings_touching(cur: PgCursor, start: date, end: date) -> list[Booking]:
    """Bookings whose stay touches [start, end], both inclusive.

    Includes departures on start (same-day checkout) and every status; the
    domain layer decides which statuses hold a room.
    """
    cur.execute(
        f"""
        SELECT {_BOOKING_COLUMNS}
        FROM bookings
        WHERE check_in <= %s
          AND check_out >= %s
        ORDER BY check_in, id
        """,
        (end, start),
    )
    return _attach_rooms(cur, cur.fetchall())


def list_bookings_by_status(cur: PgCursor, status: str) -> list[Booking]:
    cur.execute(
        f"""
        SELECT {_BOOKING_COLUMNS}
        FROM bookings
        WHERE status = %s
        ORDER BY check_in, id
        """,
        (status,),
    )
    return _attach_rooms(cur, cur.fetchall())


def get_booking(cur: PgCursor, booking_id: str, *, lock: bool = False) -> Booking:
    """Fetch one booking with its room lines.

    Raises:
        BookingNotFoundError: No booking with that id.
    """
    suffix = " FOR UPDATE" if lock else ""
    cur.execute(
        f"SELECT {_BOOKING_COLUMNS} FROM bookings WHERE id::text = %s{suffix}",
        (booking_id,),
    )
    row = cur.fetchone()
    if row is None:
        raise BookingNotFoundError(booking_id)
    return _attach_rooms(cur, [row])[0]


def update_booking_status(cur: PgCursor, booking_id: str, status: str) -> None:
    cur.execute(
        "UPDATE bookings SET status = %s, updated_at = now() WHERE id::text = %s",
        (status, booking_id),
    )
    if cur.rowcount == 0:
        raise BookingNotFoundError(booking_id)
