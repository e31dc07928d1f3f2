"""Rooms repository: static room metadata.

Uses raw SQL with psycopg2 (no ORM).
"""

from __future__ import annotations

from psycopg2.extensions import cursor as PgCursor

from innkeep.domain.room_status import Room


def list_rooms(cur: PgCursor, *, include_inactive: bool = False) -> list[Room]:
    """List rooms ordered by suite type, then name."""
    where = "" if include_inactive else "WHERE is_active = true"
    cur.execute(
        f"""
        SELECT room_name, suite_type, capacity, base_rate, is_active
        FROM rooms
        {where}
        ORDER BY suite_type NULLS LAST, room_name
        """
    )
    return [
        Room(
            room_name=row[0],
            suite_type=row[1],
            capacity=row[2],
            base_rate=row[3] or 0,
            is_active=row[4],
        )
        for row in cur.fetchall()
    ]


def count_active_rooms(cur: PgCursor) -> int:
    cur.execute("SELECT COUNT(*) FROM rooms WHERE is_active = true")
    return cur.fetchone()[0]
