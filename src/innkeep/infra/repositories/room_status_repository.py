"""Room status repository: operational status, maintenance and cleaning log.

The cleaning history lives in room_cleaning_log and is append-only.
"""

from __future__ import annotations

from collections import defaultdict

from psycopg2.extensions import cursor as PgCursor

from innkeep.domain.room_status import (
    CleaningLogEntry,
    MaintenanceWindow,
    RoomStatus,
    RoomStatusNotFoundError,
)

_STATUS_COLUMNS = """
    room_name, suite_type, status, housekeeping_status,
    maintenance_start_date, maintenance_end_date, maintenance_reason
"""


def _row_to_status(row: tuple, history: list[CleaningLogEntry]) -> RoomStatus:
    window = None
    if row[4] is not None or row[5] is not None:
        window = MaintenanceWindow(start_date=row[4], end_date=row[5])
    return RoomStatus(
        room_name=row[0],
        suite_type=row[1],
        status=row[2],
        housekeeping_status=row[3],
        maintenance_window=window,
        maintenance_reason=row[6],
        cleaning_history=history,
    )


def _load_history(cur: PgCursor, room_names: list[str]) -> dict[str, list[CleaningLogEntry]]:
    history: dict[str, list[CleaningLogEntry]] = defaultdict(list)
    if not room_names:
        return history
    cur.execute(
        """
        SELECT room_name, cleaned_at, cleaning_type, staff_name, notes
        FROM room_cleaning_log
        WHERE room_name = ANY(%s)
        ORDER BY cleaned_at, id
        """,
        (room_names,),
    )
    for row in cur.fetchall():
        history[row[0]].append(
            CleaningLogEntry(date=row[1], type=row[2], staff_name=row[3], notes=row[4])
        )
    return history


def list_room_statuses(cur: PgCursor, *, with_history: bool = False) -> list[RoomStatus]:
    cur.execute(f"SELECT {_STATUS_COLUMNS} FROM room_statuses ORDER BY room_name")
    rows = cur.fetchall()
    history = _load_history(cur, [row[0] for row in rows]) if with_history else {}
    return [_row_to_status(row, history.get(row[0], [])) for row in rows]


def get_room_status(cur: PgCursor, room_name: str, *, lock: bool = False) -> RoomStatus:
    """Fetch one room's status with its cleaning history.

    Args:
        cur: Database cursor.
        room_name: Room key.
        lock: If True, lock the row until the transaction ends.

    Raises:
        RoomStatusNotFoundError: No status record for the room.
    """
    suffix = " FOR UPDATE" if lock else ""
    cur.execute(
        f"SELECT {_STATUS_COLUMNS} FROM room_statuses WHERE room_name = %s{suffix}",
        (room_name,),
    )
    row = cur.fetchone()
    if row is None:
        raise RoomStatusNotFoundError(room_name)
    history = _load_history(cur, [room_name])
    return _row_to_status(row, history.get(room_name, []))


def save_room_status(cur: PgCursor, room_status: RoomStatus) -> None:
    """Persist status, housekeeping and maintenance fields of a record."""
    window = room_status.maintenance_window
    cur.execute(
        """
        UPDATE room_statuses
        SET status = %s,
            housekeeping_status = %s,
            maintenance_start_date = %s,
            maintenance_end_date = %s,
            maintenance_reason = %s,
            updated_at = now()
        WHERE room_name = %s
        """,
        (
            room_status.status.value,
            room_status.housekeeping_status.value if room_status.housekeeping_status else None,
            window.start_date if window else None,
            window.end_date if window else None,
            room_status.maintenance_reason,
            room_status.room_name,
        ),
    )
    if cur.rowcount == 0:
        raise RoomStatusNotFoundError(room_status.room_name)


def append_cleaning_entry(cur: PgCursor, room_name: str, entry: CleaningLogEntry) -> None:
    cur.execute(
        """
        INSERT INTO room_cleaning_log (room_name, cleaned_at, cleaning_type, staff_name, notes)
        VALUES (%s, %s, %s, %s, %s)
        """,
        (room_name, entry.date, entry.type.value, entry.staff_name, entry.notes),
    )
