"""Night audit repository: business day pointer and audit run log.

The business day is a single row (id = 'current') holding the date the
front desk is currently operating on. The audit advances it by one day.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any

from psycopg2.extensions import cursor as PgCursor

from innkeep.domain.night_audit import AuditStatus, NightAuditSummary

BUSINESS_DAY_ID = "current"


def get_business_date(cur: PgCursor, *, default: date, lock: bool = False) -> date:
    """Return the current business date, creating the row from default if missing."""
    suffix = " FOR UPDATE" if lock else ""
    cur.execute(f"SELECT date FROM business_days WHERE id = %s{suffix}", (BUSINESS_DAY_ID,))
    row = cur.fetchone()
    if row is not None:
        return row[0]

    cur.execute(
        """
        INSERT INTO business_days (id, date, status, opened_by)
        VALUES (%s, %s, 'open', 'system')
        ON CONFLICT (id) DO NOTHING
        """,
        (BUSINESS_DAY_ID, default),
    )
    return default


def roll_business_date(cur: PgCursor, *, new_date: date, audited_date: date) -> None:
    cur.execute(
        """
        UPDATE business_days
        SET date = %s, last_audit_date = %s, status = 'open', updated_at = now()
        WHERE id = %s
        """,
        (new_date, audited_date, BUSINESS_DAY_ID),
    )


def create_audit_log(cur: PgCursor, *, business_date: date, audited_by: str) -> str:
    """Insert an in-progress audit log row and return its id."""
    steps = {
        "room_charges_posted": False,
        "room_status_updated": False,
        "reports_generated": False,
        "business_date_rolled": False,
    }
    cur.execute(
        """
        INSERT INTO night_audit_logs (business_date, audited_by, status, steps)
        VALUES (%s, %s, %s, %s::jsonb)
        RETURNING id
        """,
        (business_date, audited_by, AuditStatus.IN_PROGRESS.value, json.dumps(steps)),
    )
    return str(cur.fetchone()[0])


def update_audit_log(
    cur: PgCursor,
    audit_id: str,
    *,
    steps: dict[str, bool],
    summary: NightAuditSummary | None = None,
    status: AuditStatus | None = None,
) -> None:
    """Merge step flags into the log; optionally record summary and status."""
    sets = ["steps = steps || %s::jsonb"]
    params: list[Any] = [json.dumps(steps)]
    if summary is not None:
        sets.extend(
            [
                "total_revenue = %s",
                "total_occupied_rooms = %s",
                "total_arrivals = %s",
                "total_departures = %s",
            ]
        )
        params.extend(
            [
                summary.total_revenue,
                summary.total_occupied_rooms,
                summary.total_arrivals,
                summary.total_departures,
            ]
        )
    if status is not None:
        sets.append("status = %s")
        params.append(status.value)
        if status == AuditStatus.COMPLETED:
            sets.append("completed_at = now()")
    params.append(audit_id)
    cur.execute(f"UPDATE night_audit_logs SET {', '.join(sets)} WHERE id = %s", params)


def list_audit_logs(cur: PgCursor, *, limit: int = 30) -> list[dict[str, Any]]:
    """Most recent audit runs first."""
    cur.execute(
        """
        SELECT id, business_date, started_at, completed_at, audited_by, status, steps,
               total_revenue, total_occupied_rooms, total_arrivals, total_departures
        FROM night_audit_logs
        ORDER BY business_date DESC, started_at DESC
        LIMIT %s
        """,
        (limit,),
    )
    return [
        {
            "id": str(row[0]),
            "business_date": row[1].isoformat(),
            "started_at": row[2].isoformat() if row[2] else None,
            "completed_at": row[3].isoformat() if row[3] else None,
            "audited_by": row[4],
            "status": row[5],
            "steps": row[6] or {},
            "summary": {
                "total_revenue": row[7],
                "total_occupied_rooms": row[8],
                "total_arrivals": row[9],
                "total_departures": row[10],
            },
        }
        for row in cur.fetchall()
    ]


def list_completed_audits(cur: PgCursor, start: date, end: date) -> list[tuple[date, int]]:
    """(business_date, total_occupied_rooms) of completed audits in [start, end].

    A date audited more than once keeps its latest completed run.
    """
    cur.execute(
        """
        SELECT DISTINCT ON (business_date) business_date, total_occupied_rooms
        FROM night_audit_logs
        WHERE status = %s
          AND business_date BETWEEN %s AND %s
        ORDER BY business_date, completed_at DESC NULLS LAST
        """,
        (AuditStatus.COMPLETED.value, start, end),
    )
    return [(row[0], row[1] or 0) for row in cur.fetchall()]
