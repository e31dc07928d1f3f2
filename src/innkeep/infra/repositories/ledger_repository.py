"""Ledger repository: income and expense entries."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from psycopg2.extensions import cursor as PgCursor

from innkeep.domain.daily_report import LedgerEntry


def list_ledger_entries(cur: PgCursor, start: datetime, end: datetime) -> list[LedgerEntry]:
    """Entries dated within [start, end], oldest first."""
    cur.execute(
        """
        SELECT id, date, entry_type, category, amount, description, reference_id
        FROM ledger_entries
        WHERE date >= %s AND date <= %s
        ORDER BY date, id
        """,
        (start, end),
    )
    return [
        LedgerEntry(
            id=str(row[0]),
            date=row[1],
            entry_type=row[2],
            category=row[3],
            amount=row[4],
            description=row[5] or "",
            reference_id=row[6],
        )
        for row in cur.fetchall()
    ]


def insert_ledger_entry(
    cur: PgCursor,
    *,
    date: datetime,
    entry_type: str,
    category: str,
    amount: Decimal,
    description: str,
    reference_id: str | None = None,
    created_by: str,
    notes: str | None = None,
    accounts_receivable: bool = False,
) -> str:
    """Insert an entry and return its id."""
    cur.execute(
        """
        INSERT INTO ledger_entries (
            date, entry_type, category, amount, description,
            reference_id, created_by, notes, accounts_receivable
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
        RETURNING id
        """,
        (
            date,
            entry_type,
            category,
            amount,
            description,
            reference_id,
            created_by,
            notes,
            accounts_receivable,
        ),
    )
    return str(cur.fetchone()[0])
