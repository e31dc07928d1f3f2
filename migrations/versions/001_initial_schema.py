"""Initial schema: rooms, room statuses, bookings, ledger and night audit.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from pathlib import Path

from alembic import op


revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    sql_path = Path(__file__).resolve().parents[1] / "sql" / "001_initial_schema.sql"
    sql = sql_path.read_text(encoding="utf-8")
    conn = op.get_bind()
    conn.exec_driver_sql(sql)


def downgrade() -> None:
    conn = op.get_bind()
    conn.exec_driver_sql(
        """
        DROP TABLE IF EXISTS night_audit_logs CASCADE;
        DROP TABLE IF EXISTS business_days CASCADE;
        DROP TABLE IF EXISTS ledger_entries CASCADE;
        DROP TABLE IF EXISTS booking_rooms CASCADE;
        DROP TABLE IF EXISTS bookings CASCADE;
        DROP TABLE IF EXISTS room_cleaning_log CASCADE;
        DROP TABLE IF EXISTS room_statuses CASCADE;
        DROP TABLE IF EXISTS rooms CASCADE;
        """
    )
