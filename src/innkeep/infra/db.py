"""PostgreSQL access with psycopg2.

Provides:
- get_conn(): open a connection from DATABASE_URL
- txn(): short transaction scope yielding a cursor
"""

import os
from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2.extensions import connection as PgConnection, cursor as PgCursor


def get_conn() -> PgConnection:
    """Open a new connection using DATABASE_URL.

    Raises:
        RuntimeError: If DATABASE_URL is not set.
        psycopg2.Error: On connection failure.
    """
    dsn = os.environ.get("DATABASE_URL")
    if not dsn:
        raise RuntimeError("DATABASE_URL environment variable not set")
    return psycopg2.connect(dsn)


@contextmanager
def txn(conn: PgConnection | None = None) -> Iterator[PgCursor]:
    """Run the enclosed block in one transaction.

    Commits when the block exits normally and rolls back on any exception.
    A connection opened here is closed on exit; a caller-supplied one is not.

    Example:
        with txn() as cur:
            statuses = list_room_statuses(cur)
    """
    owns_conn = conn is None
    if owns_conn:
        conn = get_conn()

    try:
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        if owns_conn:
            conn.close()
