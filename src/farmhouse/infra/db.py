"""Database access layer using psycopg2.

Provides:
- get_conn(): Get a database connection from a DSN or DATABASE_URL
- txn(): Context manager for short, safe transactions
- fetchone/fetchall: Query helpers
"""

import os
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

import psycopg2
from psycopg2.extensions import connection as PgConnection, cursor as PgCursor


def get_conn(dsn: str | None = None) -> PgConnection:
    """Open a new database connection.

    Args:
        dsn: Connection string. Falls back to DATABASE_URL when None.

    Returns:
        psycopg2 connection object.

    Raises:
        RuntimeError: If no DSN is given and DATABASE_URL is not set.
        psycopg2.Error: On connection failure.
    """
    dsn = dsn or os.environ.get("DATABASE_URL")
    if not dsn:
        raise RuntimeError("DATABASE_URL environment variable not set")
    return psycopg2.connect(dsn)


@contextmanager
def txn(conn: PgConnection | None = None, *, dsn: str | None = None) -> Iterator[PgCursor]:
    """Context manager for a short, safe transaction.

    If conn is None, opens a connection from ``dsn`` that is closed on exit.
    Commits on successful exit, rolls back on exception.

    Example:
        with txn(dsn=url) as cur:
            cur.execute("DELETE FROM reservations WHERE id = %s", (rid,))
    """
    owns_conn = conn is None
    if owns_conn:
        conn = get_conn(dsn)

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


def fetchone(
    cur: PgCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> tuple[Any, ...] | None:
    """Execute query and fetch one row (None if no results)."""
    cur.execute(query, params)
    return cur.fetchone()


def fetchall(
    cur: PgCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> list[tuple[Any, ...]]:
    """Execute query and fetch all rows."""
    cur.execute(query, params)
    return cur.fetchall()
