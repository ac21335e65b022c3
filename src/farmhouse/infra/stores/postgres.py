"""PostgreSQL reservation store - shared table for multi-device use.

Uses raw SQL with psycopg2 (no ORM). Schema lives in
migrations/versions/001_reservations.py.
"""

from __future__ import annotations

import uuid
from typing import Any, Mapping

import psycopg2
from psycopg2 import errors as pg_errors
from psycopg2.extensions import connection as PgConnection

from farmhouse.domain.errors import NotFoundError, PersistenceError
from farmhouse.domain.reservations import MUTABLE_FIELDS, Reservation, ReservationStatus
from farmhouse.infra.db import fetchall, txn
from farmhouse.infra.stores.base import ReservationStore
from farmhouse.observability.logging import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, name, room, start_date, end_date, status, notes, created_at"


def _row_to_reservation(row: tuple) -> Reservation:
    return Reservation(
        id=str(row[0]),
        name=row[1],
        room=row[2],
        start_date=row[3],
        end_date=row[4],
        status=ReservationStatus.parse(row[5]),
        notes=row[6] or "",
        created_at=row[7],
    )


def _is_uuid(reservation_id: str) -> bool:
    """The id column is uuid; anything else cannot match a row."""
    try:
        uuid.UUID(str(reservation_id))
    except ValueError:
        return False
    return True


def _db_value(value: Any) -> Any:
    if isinstance(value, ReservationStatus):
        return value.value
    return value


class PostgresReservationStore(ReservationStore):
    """Reservations table accessed with one short transaction per call."""

    label = "shared database"

    def __init__(self, dsn: str | None = None, *, conn: PgConnection | None = None) -> None:
        """
        Args:
            dsn: Connection string; falls back to DATABASE_URL.
            conn: Existing connection to reuse (tests, scripts).
        """
        self._dsn = dsn
        self._conn = conn

    def list(self) -> list[Reservation]:
        try:
            with txn(self._conn, dsn=self._dsn) as cur:
                rows = fetchall(
                    cur,
                    f"SELECT {_COLUMNS} FROM reservations ORDER BY start_date, created_at, id",
                )
        except (psycopg2.Error, RuntimeError) as e:
            raise self._failure("list", e) from e
        return [_row_to_reservation(row) for row in rows]

    def add(self, reservation: Reservation) -> None:
        try:
            with txn(self._conn, dsn=self._dsn) as cur:
                cur.execute(
                    f"""
                    INSERT INTO reservations ({_COLUMNS})
                    VALUES (%s, %s, %s, %s, %s, %s, %s, COALESCE(%s, now()))
                    """,
                    (
                        reservation.id,
                        reservation.name,
                        reservation.room,
                        reservation.start_date,
                        reservation.end_date,
                        reservation.status.value,
                        reservation.notes,
                        reservation.created_at,
                    ),
                )
        except (psycopg2.Error, RuntimeError) as e:
            raise self._failure("add", e, reservation_id=reservation.id) from e

    def remove(self, reservation_id: str) -> None:
        if not _is_uuid(reservation_id):
            raise NotFoundError(reservation_id)

        try:
            with txn(self._conn, dsn=self._dsn) as cur:
                cur.execute(
                    "DELETE FROM reservations WHERE id = %s RETURNING id",
                    (reservation_id,),
                )
                row = cur.fetchone()
        except pg_errors.InvalidTextRepresentation as e:
            raise NotFoundError(reservation_id) from e
        except (psycopg2.Error, RuntimeError) as e:
            raise self._failure("remove", e, reservation_id=reservation_id) from e

        if row is None:
            raise NotFoundError(reservation_id)

    def update(self, reservation_id: str, fields: Mapping[str, Any]) -> None:
        unknown = set(fields) - set(MUTABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update columns: {sorted(unknown)}")
        if not fields:
            return
        if not _is_uuid(reservation_id):
            raise NotFoundError(reservation_id)

        sets: list[str] = []
        params: list[Any] = []
        for column in MUTABLE_FIELDS:
            if column in fields:
                sets.append(f"{column} = %s")
                params.append(_db_value(fields[column]))
        params.append(reservation_id)

        try:
            with txn(self._conn, dsn=self._dsn) as cur:
                cur.execute(
                    f"UPDATE reservations SET {', '.join(sets)} WHERE id = %s RETURNING id",
                    params,
                )
                row = cur.fetchone()
        except pg_errors.InvalidTextRepresentation as e:
            raise NotFoundError(reservation_id) from e
        except (psycopg2.Error, RuntimeError) as e:
            raise self._failure("update", e, reservation_id=reservation_id) from e

        if row is None:
            raise NotFoundError(reservation_id)

    def _failure(self, operation: str, error: Exception, **context: Any) -> PersistenceError:
        logger.error(
            "reservation store failure",
            extra={
                "extra_fields": {
                    "operation": operation,
                    "error_type": type(error).__name__,
                    **context,
                }
            },
        )
        return PersistenceError(f"Reservation store {operation} failed: {error}")
