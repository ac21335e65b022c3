"""Unit tests for the PostgreSQL reservation store.

These tests mock the psycopg2 connection so they run without Postgres.
"""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import psycopg2
import pytest
from psycopg2 import errors as pg_errors

from helpers import make_reservation
from farmhouse.domain.errors import NotFoundError, PersistenceError
from farmhouse.domain.reservations import ReservationStatus
from farmhouse.infra.stores.postgres import PostgresReservationStore

CREATED = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
RID = "6f1c2d4e-8a9b-4c3d-9e2f-1a2b3c4d5e6f"


@pytest.fixture
def conn():
    """Mocked psycopg2 connection."""
    return MagicMock()


@pytest.fixture
def cur(conn):
    """Cursor yielded by ``with conn.cursor() as cur``."""
    return conn.cursor.return_value.__enter__.return_value


@pytest.fixture
def store(conn):
    return PostgresReservationStore(conn=conn)


class TestList:
    def test_maps_rows(self, store, cur, conn):
        cur.fetchall.return_value = [
            ("uuid-1", "Ann", "A", date(2024, 7, 1), date(2024, 7, 3), "definite", None, CREATED),
        ]

        [r] = store.list()

        assert r.id == "uuid-1"
        assert r.status is ReservationStatus.DEFINITE
        assert r.notes == ""
        assert r.created_at == CREATED
        sql = cur.execute.call_args[0][0]
        assert "ORDER BY start_date" in sql
        conn.commit.assert_called_once()

    def test_db_error_wrapped(self, store, cur, conn):
        cur.execute.side_effect = psycopg2.OperationalError("connection lost")

        with pytest.raises(PersistenceError) as exc_info:
            store.list()

        assert isinstance(exc_info.value.__cause__, psycopg2.OperationalError)
        conn.rollback.assert_called_once()


class TestAdd:
    def test_insert_params(self, store, cur):
        r = make_reservation("uuid-2", "B", date(2024, 7, 3), date(2024, 7, 10), name="Bob")

        store.add(r)

        params = cur.execute.call_args[0][1]
        assert params == (
            "uuid-2", "Bob", "B", date(2024, 7, 3), date(2024, 7, 10), "definite", "", r.created_at,
        )

    def test_integrity_error_wrapped(self, store, cur):
        cur.execute.side_effect = psycopg2.IntegrityError("duplicate key")
        r = make_reservation("uuid-2", "B", date(2024, 7, 3), date(2024, 7, 10))

        with pytest.raises(PersistenceError):
            store.add(r)


class TestRemove:
    def test_deleted(self, store, cur):
        cur.fetchone.return_value = (RID,)
        store.remove(RID)
        assert cur.execute.call_args[0][1] == (RID,)

    def test_not_found(self, store, cur):
        cur.fetchone.return_value = None
        with pytest.raises(NotFoundError):
            store.remove(RID)

    def test_non_uuid_id_is_not_found(self, store, cur):
        with pytest.raises(NotFoundError):
            store.remove("abc")
        cur.execute.assert_not_called()

    def test_rejected_id_text_is_not_found(self, store, cur):
        cur.execute.side_effect = pg_errors.InvalidTextRepresentation("invalid input syntax for type uuid")
        with pytest.raises(NotFoundError):
            store.remove(RID)


class TestUpdate:
    def test_builds_set_clause(self, store, cur):
        cur.fetchone.return_value = (RID,)

        store.update(RID, {"status": ReservationStatus.HOPEFUL, "end_date": date(2024, 7, 9)})

        sql, params = cur.execute.call_args[0]
        assert "end_date = %s" in sql
        assert "status = %s" in sql
        # Column order follows MUTABLE_FIELDS, id last
        assert params == [date(2024, 7, 9), "hopeful", RID]

    def test_not_found(self, store, cur):
        cur.fetchone.return_value = None
        with pytest.raises(NotFoundError):
            store.update(RID, {"notes": "x"})

    def test_non_uuid_id_is_not_found(self, store, cur):
        with pytest.raises(NotFoundError):
            store.update("abc", {"notes": "x"})
        cur.execute.assert_not_called()

    def test_rejected_id_text_is_not_found(self, store, cur):
        cur.execute.side_effect = pg_errors.InvalidTextRepresentation("invalid input syntax for type uuid")
        with pytest.raises(NotFoundError):
            store.update(RID, {"notes": "x"})

    def test_rejects_unknown_columns(self, store, cur):
        with pytest.raises(ValueError):
            store.update(RID, {"id": "other"})
        cur.execute.assert_not_called()

    def test_empty_update_is_noop(self, store, cur):
        store.update(RID, {})
        cur.execute.assert_not_called()


def test_missing_database_url_wrapped(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(PersistenceError):
        PostgresReservationStore().list()
