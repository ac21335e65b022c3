"""Tests for the reservation model, record shape and validation."""

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest

from helpers import make_reservation
from farmhouse.domain.errors import ValidationError
from farmhouse.domain.reservations import (
    Reservation,
    ReservationDraft,
    ReservationStatus,
    coerce_patch,
    group_by_room,
    sort_by_start,
    validate_draft,
)
from farmhouse.domain.rooms import RoomRegistry


class TestReservationStatus:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("definite", ReservationStatus.DEFINITE),
            ("hopeful", ReservationStatus.HOPEFUL),
            ("definitely", ReservationStatus.DEFINITE),
            ("Hopefully", ReservationStatus.HOPEFUL),
            (None, ReservationStatus.HOPEFUL),
            ("", ReservationStatus.HOPEFUL),
        ],
    )
    def test_parse(self, raw, expected):
        assert ReservationStatus.parse(raw) is expected

    def test_unknown_status(self):
        with pytest.raises(ValidationError) as exc_info:
            ReservationStatus.parse("maybe")
        assert exc_info.value.field == "status"


class TestRecordShape:
    def test_to_record(self):
        r = make_reservation("r1", "A", date(2024, 7, 1), date(2024, 7, 4), name="Hartman Family")
        record = r.to_record()
        assert record == {
            "id": "r1",
            "name": "Hartman Family",
            "room": "A",
            "start_date": "2024-07-01",
            "end_date": "2024-07-04",
            "status": "definite",
            "notes": "",
            "created_at": "2024-06-01T12:00:00+00:00",
        }

    def test_from_record_legacy_status_and_z_timestamp(self):
        r = Reservation.from_record({
            "id": "abc",
            "name": "Ann",
            "room": "A",
            "start_date": "2024-07-01",
            "end_date": "2024-07-03",
            "status": "hopefully",
            "created_at": "2024-06-01T08:30:00.000Z",
        })
        assert r.status is ReservationStatus.HOPEFUL
        assert r.notes == ""
        assert r.created_at == datetime(2024, 6, 1, 8, 30, tzinfo=timezone.utc)

    def test_from_record_without_created_at(self):
        r = Reservation.from_record({
            "id": "abc", "name": "Ann", "room": "A",
            "start_date": "2024-07-01", "end_date": "2024-07-03",
        })
        assert r.created_at is None

    def test_from_record_requires_id(self):
        with pytest.raises(ValidationError):
            Reservation.from_record({"name": "Ann", "room": "A",
                                     "start_date": "2024-07-01", "end_date": "2024-07-03"})

    def test_nights(self):
        r = make_reservation("r1", "A", date(2024, 7, 1), date(2024, 7, 4))
        assert r.nights == 3
        assert r.occupied_nights() == [date(2024, 7, 1), date(2024, 7, 2), date(2024, 7, 3)]


class TestValidateDraft:
    registry = RoomRegistry(("A", "B"))

    def _validate(self, **overrides):
        fields = {
            "name": "Ann",
            "room": "A",
            "start_date": date(2024, 7, 1),
            "end_date": date(2024, 7, 2),
        }
        fields.update(overrides)
        validate_draft(self.registry, **fields)

    def test_valid(self):
        self._validate()

    def test_blank_name(self):
        with pytest.raises(ValidationError) as exc_info:
            self._validate(name="   ")
        assert exc_info.value.field == "name"

    def test_unknown_room(self):
        with pytest.raises(ValidationError) as exc_info:
            self._validate(room="Cellar")
        assert exc_info.value.field == "room"

    def test_end_not_after_start(self):
        with pytest.raises(ValidationError) as exc_info:
            self._validate(end_date=date(2024, 7, 1))
        assert exc_info.value.field == "end_date"


class TestDraftFromFields:
    def test_strips_name_and_parses(self):
        draft = ReservationDraft.from_fields({
            "name": "  Ann ",
            "room": "A",
            "start_date": "2024-07-01",
            "end_date": date(2024, 7, 3),
            "status": "definitely",
        })
        assert draft.name == "Ann"
        assert draft.start_date == date(2024, 7, 1)
        assert draft.status is ReservationStatus.DEFINITE
        assert draft.notes == ""

    def test_missing_date(self):
        with pytest.raises(ValidationError) as exc_info:
            ReservationDraft.from_fields({"name": "Ann", "room": "A", "end_date": "2024-07-03"})
        assert exc_info.value.field == "start_date"


class TestCoercePatch:
    def test_types(self):
        fields = coerce_patch({"start_date": "2024-07-02", "status": "definite", "notes": None})
        assert fields == {
            "start_date": date(2024, 7, 2),
            "status": ReservationStatus.DEFINITE,
            "notes": "",
        }

    def test_id_is_immutable(self):
        with pytest.raises(ValidationError) as exc_info:
            coerce_patch({"id": "other"})
        assert exc_info.value.field == "id"

    def test_unknown_field(self):
        with pytest.raises(ValidationError):
            coerce_patch({"price": 10})


class TestOrdering:
    def test_sort_by_start(self):
        late = make_reservation("r2", "A", date(2024, 8, 1), date(2024, 8, 2))
        early = make_reservation("r1", "B", date(2024, 7, 1), date(2024, 7, 2))
        assert [r.id for r in sort_by_start([late, early])] == ["r1", "r2"]

    def test_same_start_orders_by_creation_instant(self):
        start, end = date(2024, 7, 1), date(2024, 7, 3)
        # 12:00-05:00 is 17:00 UTC, after 13:00 UTC
        later = replace(
            make_reservation("r-later", "A", start, end),
            created_at=datetime(2024, 6, 1, 12, 0, tzinfo=timezone(timedelta(hours=-5))),
        )
        earlier = replace(
            make_reservation("r-earlier", "B", start, end),
            created_at=datetime(2024, 6, 1, 13, 0, tzinfo=timezone.utc),
        )
        assert [r.id for r in sort_by_start([later, earlier])] == ["r-earlier", "r-later"]

    def test_missing_created_at_sorts_last(self):
        start, end = date(2024, 7, 1), date(2024, 7, 3)
        undated = replace(make_reservation("r0", "A", start, end), created_at=None)
        dated = make_reservation("r1", "B", start, end)
        assert [r.id for r in sort_by_start([undated, dated])] == ["r1", "r0"]


    def test_group_by_room_registry_order(self):
        registry = RoomRegistry(("A", "B", "C"))
        rows = [
            make_reservation("b1", "B", date(2024, 7, 9), date(2024, 7, 10)),
            make_reservation("a1", "A", date(2024, 7, 5), date(2024, 7, 6)),
            make_reservation("b0", "B", date(2024, 7, 1), date(2024, 7, 2)),
            make_reservation("x1", "Old Room", date(2024, 7, 1), date(2024, 7, 2)),
        ]
        grouped = group_by_room(rows, registry)
        assert list(grouped) == ["A", "B", "C", "Old Room"]
        assert [r.id for r in grouped["B"]] == ["b0", "b1"]
        assert grouped["C"] == []
