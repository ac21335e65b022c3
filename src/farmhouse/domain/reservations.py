"""Reservation model and validation.

A reservation occupies the nights [start_date, end_date) of one room.
Records cross the store boundary in a stable shape:

    {id, name, room, start_date "YYYY-MM-DD", end_date "YYYY-MM-DD",
     status "definite"|"hopeful", notes, created_at ISO-8601}
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping

from farmhouse.domain.dates import count_nights, iter_nights, parse_iso_date, require_range
from farmhouse.domain.errors import ValidationError
from farmhouse.domain.rooms import RoomRegistry
from farmhouse.infra.time import parse_timestamp


class ReservationStatus(str, Enum):
    """How sure the party is about coming. No effect on overlap logic."""

    DEFINITE = "definite"
    HOPEFUL = "hopeful"

    @classmethod
    def parse(cls, value: "ReservationStatus | str | None") -> "ReservationStatus":
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.HOPEFUL
        normalized = str(value).strip().lower()
        # Older records used the form labels
        normalized = _LEGACY_STATUS.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationError(
                f"invalid status {value!r}, expected 'definite' or 'hopeful'",
                field="status",
            )


_LEGACY_STATUS = {"definitely": "definite", "hopefully": "hopeful"}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Fields a caller may change on an existing reservation
MUTABLE_FIELDS = ("name", "room", "start_date", "end_date", "status", "notes", "created_at")


def new_reservation_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class ReservationDraft:
    """Candidate reservation before an id and timestamp are assigned."""

    name: str
    room: str
    start_date: date
    end_date: date
    status: ReservationStatus = ReservationStatus.HOPEFUL
    notes: str = ""

    @classmethod
    def from_fields(cls, data: Mapping[str, Any]) -> "ReservationDraft":
        """Build a draft from loosely-typed input (API payload, script args)."""
        return cls(
            name=str(data.get("name") or "").strip(),
            room=str(data.get("room") or ""),
            start_date=parse_iso_date(data.get("start_date"), field="start_date"),
            end_date=parse_iso_date(data.get("end_date"), field="end_date"),
            status=ReservationStatus.parse(data.get("status")),
            notes=str(data.get("notes") or ""),
        )


@dataclass(frozen=True)
class Reservation:
    """A persisted reservation."""

    id: str
    name: str
    room: str
    start_date: date
    end_date: date
    status: ReservationStatus = ReservationStatus.HOPEFUL
    notes: str = ""
    created_at: datetime | None = field(default=None, compare=False)

    @property
    def nights(self) -> int:
        return count_nights(self.start_date, self.end_date)

    def occupied_nights(self) -> list[date]:
        return list(iter_nights(self.start_date, self.end_date))

    def to_record(self) -> dict[str, Any]:
        """Serialize to the store/API record shape."""
        return {
            "id": self.id,
            "name": self.name,
            "room": self.room,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "status": self.status.value,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "Reservation":
        """Parse a record as stored by any backend.

        Accepts legacy status labels and a missing created_at.
        """
        reservation_id = data.get("id")
        if not reservation_id:
            raise ValidationError("reservation record has no id", field="id")
        created_at = data.get("created_at")
        return cls(
            id=str(reservation_id),
            name=str(data.get("name") or ""),
            room=str(data.get("room") or ""),
            start_date=parse_iso_date(data.get("start_date"), field="start_date"),
            end_date=parse_iso_date(data.get("end_date"), field="end_date"),
            status=ReservationStatus.parse(data.get("status")),
            notes=str(data.get("notes") or ""),
            created_at=parse_timestamp(created_at) if created_at else None,
        )


def validate_draft(
    registry: RoomRegistry,
    *,
    name: str,
    room: str,
    start_date: date,
    end_date: date,
) -> None:
    """Enforce the write-time invariants shared by create and update.

    Raises:
        ValidationError: Empty name, unknown room, or end not after start.
    """
    if not name or not name.strip():
        raise ValidationError("name is required", field="name")
    if room not in registry:
        raise ValidationError(f"unknown room {room!r}", field="room")
    require_range(start_date, end_date)


def coerce_patch(patch: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize a partial update into typed Reservation field values."""
    unknown = set(patch) - set(MUTABLE_FIELDS)
    if "id" in unknown:
        raise ValidationError("id cannot be changed", field="id")
    if unknown:
        raise ValidationError(f"unknown fields: {', '.join(sorted(unknown))}")

    fields: dict[str, Any] = {}
    for key, value in patch.items():
        if key in ("start_date", "end_date"):
            fields[key] = parse_iso_date(value, field=key)
        elif key == "status":
            fields[key] = ReservationStatus.parse(value)
        elif key == "created_at":
            fields[key] = parse_timestamp(value) if value else None
        elif key == "name":
            fields[key] = str(value or "").strip()
        else:
            fields[key] = str(value or "")
    return fields


def _sort_key(reservation: Reservation) -> tuple:
    # Compare instants, not strings; missing timestamps sort last
    created = reservation.created_at
    return (reservation.start_date, created is None, created or _EPOCH, reservation.id)


def sort_by_start(reservations: Iterable[Reservation]) -> list[Reservation]:
    return sorted(reservations, key=_sort_key)


def group_by_room(
    reservations: Iterable[Reservation],
    registry: RoomRegistry,
) -> dict[str, list[Reservation]]:
    """Group reservations per room for the room board.

    Every registry room is present (possibly empty) in registry order;
    rooms no longer configured are appended after them.
    """
    grouped: dict[str, list[Reservation]] = {room: [] for room in registry}
    for reservation in reservations:
        grouped.setdefault(reservation.room, []).append(reservation)
    return {room: sort_by_start(rows) for room, rows in grouped.items()}
