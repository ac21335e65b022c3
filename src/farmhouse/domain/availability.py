"""Availability calculator.

Answers "which rooms are free for these nights, and who is in the way?"
over a snapshot of reservations. Pure: no I/O, no mutation, results
depend only on the snapshot order and the registry order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Sequence

from farmhouse.domain.dates import overlaps, require_range
from farmhouse.domain.reservations import Reservation
from farmhouse.domain.rooms import RoomRegistry


@dataclass(frozen=True)
class BookedRoom:
    """A room with at least one conflict for the requested range.

    ``reservation`` is the first conflict in store order; ``conflicts``
    holds all of them.
    """

    room: str
    reservation: Reservation
    conflicts: tuple[Reservation, ...]


@dataclass(frozen=True)
class RoomsAvailability:
    free: tuple[str, ...]
    booked: tuple[BookedRoom, ...]

    def is_free(self, room: str) -> bool:
        return room in self.free

    def to_dict(self) -> dict[str, Any]:
        return {
            "free": list(self.free),
            "booked": [
                {
                    "room": b.room,
                    "reservation": b.reservation.to_record(),
                    "conflicts": [c.to_record() for c in b.conflicts],
                }
                for b in self.booked
            ],
        }


def _conflicts(
    snapshot: Sequence[Reservation],
    room: str,
    start: date,
    end: date,
    exclude_id: str | None,
) -> list[Reservation]:
    return [
        r
        for r in snapshot
        if r.room == room
        and r.id != exclude_id
        and overlaps(start, end, r.start_date, r.end_date)
    ]


def room_availability(
    snapshot: Sequence[Reservation],
    room: str,
    start: date,
    end: date,
    *,
    exclude_id: str | None = None,
) -> list[Reservation]:
    """Return reservations in ``room`` overlapping [start, end).

    Args:
        snapshot: Current reservations, in store order.
        room: Room to check.
        start: First night requested (inclusive).
        end: Checkout date (exclusive).
        exclude_id: Reservation to ignore (the one being edited).

    Returns:
        Conflicting reservations in store order; empty when the room is free.

    Raises:
        ValidationError: If end is not after start.
    """
    require_range(start, end)
    return _conflicts(snapshot, room, start, end, exclude_id)


def rooms_available(
    snapshot: Sequence[Reservation],
    registry: RoomRegistry,
    start: date,
    end: date,
) -> RoomsAvailability:
    """Split the registry into free and booked rooms for [start, end)."""
    require_range(start, end)

    free: list[str] = []
    booked: list[BookedRoom] = []
    for room in registry:
        conflicts = _conflicts(snapshot, room, start, end, None)
        if conflicts:
            booked.append(BookedRoom(room=room, reservation=conflicts[0], conflicts=tuple(conflicts)))
        else:
            free.append(room)

    return RoomsAvailability(free=tuple(free), booked=tuple(booked))
