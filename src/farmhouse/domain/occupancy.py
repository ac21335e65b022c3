"""Day aggregator - per-night occupancy index.

Each reservation contributes one entry per occupied night in
[start_date, end_date); its checkout date is never counted. Rooms
remaining is derived from distinct occupied rooms, so two reservations
in one room on the same night count once.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Sequence

from farmhouse.domain.dates import iter_nights
from farmhouse.domain.reservations import Reservation
from farmhouse.domain.rooms import RoomRegistry
from farmhouse.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DayOccupancy:
    day: date
    names: tuple[str, ...]
    occupied_rooms: frozenset[str]
    rooms_remaining: int

    def to_dict(self, registry: RoomRegistry | None = None) -> dict[str, Any]:
        """Render for JSON; rooms follow registry order when one is given."""
        if registry is not None:
            rooms = [r for r in registry if r in self.occupied_rooms]
        else:
            rooms = sorted(self.occupied_rooms)
        return {
            "date": self.day.isoformat(),
            "names": list(self.names),
            "occupied_rooms": rooms,
            "rooms_remaining": self.rooms_remaining,
        }


def build_day_index(
    snapshot: Sequence[Reservation],
    registry: RoomRegistry,
    *,
    start: date | None = None,
    end: date | None = None,
) -> dict[date, DayOccupancy]:
    """Aggregate reservations into a night-by-night occupancy map.

    Args:
        snapshot: Reservations in store order (names keep that order).
        registry: Configured rooms; reservations for other rooms are skipped.
        start: Optional first day to include (inclusive).
        end: Optional last day bound (exclusive).

    Returns:
        Dict keyed by date in ascending order. Only nights with at least
        one reservation appear.
    """
    names: dict[date, dict[str, None]] = {}
    rooms: dict[date, set[str]] = {}

    for reservation in snapshot:
        if reservation.room not in registry:
            logger.warning(
                "reservation for unconfigured room skipped",
                extra={"extra_fields": {"reservation_id": reservation.id}},
            )
            continue

        first = reservation.start_date if start is None else max(start, reservation.start_date)
        last = reservation.end_date if end is None else min(end, reservation.end_date)
        for night in iter_nights(first, last):
            names.setdefault(night, {})[reservation.name] = None
            rooms.setdefault(night, set()).add(reservation.room)

    total = len(registry)
    return {
        night: DayOccupancy(
            day=night,
            names=tuple(names[night]),
            occupied_rooms=frozenset(rooms[night]),
            rooms_remaining=total - len(rooms[night]),
        )
        for night in sorted(rooms)
    }
