"""Shared test helper functions for Farmhouse tests.

Regular functions (not fixtures) importable by conftest.py and test modules.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from farmhouse.domain.reservations import Reservation, ReservationStatus

PASSWORD = "WhiteGate"
AUTH = {"X-Farmhouse-Password": PASSWORD}


def make_reservation(
    rid: str,
    room: str,
    start: date,
    end: date,
    name: str = "Guest",
    status: ReservationStatus = ReservationStatus.DEFINITE,
) -> Reservation:
    """Build a reservation with a fixed created_at."""
    return Reservation(
        id=rid,
        name=name,
        room=room,
        start_date=start,
        end_date=end,
        status=status,
        created_at=datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc),
    )
