"""Reservation store contract.

The engine reads snapshots and issues writes only through these four
operations; which backend sits behind them is decided once, when the
store is constructed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from farmhouse.domain.reservations import Reservation


class ReservationStore(ABC):
    """Abstract CRUD contract for reservation persistence.

    Implementations raise NotFoundError for unknown ids and wrap any
    backend failure in PersistenceError.
    """

    #: Human-readable description of where data lives
    label: str = "unknown"

    @abstractmethod
    def list(self) -> list[Reservation]:
        """Return all reservations ordered by start date."""

    @abstractmethod
    def add(self, reservation: Reservation) -> None:
        """Persist a new reservation."""

    @abstractmethod
    def remove(self, reservation_id: str) -> None:
        """Delete a reservation by id."""

    @abstractmethod
    def update(self, reservation_id: str, fields: Mapping[str, Any]) -> None:
        """Apply typed field values to an existing reservation."""
