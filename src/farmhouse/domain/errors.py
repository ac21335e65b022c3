"""Error taxonomy for the reservation engine.

- ValidationError: bad input, surfaced immediately, never auto-corrected
- ConflictWarning: overlapping reservations found, carried as data
- NotFoundError: reservation id unknown to the store
- PersistenceError: any store failure, underlying cause chained
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from farmhouse.domain.reservations import Reservation


class FarmhouseError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(FarmhouseError):
    """Raised when environment configuration is invalid."""


class ValidationError(FarmhouseError):
    """Raised when a reservation or date range fails validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ConflictWarning(FarmhouseError):
    """Overlapping reservations exist for the requested room and dates.

    Not a hard failure: the caller inspects ``conflicts`` and may resubmit
    with ``allow_conflicts=True``.
    """

    def __init__(self, room: str, conflicts: Sequence[Reservation]) -> None:
        self.room = room
        self.conflicts = tuple(conflicts)
        super().__init__(
            f"Room {room!r} already has {len(self.conflicts)} overlapping reservation(s)"
        )


class NotFoundError(FarmhouseError):
    """Raised when a reservation id does not exist."""

    def __init__(self, reservation_id: str) -> None:
        self.reservation_id = reservation_id
        super().__init__(f"Reservation not found: {reservation_id}")


class PersistenceError(FarmhouseError):
    """Raised when the store fails to read or write."""
