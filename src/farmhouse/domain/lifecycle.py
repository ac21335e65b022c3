"""Reservation lifecycle - create, update and remove against a store.

Conflicts are soft: a write that overlaps an existing reservation in the
same room raises ConflictWarning and writes nothing. The caller decides
and resubmits with allow_conflicts=True to go ahead anyway.

No locking or compare-and-swap: two clients checking the same stale
snapshot can both write overlapping stays.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Mapping

from farmhouse.domain.availability import room_availability
from farmhouse.domain.errors import ConflictWarning, NotFoundError, ValidationError
from farmhouse.domain.reservations import (
    Reservation,
    ReservationDraft,
    coerce_patch,
    new_reservation_id,
    validate_draft,
)
from farmhouse.domain.rooms import RoomRegistry
from farmhouse.infra.stores.base import ReservationStore
from farmhouse.infra.time import utc_now
from farmhouse.observability.logging import get_logger
from farmhouse.observability.redaction import safe_log_context

logger = get_logger(__name__)


class ReservationManager:
    """Orchestrates writes, re-running the conflict check before each one."""

    def __init__(
        self,
        store: ReservationStore,
        registry: RoomRegistry,
        *,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_reservation_id,
    ) -> None:
        self.store = store
        self.registry = registry
        self._clock = clock
        self._id_factory = id_factory

    def snapshot(self) -> tuple[Reservation, ...]:
        """Read the current reservations as an immutable snapshot."""
        return tuple(self.store.list())

    def preview(
        self,
        draft: ReservationDraft,
        *,
        exclude_id: str | None = None,
    ) -> list[Reservation]:
        """Return reservations that would conflict with ``draft``.

        Only the room and dates matter here; the name may still be blank
        while a form is being filled in.
        """
        if draft.room not in self.registry:
            raise ValidationError(f"unknown room {draft.room!r}", field="room")
        return room_availability(
            self.snapshot(),
            draft.room,
            draft.start_date,
            draft.end_date,
            exclude_id=exclude_id,
        )

    def create(self, draft: ReservationDraft, *, allow_conflicts: bool = False) -> Reservation:
        """Validate, check conflicts and persist a new reservation.

        Raises:
            ValidationError: Empty name, unknown room, or bad date range.
            ConflictWarning: Overlap found and allow_conflicts is False.
            PersistenceError: Store failure.
        """
        validate_draft(
            self.registry,
            name=draft.name,
            room=draft.room,
            start_date=draft.start_date,
            end_date=draft.end_date,
        )
        conflicts = self.preview(draft)
        self._handle_conflicts(draft.room, conflicts, allow_conflicts, reservation_id=None)

        reservation = Reservation(
            id=self._id_factory(),
            name=draft.name,
            room=draft.room,
            start_date=draft.start_date,
            end_date=draft.end_date,
            status=draft.status,
            notes=draft.notes,
            created_at=self._clock(),
        )
        self.store.add(reservation)

        logger.info(
            "reservation created",
            extra={
                "extra_fields": {
                    "reservation_id": reservation.id,
                    "room": reservation.room,
                    "nights": reservation.nights,
                    "overridden_conflicts": len(conflicts),
                    **safe_log_context(guest=reservation.name),
                }
            },
        )
        return reservation

    def update(
        self,
        reservation_id: str,
        patch: Mapping[str, Any],
        *,
        allow_conflicts: bool = False,
    ) -> Reservation:
        """Apply a partial update; the reservation is never checked against itself.

        Raises:
            NotFoundError: Unknown reservation id.
            ValidationError: Bad patch or invalid merged reservation.
            ConflictWarning: Overlap with another reservation in the room.
            PersistenceError: Store failure.
        """
        fields = coerce_patch(patch)
        snapshot = self.snapshot()
        current = next((r for r in snapshot if r.id == reservation_id), None)
        if current is None:
            raise NotFoundError(reservation_id)

        merged = replace(current, **fields)
        validate_draft(
            self.registry,
            name=merged.name,
            room=merged.room,
            start_date=merged.start_date,
            end_date=merged.end_date,
        )
        conflicts = room_availability(
            snapshot,
            merged.room,
            merged.start_date,
            merged.end_date,
            exclude_id=reservation_id,
        )
        self._handle_conflicts(merged.room, conflicts, allow_conflicts, reservation_id=reservation_id)

        if fields:
            self.store.update(reservation_id, fields)

        logger.info(
            "reservation updated",
            extra={
                "extra_fields": {
                    "reservation_id": reservation_id,
                    "fields": sorted(fields),
                    "overridden_conflicts": len(conflicts),
                }
            },
        )
        return merged

    def remove(self, reservation_id: str) -> None:
        """Delete a reservation.

        Raises:
            NotFoundError: If the store removed nothing.
            PersistenceError: Store failure.
        """
        self.store.remove(reservation_id)
        logger.info(
            "reservation removed",
            extra={"extra_fields": {"reservation_id": reservation_id}},
        )

    def _handle_conflicts(
        self,
        room: str,
        conflicts: list[Reservation],
        allow_conflicts: bool,
        *,
        reservation_id: str | None,
    ) -> None:
        if not conflicts:
            return

        logger.warning(
            "room conflict detected",
            extra={
                "extra_fields": {
                    "room": room,
                    "reservation_id": reservation_id,
                    "conflicting_reservation_ids": [c.id for c in conflicts],
                    "allowed": allow_conflicts,
                }
            },
        )
        if not allow_conflicts:
            raise ConflictWarning(room, conflicts)
