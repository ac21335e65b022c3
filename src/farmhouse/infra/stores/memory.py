"""In-memory reservation store with optional JSON file persistence.

Without a path the data lives only as long as the process. With a path
every write rewrites the file atomically, so a single-host install keeps
its reservations across restarts without a database.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, Mapping

from farmhouse.domain.errors import NotFoundError, PersistenceError, ValidationError
from farmhouse.domain.reservations import Reservation, sort_by_start
from farmhouse.infra.stores.base import ReservationStore
from farmhouse.observability.logging import get_logger

logger = get_logger(__name__)


class InMemoryReservationStore(ReservationStore):
    """Thread-safe list of reservations, optionally mirrored to a JSON file."""

    def __init__(
        self,
        reservations: Iterable[Reservation] = (),
        *,
        path: str | os.PathLike[str] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._path = Path(path) if path is not None else None
        self._rows: list[Reservation] = list(reservations)
        if self._path is not None and self._path.exists():
            self._rows.extend(self._load())
        self.label = f"local file ({self._path})" if self._path else "in-memory (not shared)"

    def list(self) -> list[Reservation]:
        with self._lock:
            return sort_by_start(self._rows)

    def add(self, reservation: Reservation) -> None:
        with self._lock:
            if any(r.id == reservation.id for r in self._rows):
                raise PersistenceError(f"Duplicate reservation id: {reservation.id}")
            rows = [*self._rows, reservation]
            self._save(rows)
            self._rows = rows

    def remove(self, reservation_id: str) -> None:
        with self._lock:
            kept = [r for r in self._rows if r.id != reservation_id]
            if len(kept) == len(self._rows):
                raise NotFoundError(reservation_id)
            self._save(kept)
            self._rows = kept

    def update(self, reservation_id: str, fields: Mapping[str, Any]) -> None:
        with self._lock:
            for i, row in enumerate(self._rows):
                if row.id == reservation_id:
                    rows = list(self._rows)
                    rows[i] = replace(row, **fields)
                    self._save(rows)
                    self._rows = rows
                    return
            raise NotFoundError(reservation_id)

    # ── File persistence ─────────────────────────────────────────────────

    def _load(self) -> list[Reservation]:
        assert self._path is not None
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8") or "[]")
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read reservations file {self._path}: {e}") from e

        if not isinstance(raw, list):
            raise PersistenceError(f"Reservations file {self._path} must hold a JSON array")

        rows: list[Reservation] = []
        for record in raw:
            try:
                rows.append(Reservation.from_record(record))
            except (ValidationError, AttributeError) as e:
                # Skip a damaged record rather than losing the whole file
                logger.warning(
                    "skipping unreadable reservation record",
                    extra={"extra_fields": {"path": str(self._path), "error": str(e)}},
                )
        return rows

    def _save(self, rows: list[Reservation]) -> None:
        if self._path is None:
            return

        payload = json.dumps([r.to_record() for r in rows], indent=2)
        tmp: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".reservations-")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp, self._path)
        except OSError as e:
            if tmp is not None:
                Path(tmp).unlink(missing_ok=True)
            raise PersistenceError(f"Cannot write reservations file {self._path}: {e}") from e
