"""Reservations endpoints.

GET    /reservations[?room=...]        → list, sorted by start date
GET    /reservations/by-room           → room board (registry order)
POST   /reservations/preview           → conflicts for a candidate
POST   /reservations                   → create (201, 409 on conflict)
PATCH  /reservations/{id}              → partial update (409 on conflict)
DELETE /reservations/{id}              → delete (204)

A 409 response lists the conflicting reservations. Resubmitting with
allow_conflicts=true saves anyway.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response
from pydantic import BaseModel, ConfigDict

from farmhouse.api.auth import require_password
from farmhouse.api.deps import get_manager
from farmhouse.domain.lifecycle import ReservationManager
from farmhouse.domain.reservations import ReservationDraft, group_by_room

router = APIRouter(
    prefix="/reservations",
    tags=["reservations"],
    dependencies=[Depends(require_password)],
)


# ── Schemas ───────────────────────────────────────────────────────────────────


class CreateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    room: str
    start_date: date
    end_date: date
    status: str = "hopeful"
    notes: str = ""
    allow_conflicts: bool = False


class PreviewRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    room: str
    start_date: date
    end_date: date
    exclude_id: str | None = None


class UpdateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    room: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str | None = None
    notes: str | None = None
    allow_conflicts: bool = False


# ── GET ───────────────────────────────────────────────────────────────────────


@router.get("")
def list_reservations(
    room: str | None = Query(None, description="Only this room"),
    manager: ReservationManager = Depends(get_manager),
) -> list[dict]:
    rows = manager.snapshot()
    if room is not None:
        rows = tuple(r for r in rows if r.room == room)
    return [r.to_record() for r in rows]


@router.get("/by-room")
def reservations_by_room(manager: ReservationManager = Depends(get_manager)) -> list[dict]:
    """Room board: every configured room with its reservations by start date."""
    grouped = group_by_room(manager.snapshot(), manager.registry)
    return [
        {
            "room": room,
            "count": len(rows),
            "reservations": [r.to_record() for r in rows],
        }
        for room, rows in grouped.items()
    ]


# ── POST ──────────────────────────────────────────────────────────────────────


@router.post("/preview")
def preview_reservation(
    body: PreviewRequest,
    manager: ReservationManager = Depends(get_manager),
) -> dict:
    """Check a room and date range while a form is being filled in."""
    draft = ReservationDraft(
        name="",
        room=body.room,
        start_date=body.start_date,
        end_date=body.end_date,
    )
    conflicts = manager.preview(draft, exclude_id=body.exclude_id)
    return {
        "available": not conflicts,
        "conflicts": [c.to_record() for c in conflicts],
    }


@router.post("", status_code=201)
def create_reservation(
    body: CreateReservationRequest,
    manager: ReservationManager = Depends(get_manager),
) -> dict:
    """Create a reservation.

    Fails with 409 listing the overlaps unless allow_conflicts is set.
    """
    draft = ReservationDraft.from_fields(body.model_dump(exclude={"allow_conflicts"}))
    reservation = manager.create(draft, allow_conflicts=body.allow_conflicts)
    return reservation.to_record()


# ── PATCH / DELETE ────────────────────────────────────────────────────────────


@router.patch("/{reservation_id}")
def update_reservation(
    reservation_id: str = Path(..., description="Reservation ID"),
    body: UpdateReservationRequest = ...,
    manager: ReservationManager = Depends(get_manager),
) -> dict:
    """Update only the provided fields."""
    patch = body.model_dump(exclude={"allow_conflicts"}, exclude_none=True)
    if not patch:
        raise HTTPException(status_code=400, detail="No fields to update")

    reservation = manager.update(reservation_id, patch, allow_conflicts=body.allow_conflicts)
    return reservation.to_record()


@router.delete("/{reservation_id}", status_code=204)
def delete_reservation(
    reservation_id: str = Path(..., description="Reservation ID"),
    manager: ReservationManager = Depends(get_manager),
) -> Response:
    manager.remove(reservation_id)
    return Response(status_code=204)
