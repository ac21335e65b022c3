"""Rooms endpoint.

GET /rooms → configured rooms in display order, plus where data is stored.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from farmhouse.api.auth import require_password
from farmhouse.api.deps import get_manager
from farmhouse.domain.lifecycle import ReservationManager

router = APIRouter(prefix="/rooms", tags=["rooms"], dependencies=[Depends(require_password)])


@router.get("")
def list_rooms(manager: ReservationManager = Depends(get_manager)) -> dict:
    return {
        "rooms": list(manager.registry.list_rooms()),
        "storage": manager.store.label,
    }
