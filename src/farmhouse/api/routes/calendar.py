"""Month calendar endpoint.

GET /calendar?year=2024&month_index=6 → Sunday-first week rows for July
2024, each in-month day carrying guest names and rooms remaining.
month_index is zero-based (0 = January).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from farmhouse.api.auth import require_password
from farmhouse.api.deps import get_manager
from farmhouse.domain.calendar_grid import attach_occupancy, month_bounds, month_grid, shift_month
from farmhouse.domain.lifecycle import ReservationManager
from farmhouse.domain.occupancy import build_day_index

router = APIRouter(prefix="/calendar", tags=["calendar"], dependencies=[Depends(require_password)])


def _month_ref(year: int, month_index: int) -> dict:
    return {"year": year, "month_index": month_index}


@router.get("")
def get_calendar(
    year: int = Query(..., ge=2, le=9998),
    month_index: int = Query(..., ge=0, le=11),
    manager: ReservationManager = Depends(get_manager),
) -> dict:
    grid = month_grid(year, month_index)
    first, after_last = month_bounds(year, month_index)
    index = build_day_index(manager.snapshot(), manager.registry, start=first, end=after_last)

    return {
        **_month_ref(year, month_index),
        "rooms": list(manager.registry.list_rooms()),
        "weeks": attach_occupancy(grid, index, manager.registry),
        "previous": _month_ref(*shift_month(year, month_index, -1)),
        "next": _month_ref(*shift_month(year, month_index, 1)),
    }
