"""Availability and occupancy endpoints.

Provides:
- GET /availability: free and booked rooms for a date range
- GET /availability/{room}: conflicting reservations for one room
- GET /occupancy: night-by-night occupancy for a date range

All ranges are half-open: start_date is the first night, end_date the
checkout day.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from farmhouse.api.auth import require_password
from farmhouse.api.deps import get_manager
from farmhouse.domain.availability import room_availability, rooms_available
from farmhouse.domain.dates import count_nights, require_range
from farmhouse.domain.lifecycle import ReservationManager
from farmhouse.domain.occupancy import build_day_index

router = APIRouter(tags=["availability"], dependencies=[Depends(require_password)])

MAX_RANGE_DAYS = 366


@router.get("/availability")
def get_availability(
    start_date: date = Query(..., description="First night (YYYY-MM-DD)"),
    end_date: date = Query(..., description="Checkout day (YYYY-MM-DD)"),
    manager: ReservationManager = Depends(get_manager),
) -> dict:
    result = rooms_available(manager.snapshot(), manager.registry, start_date, end_date)
    return {
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        **result.to_dict(),
    }


@router.get("/availability/{room}")
def get_room_availability(
    room: str = Path(..., description="Room name"),
    start_date: date = Query(...),
    end_date: date = Query(...),
    manager: ReservationManager = Depends(get_manager),
) -> dict:
    if room not in manager.registry:
        raise HTTPException(status_code=404, detail="room_not_found")

    conflicts = room_availability(manager.snapshot(), room, start_date, end_date)
    return {
        "room": room,
        "available": not conflicts,
        "conflicts": [c.to_record() for c in conflicts],
    }


@router.get("/occupancy")
def get_occupancy(
    start_date: date = Query(...),
    end_date: date = Query(...),
    manager: ReservationManager = Depends(get_manager),
) -> dict:
    """Nights with at least one guest in [start_date, end_date)."""
    require_range(start_date, end_date)
    if count_nights(start_date, end_date) > MAX_RANGE_DAYS:
        raise HTTPException(
            status_code=400,
            detail=f"Date range cannot exceed {MAX_RANGE_DAYS} days",
        )

    index = build_day_index(
        manager.snapshot(),
        manager.registry,
        start=start_date,
        end=end_date,
    )
    return {
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        "total_rooms": len(manager.registry),
        "days": [day.to_dict(manager.registry) for day in index.values()],
    }
