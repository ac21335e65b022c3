"""Month calendar grid.

Weeks run Sunday to Saturday. Cells outside the target month are None
rather than adjacent-month dates, so they carry no occupancy and cannot
be selected.
"""

from __future__ import annotations

import calendar
from datetime import date
from typing import Any, Mapping

from farmhouse.domain.errors import ValidationError
from farmhouse.domain.occupancy import DayOccupancy
from farmhouse.domain.rooms import RoomRegistry

_SUNDAY_FIRST = calendar.Calendar(firstweekday=calendar.SUNDAY)

Week = list[date | None]


def month_grid(year: int, month_index: int) -> list[Week]:
    """Build the week rows for a month.

    Args:
        year: Four-digit year.
        month_index: Zero-based month (0 = January).

    Returns:
        List of 7-cell weeks; the first starts on the Sunday on/before
        the 1st and the last ends on the Saturday on/after month end.

    Raises:
        ValidationError: If month_index is outside 0..11 or year is unsupported.
    """
    if not 0 <= month_index <= 11:
        raise ValidationError("month_index must be between 0 and 11", field="month_index")
    # Padding weeks reach into the neighbouring years
    if not date.min.year < year < date.max.year:
        raise ValidationError("year out of range", field="year")

    month = month_index + 1
    return [
        [day if day.month == month else None for day in week]
        for week in _SUNDAY_FIRST.monthdatescalendar(year, month)
    ]


def shift_month(year: int, month_index: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (or back) from (year, month_index)."""
    total = year * 12 + month_index + delta
    return total // 12, total % 12


def month_bounds(year: int, month_index: int) -> tuple[date, date]:
    """Return [first day, first day of next month)."""
    next_year, next_index = shift_month(year, month_index, 1)
    return date(year, month_index + 1, 1), date(next_year, next_index + 1, 1)


def attach_occupancy(
    grid: list[Week],
    day_index: Mapping[date, DayOccupancy],
    registry: RoomRegistry,
) -> list[list[dict[str, Any] | None]]:
    """Combine grid cells with the per-day index for rendering.

    Days without reservations get an empty cell with every room remaining.
    """
    total = len(registry)
    weeks: list[list[dict[str, Any] | None]] = []
    for week in grid:
        row: list[dict[str, Any] | None] = []
        for day in week:
            if day is None:
                row.append(None)
                continue
            occupancy = day_index.get(day)
            if occupancy is None:
                row.append({
                    "date": day.isoformat(),
                    "names": [],
                    "occupied_rooms": [],
                    "rooms_remaining": total,
                })
            else:
                row.append(occupancy.to_dict(registry))
        weeks.append(row)
    return weeks
