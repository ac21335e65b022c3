"""Date-range primitives shared by availability and occupancy.

Occupied nights of a stay are the half-open interval [start, end):
the start date is the first night, the end date is checkout day.

Overlap formula:  (a_start < b_end) AND (b_start < a_end)
Strict inequality lets one party check out on the day the next arrives.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator

from farmhouse.domain.errors import ValidationError

_ONE_DAY = timedelta(days=1)


def overlaps(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Return True if [a_start, a_end) and [b_start, b_end) share a night.

    Zero-length or inverted ranges never overlap anything.
    """
    if a_start >= a_end or b_start >= b_end:
        return False
    return a_start < b_end and b_start < a_end


def iter_nights(start: date, end: date) -> Iterator[date]:
    """Yield every occupied night in [start, end)."""
    day = start
    while day < end:
        yield day
        day += _ONE_DAY


def count_nights(start: date, end: date) -> int:
    return max(0, (end - start).days)


def parse_iso_date(value: date | str, field: str | None = None) -> date:
    """Coerce a ``date`` or ``YYYY-MM-DD`` string to a ``date``.

    Raises:
        ValidationError: If the value is missing, a datetime, or malformed.
    """
    # datetime is a date subclass; a time component has no meaning here
    if isinstance(value, datetime):
        raise ValidationError("expected a calendar date without time", field=field)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("date is required", field=field)
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"invalid date {value!r}, expected YYYY-MM-DD", field=field)


def require_range(start: date, end: date) -> None:
    """Raise ValidationError unless end is strictly after start."""
    if end <= start:
        raise ValidationError("end_date must be after start_date", field="end_date")
