"""Print a month of reservations as a text calendar.

Usage:
    FARMHOUSE_DATA_FILE=... uv run python scripts/show_month.py 2024 7
    RESERVATIONS_BACKEND=postgres DATABASE_URL=... uv run python scripts/show_month.py 2024 7

MONTH is 1-12 here; each day shows rooms remaining, and the guests
present that night are listed under the grid.
"""

from __future__ import annotations

import sys


def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: uv run python scripts/show_month.py <year> <month 1-12>")
        sys.exit(2)

    try:
        year = int(sys.argv[1])
        month_index = int(sys.argv[2]) - 1
    except ValueError:
        print("ERROR: year and month must be integers")
        sys.exit(2)

    # Import after argument validation so a bad call doesn't touch storage
    from farmhouse.domain.calendar_grid import month_bounds, month_grid
    from farmhouse.domain.errors import FarmhouseError
    from farmhouse.domain.occupancy import build_day_index
    from farmhouse.infra.settings import load_settings
    from farmhouse.infra.stores.factory import build_store
    from farmhouse.observability.correlation import bound_correlation_id

    with bound_correlation_id("script:show_month"):
        try:
            settings = load_settings()
            grid = month_grid(year, month_index)
            store = build_store(settings)
            first, after_last = month_bounds(year, month_index)
            index = build_day_index(store.list(), settings.registry, start=first, end=after_last)
        except FarmhouseError as e:
            print(f"ERROR: {e}")
            sys.exit(1)

    print(f"{first:%B %Y}  ({len(settings.registry)} rooms, storage: {store.label})")
    print("  Su    Mo    Tu    We    Th    Fr    Sa")
    for week in grid:
        cells = []
        for day in week:
            if day is None:
                cells.append("      ")
                continue
            occupancy = index.get(day)
            remaining = occupancy.rooms_remaining if occupancy else len(settings.registry)
            cells.append(f"{day.day:>2}/{remaining:<2} ")
        print("".join(cells).rstrip())

    print()
    for day, occupancy in index.items():
        print(f"{day.isoformat()}  {', '.join(occupancy.names)}")


if __name__ == "__main__":
    main()
