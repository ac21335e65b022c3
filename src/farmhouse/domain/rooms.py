"""Room registry - the fixed, ordered set of rooms in the house.

Rooms come from configuration only; nothing creates or removes them at
runtime. Registry order drives board and grid layout.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Iterator

DEFAULT_ROOMS: tuple[str, ...] = (
    "Queen next to Bathroom",
    "The One With The Sleeping Porch",
    "Over the Kitchen",
    "Upstairs Books",
    "Left at the Top of the Stairs",
    "Blacksmith's Shop",
)


@dataclass(frozen=True)
class RoomRegistry:
    """Immutable ordered collection of room identifiers."""

    rooms: tuple[str, ...] = DEFAULT_ROOMS

    def __post_init__(self) -> None:
        rooms = tuple(self.rooms)
        if not rooms:
            raise ValueError("Room registry cannot be empty")
        for room in rooms:
            if not isinstance(room, str) or not room.strip():
                raise ValueError(f"Invalid room name: {room!r}")
        if len(set(rooms)) != len(rooms):
            raise ValueError("Room registry contains duplicate names")
        object.__setattr__(self, "rooms", rooms)

    def list_rooms(self) -> tuple[str, ...]:
        return self.rooms

    def index(self, room: str) -> int:
        """Display position of a room (ValueError if unknown)."""
        return self.rooms.index(room)

    def __contains__(self, room: object) -> bool:
        return room in self.rooms

    def __iter__(self) -> Iterator[str]:
        return iter(self.rooms)

    def __len__(self) -> int:
        return len(self.rooms)

    @classmethod
    def from_config(cls, raw: str | None) -> "RoomRegistry":
        """Build a registry from a JSON array or comma-separated list.

        Empty or missing configuration yields the default rooms.
        """
        if raw is None or not raw.strip():
            return cls()

        text = raw.strip()
        if text.startswith("["):
            try:
                names = json.loads(text)
            except json.JSONDecodeError as e:
                raise ValueError(f"FARMHOUSE_ROOMS is not valid JSON: {e}") from e
            if not isinstance(names, list):
                raise ValueError("FARMHOUSE_ROOMS JSON must be an array of strings")
        else:
            names = [part for part in text.split(",") if part.strip()]

        return cls(tuple(str(name).strip() for name in names))
