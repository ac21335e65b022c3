"""Request-scoped accessors for objects built by the app factory."""

from fastapi import Request

from farmhouse.domain.lifecycle import ReservationManager
from farmhouse.domain.rooms import RoomRegistry


def get_manager(request: Request) -> ReservationManager:
    return request.app.state.manager


def get_registry(request: Request) -> RoomRegistry:
    return request.app.state.manager.registry
