"""Shared pytest fixtures for Farmhouse tests."""
import sys
sys.dont_write_bytecode = True

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from farmhouse.api.factory import create_app  # noqa: E402
from farmhouse.domain.reservations import Reservation  # noqa: E402
from farmhouse.domain.rooms import RoomRegistry  # noqa: E402
from farmhouse.infra.settings import Settings  # noqa: E402
from farmhouse.infra.stores.memory import InMemoryReservationStore  # noqa: E402
from helpers import PASSWORD, make_reservation  # noqa: E402


@pytest.fixture
def registry() -> RoomRegistry:
    return RoomRegistry(("A", "B"))


@pytest.fixture
def alice() -> Reservation:
    return make_reservation("res-alice", "A", date(2024, 7, 1), date(2024, 7, 5), name="Alice")


@pytest.fixture
def bob() -> Reservation:
    return make_reservation("res-bob", "B", date(2024, 7, 3), date(2024, 7, 10), name="Bob")


@pytest.fixture
def store(alice, bob) -> InMemoryReservationStore:
    return InMemoryReservationStore([alice, bob])


@pytest.fixture
def settings(registry) -> Settings:
    return Settings(registry=registry, password=PASSWORD)


@pytest.fixture
def client(settings, store) -> TestClient:
    return TestClient(create_app(settings=settings, store=store))
