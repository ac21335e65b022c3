"""Tests for environment settings and store selection."""

import pytest

from farmhouse.domain.errors import ConfigurationError
from farmhouse.domain.rooms import DEFAULT_ROOMS
from farmhouse.infra.settings import Settings, load_settings
from farmhouse.infra.stores.factory import build_store
from farmhouse.infra.stores.memory import InMemoryReservationStore
from farmhouse.infra.stores.postgres import PostgresReservationStore


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings({})
        assert settings.registry.list_rooms() == DEFAULT_ROOMS
        assert settings.password == ""
        assert settings.store_backend == "memory"
        assert settings.data_file is None
        assert settings.log_level == "INFO"

    def test_full_environment(self):
        settings = load_settings({
            "FARMHOUSE_ROOMS": "Porch,Attic",
            "FARMHOUSE_PASSWORD": "secret",
            "RESERVATIONS_BACKEND": "Postgres",
            "DATABASE_URL": "postgresql://u:p@localhost/farm",
            "LOG_LEVEL": "debug",
        })
        assert settings.registry.list_rooms() == ("Porch", "Attic")
        assert settings.password == "secret"
        assert settings.store_backend == "postgres"
        assert settings.database_url == "postgresql://u:p@localhost/farm"
        assert settings.log_level == "DEBUG"

    def test_unknown_backend(self):
        with pytest.raises(ConfigurationError):
            load_settings({"RESERVATIONS_BACKEND": "supabase"})

    def test_postgres_requires_url(self):
        with pytest.raises(ConfigurationError):
            load_settings({"RESERVATIONS_BACKEND": "postgres"})

    def test_bad_rooms(self):
        with pytest.raises(ConfigurationError):
            load_settings({"FARMHOUSE_ROOMS": "A,A"})


class TestBuildStore:
    def test_memory(self, tmp_path):
        store = build_store(Settings(data_file=str(tmp_path / "r.json")))
        assert isinstance(store, InMemoryReservationStore)

    def test_postgres(self):
        store = build_store(Settings(store_backend="postgres", database_url="postgresql://x/y"))
        assert isinstance(store, PostgresReservationStore)
        assert store.label == "shared database"
