"""Application settings loaded from environment variables.

Variables:
- FARMHOUSE_ROOMS: JSON array or comma-separated room names
- FARMHOUSE_PASSWORD: shared family password (empty = gate fails closed)
- RESERVATIONS_BACKEND: "memory" (default) or "postgres"
- FARMHOUSE_DATA_FILE: JSON file for the memory backend (optional)
- DATABASE_URL: required for the postgres backend
- LOG_LEVEL: logging level name (default INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal, Mapping

from farmhouse.domain.errors import ConfigurationError
from farmhouse.domain.rooms import RoomRegistry

StoreBackend = Literal["memory", "postgres"]

_BACKENDS = ("memory", "postgres")


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process."""

    registry: RoomRegistry = field(default_factory=RoomRegistry)
    password: str = ""
    store_backend: StoreBackend = "memory"
    data_file: str | None = None
    database_url: str | None = None
    log_level: str = "INFO"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read instead of os.environ (tests).

    Raises:
        ConfigurationError: Invalid rooms, unknown backend, or postgres
            selected without DATABASE_URL.
    """
    env = os.environ if environ is None else environ

    try:
        registry = RoomRegistry.from_config(env.get("FARMHOUSE_ROOMS"))
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    backend = env.get("RESERVATIONS_BACKEND", "memory").strip().lower() or "memory"
    if backend not in _BACKENDS:
        raise ConfigurationError(f"Unknown RESERVATIONS_BACKEND: {backend}")

    database_url = env.get("DATABASE_URL") or None
    if backend == "postgres" and not database_url:
        raise ConfigurationError("DATABASE_URL is required for the postgres backend")

    return Settings(
        registry=registry,
        password=env.get("FARMHOUSE_PASSWORD", ""),
        store_backend=backend,  # type: ignore[arg-type]
        data_file=env.get("FARMHOUSE_DATA_FILE") or None,
        database_url=database_url,
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )
