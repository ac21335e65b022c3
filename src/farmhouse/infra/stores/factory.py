"""Store selection.

Backend is picked once from settings:
- memory (default): process-local list, optionally saved to FARMHOUSE_DATA_FILE
- postgres: shared reservations table at DATABASE_URL
"""

from farmhouse.infra.settings import Settings
from farmhouse.infra.stores.base import ReservationStore
from farmhouse.observability.logging import get_logger

logger = get_logger(__name__)


def build_store(settings: Settings) -> ReservationStore:
    """Construct the reservation store named by ``settings.store_backend``.

    Raises:
        ValueError: If the backend is unknown.
    """
    if settings.store_backend == "memory":
        from farmhouse.infra.stores.memory import InMemoryReservationStore

        store: ReservationStore = InMemoryReservationStore(path=settings.data_file)

    elif settings.store_backend == "postgres":
        from farmhouse.infra.stores.postgres import PostgresReservationStore

        store = PostgresReservationStore(settings.database_url)

    else:
        raise ValueError(f"Unknown RESERVATIONS_BACKEND: {settings.store_backend}")

    logger.info(
        "reservation store ready",
        extra={"extra_fields": {"backend": settings.store_backend, "storage": store.label}},
    )
    return store
