"""FastAPI application factory.

Builds the app around one ReservationManager whose store is chosen from
settings (or passed in directly by tests and scripts).
"""

from __future__ import annotations

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from farmhouse.domain.errors import (
    ConflictWarning,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from farmhouse.domain.lifecycle import ReservationManager
from farmhouse.infra.settings import Settings, load_settings
from farmhouse.infra.stores.base import ReservationStore
from farmhouse.infra.stores.factory import build_store
from farmhouse.observability.correlation import CORRELATION_ID_HEADER, bound_correlation_id
from farmhouse.observability.logging import get_logger, set_log_level

from .routes import availability, calendar, public, reservations, rooms

logger = get_logger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.message, "field": exc.field})

    @app.exception_handler(ConflictWarning)
    async def conflict_warning(request: Request, exc: ConflictWarning) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={
                "detail": "room_conflict",
                "room": exc.room,
                "conflicts": [c.to_record() for c in exc.conflicts],
            },
        )

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": "reservation_not_found"})

    @app.exception_handler(PersistenceError)
    async def persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
        logger.error(
            "request failed on storage",
            extra={"extra_fields": {"path": request.url.path, "error": str(exc)}},
        )
        return JSONResponse(status_code=503, content={"detail": "storage_unavailable"})


def create_app(
    settings: Settings | None = None,
    store: ReservationStore | None = None,
) -> FastAPI:
    """Create the FastAPI app.

    Args:
        settings: Explicit settings. If None, read from the environment.
        store: Explicit store. If None, built from settings.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = load_settings()
    set_log_level(settings.log_level)
    if store is None:
        store = build_store(settings)

    app = FastAPI(
        title="Farmhouse Reservations",
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.manager = ReservationManager(store, settings.registry)

    # Correlation ID middleware
    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        incoming = request.headers.get(CORRELATION_ID_HEADER)
        with bound_correlation_id(incoming) as cid:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response

    _register_error_handlers(app)

    app.include_router(public.router)
    app.include_router(rooms.router)
    app.include_router(reservations.router)
    app.include_router(availability.router)
    app.include_router(calendar.router)

    return app
