"""Shared-password gate.

Every family member uses the same password, sent on each request in the
X-Farmhouse-Password header. There are no user accounts.

Fail-closed: when FARMHOUSE_PASSWORD is not configured every gated
request is rejected.
"""

from __future__ import annotations

import hmac

from fastapi import HTTPException, Request

from farmhouse.infra.settings import Settings
from farmhouse.observability.logging import get_logger

logger = get_logger(__name__)

PASSWORD_HEADER = "X-Farmhouse-Password"


def check_password(settings: Settings, candidate: str | None) -> bool:
    """Constant-time comparison against the configured password."""
    if not settings.password:
        logger.error(
            "FARMHOUSE_PASSWORD not configured - fail closed",
            extra={"extra_fields": {"reason": "missing_password_env"}},
        )
        return False
    if not candidate:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), settings.password.encode("utf-8"))


def require_password(request: Request) -> None:
    """FastAPI dependency rejecting requests without the family password.

    Raises:
        HTTPException: 401 when the header is missing or wrong.
    """
    settings: Settings = request.app.state.settings
    if not check_password(settings, request.headers.get(PASSWORD_HEADER)):
        logger.warning(
            "password gate rejected request",
            extra={"extra_fields": {"path": request.url.path}},
        )
        raise HTTPException(
            status_code=401,
            detail="Incorrect password",
            headers={"WWW-Authenticate": PASSWORD_HEADER},
        )
