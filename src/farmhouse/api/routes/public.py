"""Ungated routes: health check and password verification."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict

from farmhouse.api.auth import check_password

router = APIRouter()


class PasswordCheckRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    password: str


@router.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.post("/auth/check")
def auth_check(body: PasswordCheckRequest, request: Request) -> dict:
    """Verify the family password before the client stores it.

    Returns 401 on mismatch, same as any gated route.
    """
    if not check_password(request.app.state.settings, body.password):
        raise HTTPException(status_code=401, detail="Incorrect password")
    return {"ok": True}
