# Inventory auth router — login, session validation, logout, session info.
# Created: 2026-10-19
#
# The dashboard logs in with the shared inventory password and receives an
# HTTP-only session cookie. Validation never reveals why a cookie was refused.

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from cadetmart.api.deps import get_app_settings, get_authority, require_inventory_session
from cadetmart.api.v1.schemas.auth import LoginRequest, SessionInfoResponse, ValidateResponse
from cadetmart.api.v1.schemas.common import ErrorResponse, SuccessResponse
from cadetmart.config import Settings, session_cookie_config
from cadetmart.security.session_tokens import SessionToken, SessionTokenAuthority

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Inventory Auth"])


def _ms_to_datetime(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=UTC)


@router.post(
    "/inventory/auth",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def inventory_login(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    authority: SessionTokenAuthority = Depends(get_authority),
):
    """Check the inventory password and set the session cookie."""
    try:
        body = await request.json()
        login = LoginRequest.model_validate(body)
    except (ValueError, ValidationError):
        raise HTTPException(status_code=400, detail="Password required")

    if not authority.verify_password(login.password):
        client_ip = request.client.host if request.client else "unknown"
        logger.warning("Failed inventory login from %s", client_ip)
        raise HTTPException(status_code=401, detail="Invalid password")

    session_token = authority.issue_token(login.password)

    response = JSONResponse(content=SuccessResponse().model_dump())
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_token,
        **session_cookie_config(settings),
    )
    return response


@router.get(
    "/inventory/validate",
    response_model=ValidateResponse,
    responses={401: {"model": ValidateResponse}},
)
async def validate_inventory_session(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    authority: SessionTokenAuthority = Depends(get_authority),
):
    """Report whether the session cookie is currently valid."""
    session_token = request.cookies.get(settings.session_cookie_name)
    if not session_token or not authority.validate_token(session_token):
        return JSONResponse(status_code=401, content=ValidateResponse(valid=False).model_dump())
    return ValidateResponse(valid=True)


@router.post("/inventory/validate", response_model=SuccessResponse)
@router.post("/inventory/logout", response_model=SuccessResponse)
async def inventory_logout(settings: Settings = Depends(get_app_settings)):
    """Clear the session cookie. Nothing is revoked server-side."""
    response = JSONResponse(content=SuccessResponse().model_dump())
    response.delete_cookie(key=settings.session_cookie_name, path="/")
    return response


@router.get("/inventory/session", response_model=SessionInfoResponse)
async def get_inventory_session(
    session: SessionToken = Depends(require_inventory_session),
    authority: SessionTokenAuthority = Depends(get_authority),
):
    """Issuance and expiry of the caller's session."""
    return SessionInfoResponse(
        issued_at=_ms_to_datetime(session.issued_at_ms),
        expires_at=_ms_to_datetime(authority.expires_at_ms(session)),
    )
