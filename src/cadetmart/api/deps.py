# Shared FastAPI dependencies for the API layer.
# Created: 2026-10-19

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from cadetmart.config import Settings
from cadetmart.security.session_tokens import SessionToken, SessionTokenAuthority, decode_token


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_authority(request: Request) -> SessionTokenAuthority:
    """Session authority the running app was built with."""
    return request.app.state.authority


async def require_inventory_session(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    authority: SessionTokenAuthority = Depends(get_authority),
) -> SessionToken:
    """FastAPI dependency that gates inventory dashboard endpoints.

    Usage::

        @router.get("/inventory/list")
        async def list_inventory(session=Depends(require_inventory_session)): ...

    Reads the session cookie and raises 401 unless it holds a valid token.
    The response never says why a token was refused.
    """
    raw = request.cookies.get(settings.session_cookie_name)
    if not raw or not authority.validate_token(raw):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return decode_token(raw)
