# Health router.
# Created: 2026-10-19

from __future__ import annotations

from fastapi import APIRouter, Depends

from cadetmart.api.deps import get_authority
from cadetmart.api.v1.schemas.health import HealthSummary
from cadetmart.security.session_tokens import SessionTokenAuthority

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthSummary)
async def get_health_status(authority: SessionTokenAuthority = Depends(get_authority)):
    """Report liveness and whether the inventory password is configured."""
    return HealthSummary(auth_configured=authority.config.password_configured)
