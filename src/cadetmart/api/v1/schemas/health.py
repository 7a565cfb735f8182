# Health schemas.
# Created: 2026-10-19

from __future__ import annotations

from pydantic import BaseModel


class HealthSummary(BaseModel):
    """Service health summary."""

    status: str = "ok"
    auth_configured: bool = False
