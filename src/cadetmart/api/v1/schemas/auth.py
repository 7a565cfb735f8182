# Inventory auth schemas.
# Created: 2026-10-19

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Inventory dashboard login request."""

    password: str = Field(..., min_length=1, description="Inventory dashboard password")


class ValidateResponse(BaseModel):
    """Session cookie validation result."""

    valid: bool


class SessionInfoResponse(BaseModel):
    """Issuance and expiry of the caller's own session."""

    issued_at: datetime
    expires_at: datetime
