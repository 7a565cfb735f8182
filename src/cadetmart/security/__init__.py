"""Inventory dashboard security: password-bound session tokens."""

from cadetmart.security.session_tokens import (
    MAX_SESSION_AGE,
    SessionConfig,
    SessionTokenAuthority,
    TokenStatus,
)

__all__ = ["MAX_SESSION_AGE", "SessionConfig", "SessionTokenAuthority", "TokenStatus"]
