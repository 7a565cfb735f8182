"""Password-bound HMAC session tokens for the inventory dashboard.

Token format: ``{hash_prefix}.{hex_hmac}.{issued_at_ms}``

``hash_prefix`` is the first 16 hex characters of
``sha256(password + signing_secret)`` and the HMAC is keyed with the full hex
digest, so changing the dashboard password instantly invalidates every
outstanding token.  No server-side session store is required.

Sessions last exactly ``MAX_SESSION_AGE``: a token is valid for
``issued_at_ms <= now < issued_at_ms + MAX_SESSION_AGE``.
"""

from __future__ import annotations

import enum
import hashlib
import hmac
import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta

__all__ = [
    "MAX_SESSION_AGE",
    "HASH_PREFIX_LENGTH",
    "SessionConfig",
    "SessionToken",
    "SessionTokenAuthority",
    "TokenStatus",
    "encode_token",
    "decode_token",
    "SessionTokenError",
    "ConfigurationError",
    "MalformedTokenError",
    "RotationInvalidation",
    "SignatureMismatchError",
    "ExpiredTokenError",
    "FutureTimestampError",
    "InvalidCredentialsError",
]

logger = logging.getLogger(__name__)

MAX_SESSION_AGE = timedelta(days=7)
HASH_PREFIX_LENGTH = 16

_MAX_AGE_MS = int(MAX_SESSION_AGE.total_seconds() * 1000)
_TIMESTAMP_RE = re.compile(r"[0-9]{1,20}")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class SessionTokenError(Exception):
    """Base class for session token failures."""


class ConfigurationError(SessionTokenError):
    """The inventory password is not configured."""


class MalformedTokenError(SessionTokenError):
    """Token does not have the three-field shape or its timestamp is not numeric."""


class RotationInvalidation(SessionTokenError):
    """Token was issued under a password that is no longer current."""


class SignatureMismatchError(SessionTokenError):
    """Token signature does not match the recomputed HMAC."""


class ExpiredTokenError(SessionTokenError):
    """Token is older than ``MAX_SESSION_AGE``."""


class FutureTimestampError(SessionTokenError):
    """Token claims to have been issued in the future."""


class InvalidCredentialsError(SessionTokenError):
    """A token was requested for a password that does not verify."""


class TokenStatus(enum.Enum):
    """Diagnostic outcome of a token check. Only ``VALID`` grants access."""

    VALID = "valid"
    MALFORMED = "malformed"
    MISCONFIGURED = "misconfigured"
    ROTATED = "rotated"
    TAMPERED = "tampered"
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"


_STATUS_BY_ERROR: dict[type[SessionTokenError], TokenStatus] = {
    MalformedTokenError: TokenStatus.MALFORMED,
    ConfigurationError: TokenStatus.MISCONFIGURED,
    RotationInvalidation: TokenStatus.ROTATED,
    SignatureMismatchError: TokenStatus.TAMPERED,
    ExpiredTokenError: TokenStatus.EXPIRED,
    FutureTimestampError: TokenStatus.NOT_YET_VALID,
}


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SessionToken:
    """Decoded token fields. ``issued_at`` keeps the exact wire text that was signed."""

    hash_prefix: str
    signature: str
    issued_at: str

    @property
    def issued_at_ms(self) -> int:
        return int(self.issued_at)


def encode_token(token: SessionToken) -> str:
    return f"{token.hash_prefix}.{token.signature}.{token.issued_at}"


def decode_token(raw: str) -> SessionToken:
    """Parse a token string. Raises ``MalformedTokenError`` on any shape problem."""
    if not isinstance(raw, str):
        raise MalformedTokenError("token is not a string")

    parts = raw.split(".")
    if len(parts) != 3 or not all(parts):
        raise MalformedTokenError("expected three non-empty dot-separated fields")

    hash_prefix, signature, issued_at = parts
    if not _TIMESTAMP_RE.fullmatch(issued_at):
        raise MalformedTokenError("issued-at field is not a decimal timestamp")

    return SessionToken(hash_prefix=hash_prefix, signature=signature, issued_at=issued_at)


# ---------------------------------------------------------------------------
# Authority
# ---------------------------------------------------------------------------


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _constant_time_equals(a: str, b: str) -> bool:
    return hmac.compare_digest(
        a.encode("utf-8", "surrogatepass"), b.encode("utf-8", "surrogatepass")
    )


@dataclass(frozen=True)
class SessionConfig:
    """Credential configuration, fixed for the lifetime of an authority."""

    password: str | None = field(repr=False)
    signing_secret: str = field(repr=False)

    @property
    def password_configured(self) -> bool:
        return bool(self.password)


class SessionTokenAuthority:
    """Issues and validates inventory session tokens.

    Parameters
    ----------
    config : SessionConfig
        Password and signing secret the tokens are bound to.
    clock : callable, optional
        Returns the current time in epoch milliseconds.
    """

    def __init__(self, config: SessionConfig, clock: Callable[[], int] = _now_ms):
        self.config = config
        self._clock = clock

    def _password_hash(self, password: str) -> str:
        salted = password + self.config.signing_secret
        return hashlib.sha256(salted.encode("utf-8", "surrogatepass")).hexdigest()

    @staticmethod
    def _sign(password_hash: str, issued_at: str) -> str:
        return hmac.new(
            password_hash.encode("utf-8"), issued_at.encode("utf-8"), hashlib.sha256
        ).hexdigest()

    def verify_password(self, candidate: str) -> bool:
        """Return True iff *candidate* matches the configured password."""
        if not self.config.password_configured:
            logger.error("INVENTORY_PASSWORD not set; rejecting login")
            return False
        if not isinstance(candidate, str):
            return False
        return _constant_time_equals(candidate, self.config.password)

    def issue_token(self, candidate: str) -> str:
        """Issue a session token for a password that has passed ``verify_password``."""
        if not self.config.password_configured:
            raise ConfigurationError("INVENTORY_PASSWORD not set")
        if not self.verify_password(candidate):
            raise InvalidCredentialsError("password does not match")

        password_hash = self._password_hash(candidate)
        issued_at = str(self._clock())
        token = SessionToken(
            hash_prefix=password_hash[:HASH_PREFIX_LENGTH],
            signature=self._sign(password_hash, issued_at),
            issued_at=issued_at,
        )
        logger.info("Issued inventory session token")
        return encode_token(token)

    def check_token(self, raw: str) -> SessionToken:
        """Run every validation step in order, raising on the first failure."""
        token = decode_token(raw)

        if not self.config.password_configured:
            raise ConfigurationError("INVENTORY_PASSWORD not set")

        current_hash = self._password_hash(self.config.password)
        prefix = token.hash_prefix
        if len(prefix) > len(current_hash) or not _constant_time_equals(
            current_hash[: len(prefix)], prefix
        ):
            raise RotationInvalidation("password changed since issuance")

        expected = self._sign(current_hash, token.issued_at)
        if not _constant_time_equals(token.signature, expected):
            raise SignatureMismatchError("signature mismatch")

        age = self._clock() - token.issued_at_ms
        if age < 0:
            raise FutureTimestampError(f"issued {-age}ms in the future")
        if age >= _MAX_AGE_MS:
            raise ExpiredTokenError(f"token age {age}ms exceeds maximum")

        return token

    def inspect_token(self, raw: str) -> TokenStatus:
        """Classify *raw* for diagnostics. Never raises."""
        try:
            self.check_token(raw)
        except SessionTokenError as exc:
            status = _STATUS_BY_ERROR.get(type(exc), TokenStatus.MALFORMED)
            if status is TokenStatus.MISCONFIGURED:
                logger.error("Session validation failed: %s", exc)
            elif status in (TokenStatus.TAMPERED, TokenStatus.NOT_YET_VALID):
                logger.warning("Session token rejected (%s): %s", status.value, exc)
            else:
                logger.info("Session token rejected (%s): %s", status.value, exc)
            return status
        return TokenStatus.VALID

    def validate_token(self, raw: str) -> bool:
        """Return True if *raw* is a current, untampered, unexpired token."""
        return self.inspect_token(raw) is TokenStatus.VALID

    def expires_at_ms(self, token: SessionToken) -> int:
        return token.issued_at_ms + _MAX_AGE_MS
