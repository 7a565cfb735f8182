"""Application configuration.

Settings are read from environment variables (or a ``.env`` file in the
working directory) once at process start.  The inventory dashboard password
and the signing secret are the only values the session authority depends on.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from cadetmart.security.session_tokens import MAX_SESSION_AGE, SessionConfig

logger = logging.getLogger(__name__)

FALLBACK_SESSION_SECRET = "fallback-secret-change-in-production"


class Settings(BaseSettings):
    """CadetMart settings loaded from the environment.

    Example: ``INVENTORY_PASSWORD=hunter2 SESSION_SECRET=$(openssl rand -hex 32)``
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Inventory dashboard credentials
    inventory_password: SecretStr | None = None
    session_secret: SecretStr = SecretStr(FALLBACK_SESSION_SECRET)
    session_cookie_name: str = "inventory_session"

    # Runtime environment; "production" marks the session cookie Secure
    environment: Literal["development", "production", "test"] = "development"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    # Comma-separated, e.g. CORS_ALLOWED_ORIGINS=https://shop.example,https://admin.example
    cors_allowed_origins: Annotated[list[str], NoDecode] = []

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @classmethod
    def load(cls) -> Settings:
        """Load settings from the environment."""
        return cls()

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def uses_fallback_secret(self) -> bool:
        return self.session_secret.get_secret_value() == FALLBACK_SESSION_SECRET

    def session_config(self) -> SessionConfig:
        """Build the immutable credential configuration for the session authority."""
        password = self.inventory_password.get_secret_value() if self.inventory_password else None
        return SessionConfig(
            password=password or None,
            signing_secret=self.session_secret.get_secret_value(),
        )


@lru_cache
def get_settings() -> Settings:
    """Return process-wide settings, loaded on first call."""
    settings = Settings.load()
    if settings.uses_fallback_secret:
        logger.warning("SESSION_SECRET not set; using the built-in fallback secret")
    return settings


def session_cookie_config(settings: Settings) -> dict:
    """Cookie attributes for the inventory session cookie."""
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "lax",
        "max_age": int(MAX_SESSION_AGE.total_seconds()),
        "path": "/",
    }
