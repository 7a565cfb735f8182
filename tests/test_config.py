# Tests for settings loading and session cookie configuration.
# Created: 2026-10-19

import logging

from helpers import PASSWORD, SECRET, make_settings

from cadetmart.config import (
    FALLBACK_SESSION_SECRET,
    Settings,
    get_settings,
    session_cookie_config,
)
from cadetmart.security.session_tokens import SessionTokenAuthority


class TestSettings:
    def test_loads_from_environment(self, monkeypatch):
        monkeypatch.setenv("INVENTORY_PASSWORD", "from-env")
        monkeypatch.setenv("SESSION_SECRET", "env-secret")
        monkeypatch.setenv("ENVIRONMENT", "production")
        settings = Settings.load()
        assert settings.inventory_password.get_secret_value() == "from-env"
        assert settings.session_secret.get_secret_value() == "env-secret"
        assert settings.is_production is True

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.inventory_password is None
        assert settings.uses_fallback_secret is True
        assert settings.session_cookie_name == "inventory_session"
        assert settings.is_production is False

    def test_secrets_hidden_in_repr(self, settings):
        assert PASSWORD not in repr(settings)
        assert SECRET not in repr(settings)

    def test_session_config(self, settings):
        config = settings.session_config()
        assert config.password == PASSWORD
        assert config.signing_secret == SECRET
        assert config.password_configured is True

    def test_session_config_without_password(self):
        assert make_settings(inventory_password=None).session_config().password is None
        assert make_settings(inventory_password="").session_config().password is None

    def test_session_config_fallback_secret(self):
        config = Settings(_env_file=None, inventory_password="pw").session_config()
        assert config.signing_secret == FALLBACK_SESSION_SECRET

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_get_settings_warns_on_fallback_secret(self, caplog):
        with caplog.at_level(logging.WARNING, logger="cadetmart.config"):
            get_settings()
        assert "SESSION_SECRET not set" in caplog.text


class TestSessionCookieConfig:
    def test_development(self, settings):
        assert session_cookie_config(settings) == {
            "httponly": True,
            "secure": False,
            "samesite": "lax",
            "max_age": 7 * 24 * 60 * 60,
            "path": "/",
        }

    def test_production_is_secure(self):
        assert session_cookie_config(make_settings(environment="production"))["secure"] is True


class TestCorsOrigins:
    def test_comma_separated_from_environment(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://shop.example, https://admin.example,")
        settings = Settings(_env_file=None)
        assert settings.cors_allowed_origins == ["https://shop.example", "https://admin.example"]

    def test_single_origin_from_environment(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://shop.example")
        assert Settings(_env_file=None).cors_allowed_origins == ["https://shop.example"]

    def test_list_passed_directly(self):
        settings = make_settings(cors_allowed_origins=["https://shop.example"])
        assert settings.cors_allowed_origins == ["https://shop.example"]

    def test_default_empty(self):
        assert Settings(_env_file=None).cors_allowed_origins == []


class TestUndecodableEnvironment:
    def test_non_utf8_password_does_not_break_validation(self, monkeypatch):
        monkeypatch.setenv("INVENTORY_PASSWORD", "pw\udcff")
        settings = Settings(_env_file=None)
        authority = SessionTokenAuthority(settings.session_config())
        assert authority.validate_token("zzzz.ef.1") is False
        assert authority.validate_token(authority.issue_token("pw\udcff")) is True
