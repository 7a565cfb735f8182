# Shared fixtures for CadetMart tests.
# Created: 2026-10-19

import pytest
from fastapi.testclient import TestClient
from helpers import PASSWORD, SECRET, FakeClock, make_settings

from cadetmart.api.serve import create_api_app
from cadetmart.config import get_settings
from cadetmart.security.session_tokens import SessionConfig, SessionTokenAuthority

_ENV_VARS = (
    "INVENTORY_PASSWORD",
    "SESSION_SECRET",
    "ENVIRONMENT",
    "SESSION_COOKIE_NAME",
    "CORS_ALLOWED_ORIGINS",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def authority(clock):
    return SessionTokenAuthority(SessionConfig(password=PASSWORD, signing_secret=SECRET), clock)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def client(settings):
    return TestClient(create_api_app(settings))
