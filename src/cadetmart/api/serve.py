"""API server for the CadetMart inventory dashboard.

``create_api_app()`` builds the FastAPI application with the session authority
attached to ``app.state``; ``run_api_server()`` runs it under uvicorn.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cadetmart import __version__
from cadetmart.api.v1 import mount_v1_routers
from cadetmart.config import Settings, get_settings
from cadetmart.security.session_tokens import SessionTokenAuthority

logger = logging.getLogger(__name__)


def create_api_app(
    settings: Settings | None = None,
    authority: SessionTokenAuthority | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    *settings* defaults to the process-wide settings; *authority* defaults to
    one built from those settings.
    """
    settings = settings or get_settings()
    authority = authority or SessionTokenAuthority(settings.session_config())

    if not authority.config.password_configured:
        logger.error("INVENTORY_PASSWORD not set; inventory login is disabled")
    if settings.is_production and settings.uses_fallback_secret:
        logger.warning("Running in production with the fallback SESSION_SECRET")

    app = FastAPI(
        title="CadetMart Inventory API",
        version=__version__,
        docs_url="/api/v1/docs",
        redoc_url=None,
        openapi_url="/api/v1/openapi.json",
    )
    app.state.settings = settings
    app.state.authority = authority

    if settings.cors_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allowed_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type"],
        )

    mount_v1_routers(app)
    return app


def run_api_server(host: str | None = None, port: int | None = None, dev: bool = False) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    logger.info("Starting CadetMart inventory API on http://%s:%d", host, port)
    if dev:
        uvicorn.run(
            "cadetmart.api.serve:create_api_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            log_level=settings.log_level.lower(),
        )
    else:
        uvicorn.run(
            create_api_app(settings),
            host=host,
            port=port,
            log_level=settings.log_level.lower(),
        )
