# API v1 router aggregation.
# Created: 2026-10-19
#
# mount_v1_routers(app) registers all domain routers at /api/v1/.

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)

_V1_ROUTERS: list[tuple[str, str, str]] = [
    # (module_path, attr_name, tag)
    ("cadetmart.api.v1.inventory_auth", "router", "Inventory Auth"),
    ("cadetmart.api.v1.health", "router", "Health"),
]


def mount_v1_routers(app: FastAPI) -> None:
    """Mount all v1 domain routers on *app* at ``/api/v1``."""
    for module_path, attr_name, tag in _V1_ROUTERS:
        router = getattr(importlib.import_module(module_path), attr_name)
        app.include_router(router, prefix="/api/v1")
        logger.debug("Mounted v1 router: %s (%s)", module_path, tag)
