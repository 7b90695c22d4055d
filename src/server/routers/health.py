"""Health check router."""

from __future__ import annotations

import logging
import os
from typing import Any

from fastapi import APIRouter

from src.conf.config import settings
from src.integrations.shopify import BaseInventoryClient
from src.server.dependencies import get_inventory_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def _get_build_info() -> dict[str, str]:
    sha = (
        os.environ.get("GIT_SHA")
        or os.environ.get("COMMIT_SHA")
        or os.environ.get("COMMIT_REF")
        or os.environ.get("SOURCE_VERSION")
        or os.environ.get("GITHUB_SHA")
        or "unknown"
    )
    return {"git_sha": sha}


@router.get("/health")
async def health(deep: bool = False) -> dict[str, Any]:
    """Health check endpoint.

    `?deep=true` also calls the platform to verify credentials.
    """
    status = "ok"
    checks: dict[str, Any] = {
        "shopify": "configured" if settings.shopify_enabled else "not_configured",
    }

    if deep and settings.shopify_enabled:
        client: BaseInventoryClient = get_inventory_client()
        if await client.health_check():
            checks["shopify"] = "ok"
        else:
            checks["shopify"] = "unreachable"
            status = "degraded"
            logger.warning("Health check: Shopify unreachable")
    elif not settings.shopify_enabled:
        status = "degraded"

    return {"status": status, "checks": checks, **_get_build_info()}
