"""ASGI app exposing the bundle stock check endpoint.

This module is a thin orchestrator that:
1. Manages FastAPI app lifecycle
2. Includes routers for all endpoints
3. Sets up middleware (CORS, request logging)

Endpoint logic lives in src/server/routers/.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.conf.config import settings, validate_required_settings
from src.core.logging import setup_logging
from src.server.dependencies import close_inventory_client
from src.server.exceptions import APIError
from src.server.middleware import setup_middleware
from src.server.routers import bundle_stock_router, health_router


logger = logging.getLogger(__name__)


def _init_sentry():
    """Initialize Sentry SDK if configured."""
    if not settings.SENTRY_DSN:
        return

    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration

        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.SENTRY_ENVIRONMENT,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            integrations=[FastApiIntegration()],
            send_default_pii=False,
        )
        logger.info("Sentry initialized: env=%s", settings.SENTRY_ENVIRONMENT)
    except ImportError:
        logger.warning("sentry-sdk not installed, skipping Sentry init")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    setup_logging(
        level=settings.LOG_LEVEL,
        json_format=settings.LOG_JSON,
        service_name="bundle-stock-check",
    )
    _init_sentry()
    validate_required_settings(settings)

    logger.info(
        "Starting bundle stock server (store=%s, api=%s)",
        settings.SHOPIFY_STORE_DOMAIN or "-",
        settings.SHOPIFY_API_VERSION,
    )

    yield

    logger.info("Shutting down bundle stock server")
    await close_inventory_client()


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="Bundle Stock Check",
    description="Checks two-item bundle availability against live store inventory",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail or exc.message,
            "error": exc.message,
        },
    )


setup_middleware(app, cors_origins=settings.cors_origins, enable_logging=True)

# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(bundle_stock_router)
