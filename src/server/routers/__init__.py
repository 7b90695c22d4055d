"""Routers package for the bundle stock server."""

from src.server.routers.bundle_stock import router as bundle_stock_router
from src.server.routers.health import router as health_router

__all__ = [
    "bundle_stock_router",
    "health_router",
]
