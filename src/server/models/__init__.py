"""Models package for the bundle stock server."""

from src.server.models.requests import BundleStockRequest

__all__ = [
    "BundleStockRequest",
]
