"""
Service Exceptions - Production error handling.
===============================================
Custom exceptions for proper error propagation instead of silent failures.
"""

from __future__ import annotations


class BundlePropertiesError(Exception):
    """Raised when cart line-item properties do not describe a valid bundle."""

    def __init__(self, reason: str, products: list[str] | None = None):
        self.reason = reason
        self.products = list(products or [])
        super().__init__(f"Invalid bundle: {reason}")


class SkuCatalogError(Exception):
    """Raised when the SKU catalog cannot be loaded or is malformed."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        self.message = message
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")
