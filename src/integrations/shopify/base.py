"""Base inventory client interface.

This module defines the abstract interface for commerce platform inventory
reads. Clients only read catalog and stock data; they never write inventory.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any


class InventoryErrorType(str, Enum):
    """Types of inventory platform errors."""

    CONFIGURATION = "configuration"
    CONNECTION = "connection"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"


class InventoryClientError(Exception):
    """Raised when the inventory platform cannot answer a read."""

    def __init__(
        self,
        message: str,
        error_type: InventoryErrorType = InventoryErrorType.UNKNOWN,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.status_code = status_code

    @classmethod
    def from_status(cls, status_code: int, message: str) -> InventoryClientError:
        """Map an HTTP status code to an error type."""
        if status_code in (401, 403):
            error_type = InventoryErrorType.AUTHENTICATION
        elif status_code == 404:
            error_type = InventoryErrorType.NOT_FOUND
        elif status_code == 429:
            error_type = InventoryErrorType.RATE_LIMIT
        elif status_code >= 500:
            error_type = InventoryErrorType.SERVER_ERROR
        else:
            error_type = InventoryErrorType.UNKNOWN
        return cls(message, error_type, status_code=status_code)


@dataclass(frozen=True)
class PlatformVariant:
    """A purchasable variant as the platform reports it."""

    variant_id: str
    product_id: str
    sku: str
    title: str = ""
    product_title: str = ""
    inventory_item_id: str | None = None
    inventory_management: str | None = None
    inventory_policy: str = "deny"

    @property
    def tracked(self) -> bool:
        """Whether the platform tracks on-hand quantities for this variant."""
        return bool(self.inventory_management)

    @property
    def allows_backorder(self) -> bool:
        return (self.inventory_policy or "").lower() == "continue"

    @classmethod
    def from_payload(cls, variant: dict[str, Any], product: dict[str, Any] | None = None) -> PlatformVariant:
        product = product or {}
        inventory_item_id = variant.get("inventory_item_id")
        return cls(
            variant_id=str(variant.get("id") or ""),
            product_id=str(variant.get("product_id") or product.get("id") or ""),
            sku=str(variant.get("sku") or "").strip(),
            title=str(variant.get("title") or ""),
            product_title=str(product.get("title") or ""),
            inventory_item_id=str(inventory_item_id) if inventory_item_id is not None else None,
            inventory_management=variant.get("inventory_management") or None,
            inventory_policy=str(variant.get("inventory_policy") or "deny"),
        )


@dataclass(frozen=True)
class InventoryLevel:
    """On-hand quantity of one inventory item at one location."""

    location_id: str
    available: int | None = None

    @classmethod
    def from_payload(cls, level: dict[str, Any]) -> InventoryLevel:
        available = level.get("available")
        try:
            available = int(available) if available is not None else None
        except (TypeError, ValueError):
            available = None
        return cls(location_id=str(level.get("location_id") or ""), available=available)


class BaseInventoryClient(ABC):
    """Abstract base class for inventory platform clients.

    All platform integrations should implement this interface so the stock
    checker stays platform-agnostic.
    """

    @abstractmethod
    async def find_variant_by_sku(self, sku: str) -> PlatformVariant | None:
        """Find the variant carrying the given SKU.

        Args:
            sku: Stock-keeping identifier

        Returns:
            The matching variant, or None if the catalog has no such SKU
        """
        pass

    @abstractmethod
    async def get_inventory_levels(self, inventory_item_id: str) -> list[InventoryLevel]:
        """Get on-hand quantities for an inventory item at every location.

        Args:
            inventory_item_id: Platform inventory item ID

        Returns:
            One level per location stocking the item
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the platform is reachable with the configured credentials.

        Returns:
            True if accessible, False otherwise
        """
        pass

    async def aclose(self) -> None:
        """Release network resources. Override if the client holds any."""
        return None
