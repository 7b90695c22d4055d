"""Commerce platform (Shopify) inventory integration."""

from src.integrations.shopify.base import (
    BaseInventoryClient,
    InventoryClientError,
    InventoryErrorType,
    InventoryLevel,
    PlatformVariant,
)
from src.integrations.shopify.client import ShopifyInventoryClient, next_page_info


__all__ = [
    "BaseInventoryClient",
    "InventoryClientError",
    "InventoryErrorType",
    "InventoryLevel",
    "PlatformVariant",
    "ShopifyInventoryClient",
    "next_page_info",
]
