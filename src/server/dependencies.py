"""FastAPI dependency injection module.

This module provides lazy-initialized dependencies for the FastAPI application,
replacing global singletons with proper DI pattern.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from src.conf.config import Settings, get_settings
from src.integrations.shopify import BaseInventoryClient, ShopifyInventoryClient
from src.services.bundle import BundleStockChecker, SkuCatalog, VariantCache, load_sku_catalog


# Type aliases for cleaner dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]


@lru_cache(maxsize=1)
def get_inventory_client() -> BaseInventoryClient:
    """Get or create the shared platform inventory client."""
    return ShopifyInventoryClient(config=get_settings())


@lru_cache(maxsize=1)
def get_sku_catalog() -> SkuCatalog:
    """Load the SKU catalog once (built-in or SKU_CATALOG_PATH override)."""
    return load_sku_catalog(get_settings().SKU_CATALOG_PATH or None)


@lru_cache(maxsize=1)
def get_variant_cache() -> VariantCache:
    """Get the process-wide SKU -> variant cache."""
    return VariantCache(ttl_seconds=get_settings().VARIANT_CACHE_TTL_SECONDS)


def get_stock_checker(
    client: Annotated[BaseInventoryClient, Depends(get_inventory_client)],
    catalog: Annotated[SkuCatalog, Depends(get_sku_catalog)],
    variant_cache: Annotated[VariantCache, Depends(get_variant_cache)],
    config: SettingsDep,
) -> BundleStockChecker:
    """Create the bundle stock checker with injected dependencies."""
    return BundleStockChecker(
        client,
        catalog=catalog,
        variant_cache=variant_cache,
        expected_items=config.BUNDLE_ITEM_COUNT,
    )


async def close_inventory_client() -> None:
    """Close the shared client if it was created."""
    if get_inventory_client.cache_info().currsize:
        await get_inventory_client().aclose()
        get_inventory_client.cache_clear()
