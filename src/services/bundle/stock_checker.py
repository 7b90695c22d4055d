"""
Bundle Stock Checker - inventory resolution pipeline.
=====================================================
For every product in a bundle:

1. selected options -> variant key -> SKU (static catalog)
2. SKU -> platform variant (paginated catalog scan, TTL-cached)
3. variant -> per-location inventory levels -> availability decision

The bundle is available only if every item is. Nothing here writes
inventory; results are a point-in-time read.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from src.core.logging import log_event
from src.integrations.shopify.base import BaseInventoryClient, InventoryLevel, PlatformVariant
from src.services.bundle.properties import ProductSelection, parse_bundle_properties
from src.services.bundle.sku_catalog import SkuCatalog, load_sku_catalog
from src.services.bundle.variant_cache import VariantCache, is_miss

logger = logging.getLogger(__name__)


class StockStatus(str, Enum):
    """Per-item availability outcome."""

    IN_STOCK = "in_stock"
    INSUFFICIENT_STOCK = "insufficient_stock"
    OUT_OF_STOCK = "out_of_stock"
    UNTRACKED = "untracked"
    BACKORDER = "backorder"
    SKU_NOT_FOUND = "sku_not_found"
    VARIANT_NOT_FOUND = "variant_not_found"


_STATUS_MESSAGES: dict[StockStatus, str] = {
    StockStatus.IN_STOCK: "In stock",
    StockStatus.INSUFFICIENT_STOCK: "Only {available} available, {requested} requested",
    StockStatus.OUT_OF_STOCK: "Out of stock",
    StockStatus.UNTRACKED: "Available (inventory not tracked)",
    StockStatus.BACKORDER: "Available on backorder",
    StockStatus.SKU_NOT_FOUND: "No SKU matches the selected options",
    StockStatus.VARIANT_NOT_FOUND: "SKU {sku} is not in the store catalog",
}


class ItemStockResult(BaseModel):
    """Availability of one bundle item."""

    product_name: str
    options: dict[str, str] = Field(default_factory=dict)
    sku: str | None = None
    variant_key: str | None = None
    variant_id: str | None = None
    requested_quantity: int = 1
    available_quantity: int | None = None
    location_quantities: dict[str, int] = Field(default_factory=dict)
    tracked: bool = False
    status: StockStatus
    available: bool
    message: str = ""


class BundleStockResult(BaseModel):
    """Availability of the whole bundle."""

    available: bool
    quantity: int
    items: list[ItemStockResult]
    unavailable_items: list[str] = Field(default_factory=list)
    checked_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())


def aggregate_inventory(levels: Iterable[InventoryLevel]) -> tuple[int, dict[str, int]]:
    """Sum on-hand quantities across locations.

    Unknown quantities count as 0. Negative (oversold) locations reduce the
    total; the returned total is never below 0.

    Returns:
        (total_available, {location_id: available})
    """
    per_location: dict[str, int] = {}
    for level in levels:
        qty = level.available or 0
        per_location[level.location_id] = per_location.get(level.location_id, 0) + qty
    total = sum(per_location.values())
    return max(total, 0), per_location


def decide_availability(
    variant: PlatformVariant,
    total_available: int,
    requested: int,
) -> tuple[StockStatus, bool]:
    """Apply the variant's tracking mode and inventory policy."""
    if not variant.tracked:
        return StockStatus.UNTRACKED, True
    if total_available >= requested:
        return StockStatus.IN_STOCK, True
    if variant.allows_backorder:
        return StockStatus.BACKORDER, True
    if total_available <= 0:
        return StockStatus.OUT_OF_STOCK, False
    return StockStatus.INSUFFICIENT_STOCK, False


def _message(status: StockStatus, **values: Any) -> str:
    return _STATUS_MESSAGES[status].format(**values)


class BundleStockChecker:
    """Checks a two-item bundle against live platform inventory.

    Usage:
        checker = BundleStockChecker(client)
        result = await checker.check_bundle(properties, quantity=1)
        if not result.available:
            print(result.unavailable_items)
    """

    def __init__(
        self,
        client: BaseInventoryClient,
        *,
        catalog: SkuCatalog | None = None,
        variant_cache: VariantCache | None = None,
        expected_items: int = 2,
    ) -> None:
        self._client = client
        self._catalog = catalog if catalog is not None else load_sku_catalog()
        self._variant_cache = variant_cache if variant_cache is not None else VariantCache(ttl_seconds=0)
        self._expected_items = expected_items

    async def check_bundle(self, properties: Any, quantity: int = 1) -> BundleStockResult:
        """Check every product of the bundle for the requested quantity.

        Raises:
            ValueError: If quantity is not a positive integer.
            BundlePropertiesError: If properties do not describe a bundle.
            InventoryClientError: If the platform cannot be read.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError(f"quantity must be a positive integer, got {quantity!r}")

        started = time.monotonic()
        selections = parse_bundle_properties(properties, expected_items=self._expected_items)
        log_event(
            logger,
            event="bundle_check_start",
            products=[s.product_name for s in selections],
            quantity=quantity,
        )

        items = await asyncio.gather(*(self.check_item(s, quantity) for s in selections))
        unavailable = [item.product_name for item in items if not item.available]

        result = BundleStockResult(
            available=not unavailable,
            quantity=quantity,
            items=list(items),
            unavailable_items=unavailable,
        )
        log_event(
            logger,
            event="bundle_check_done",
            available=result.available,
            unavailable=unavailable,
            duration_ms=round((time.monotonic() - started) * 1000, 1),
        )
        return result

    async def check_item(self, selection: ProductSelection, quantity: int) -> ItemStockResult:
        """Resolve one selection down to an availability decision."""
        base: dict[str, Any] = {
            "product_name": selection.product_name,
            "options": dict(selection.options),
            "requested_quantity": quantity,
        }

        lookup = self._catalog.find_sku(selection.product_name, selection.options)
        if not lookup.found:
            return ItemStockResult(
                **base,
                variant_key=lookup.variant_key,
                status=StockStatus.SKU_NOT_FOUND,
                available=False,
                message=_message(StockStatus.SKU_NOT_FOUND),
            )

        base.update(sku=lookup.sku, variant_key=lookup.variant_key)
        variant = await self.resolve_variant(lookup.sku)
        if variant is None:
            return ItemStockResult(
                **base,
                status=StockStatus.VARIANT_NOT_FOUND,
                available=False,
                message=_message(StockStatus.VARIANT_NOT_FOUND, sku=lookup.sku),
            )

        base.update(variant_id=variant.variant_id, tracked=variant.tracked)
        if not variant.tracked:
            return ItemStockResult(
                **base,
                status=StockStatus.UNTRACKED,
                available=True,
                message=_message(StockStatus.UNTRACKED),
            )

        levels = await self._client.get_inventory_levels(variant.inventory_item_id or "")
        total, per_location = aggregate_inventory(levels)
        status, available = decide_availability(variant, total, quantity)
        logger.info(
            "Stock for %s (%s): %d across %d location(s), requested %d -> %s",
            selection.product_name,
            lookup.sku,
            total,
            len(per_location),
            quantity,
            status.value,
        )
        return ItemStockResult(
            **base,
            available_quantity=total,
            location_quantities=per_location,
            status=status,
            available=available,
            message=_message(status, available=total, requested=quantity),
        )

    async def resolve_variant(self, sku: str) -> PlatformVariant | None:
        """SKU -> platform variant, served from the TTL cache when possible."""
        cached = self._variant_cache.get(sku)
        if not is_miss(cached):
            logger.debug("Variant cache hit for %s", sku)
            return cached  # type: ignore[return-value]

        variant = await self._client.find_variant_by_sku(sku)
        self._variant_cache.set(sku, variant)
        return variant
