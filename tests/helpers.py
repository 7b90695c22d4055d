"""Shared test doubles for the bundle stock tests."""

from __future__ import annotations

from src.integrations.shopify.base import (
    BaseInventoryClient,
    InventoryLevel,
    PlatformVariant,
)


# A bundle as the storefront sends it: two products plus a private property.
BUNDLE_PROPERTIES = {
    "_bundle_id": "bndl-7f3a",
    "Max Comfort Insoles: Profile": "Low Profile",
    "Max Comfort Insoles: Arch Support": "High Arch",
    "Max Comfort Insoles: Size": "M",
    "Fleks® East Beach Slides: Color": "Sand",
    "Fleks® East Beach Slides: Size": "9",
}
INSOLE_SKU = "MCI-LP-HA-M"
SLIDES_SKU = "FLX-EBS-SND-09"


def make_variant(
    sku: str,
    inventory_item_id: str | None = None,
    *,
    management: str | None = "shopify",
    policy: str = "deny",
    variant_id: str | None = None,
) -> PlatformVariant:
    return PlatformVariant(
        variant_id=variant_id or f"var-{sku}",
        product_id=f"prod-{sku}",
        sku=sku,
        inventory_item_id=inventory_item_id or f"item-{sku}",
        inventory_management=management,
        inventory_policy=policy,
    )


class FakeInventoryClient(BaseInventoryClient):
    """In-memory platform with call recording."""

    def __init__(
        self,
        variants: dict[str, PlatformVariant] | None = None,
        levels: dict[str, list[InventoryLevel]] | None = None,
        error: Exception | None = None,
    ):
        self.variants = variants or {}
        self.levels = levels or {}
        self.error = error
        self.find_calls: list[str] = []
        self.level_calls: list[str] = []

    async def find_variant_by_sku(self, sku: str) -> PlatformVariant | None:
        self.find_calls.append(sku)
        if self.error:
            raise self.error
        return self.variants.get(sku)

    async def get_inventory_levels(self, inventory_item_id: str) -> list[InventoryLevel]:
        self.level_calls.append(inventory_item_id)
        if self.error:
            raise self.error
        return list(self.levels.get(inventory_item_id, []))

    async def health_check(self) -> bool:
        return self.error is None


def stocked_client(insole_qty: int = 5, slides_qty: int = 5, **variant_kwargs) -> FakeInventoryClient:
    """Fake platform holding both bundle SKUs, stock split over two locations."""
    insole = make_variant(INSOLE_SKU, **variant_kwargs)
    slides = make_variant(SLIDES_SKU, **variant_kwargs)
    return FakeInventoryClient(
        variants={INSOLE_SKU: insole, SLIDES_SKU: slides},
        levels={
            insole.inventory_item_id: [
                InventoryLevel("loc-east", insole_qty),
                InventoryLevel("loc-west", 0),
            ],
            slides.inventory_item_id: [
                InventoryLevel("loc-east", 0),
                InventoryLevel("loc-west", slides_qty),
            ],
        },
    )
