"""Bundle stock check: cart properties -> SKUs -> live availability."""

from src.services.bundle.properties import ProductSelection, parse_bundle_properties
from src.services.bundle.sku_catalog import (
    ProductSkuMapping,
    SkuCatalog,
    SkuLookup,
    build_variant_key,
    load_sku_catalog,
)
from src.services.bundle.stock_checker import (
    BundleStockChecker,
    BundleStockResult,
    ItemStockResult,
    StockStatus,
    aggregate_inventory,
    decide_availability,
)
from src.services.bundle.variant_cache import VariantCache


__all__ = [
    "BundleStockChecker",
    "BundleStockResult",
    "ItemStockResult",
    "ProductSelection",
    "ProductSkuMapping",
    "SkuCatalog",
    "SkuLookup",
    "StockStatus",
    "VariantCache",
    "aggregate_inventory",
    "build_variant_key",
    "decide_availability",
    "load_sku_catalog",
    "parse_bundle_properties",
]
