"""
SKU Catalog - selection to SKU resolution.
==========================================
Translates a product's selected options into a deterministic variant key
and looks the key up in the static catalog mapping.

Features:
- Catalog-ordered variant keys (cart property order does not matter)
- Tolerant product name matching (case, spacing, trademark symbols)
- Optional YAML override of the built-in catalog
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.conf.sku_catalog import DEFAULT_SKU_CATALOG, VARIANT_KEY_SEPARATOR
from src.services.exceptions import SkuCatalogError

logger = logging.getLogger(__name__)

_TRADEMARK_SYMBOLS = re.compile(r"[®™©]")
_WHITESPACE = re.compile(r"\s+")


def normalize_product_name(name: str) -> str:
    """Case-fold, drop trademark symbols and collapse whitespace."""
    text = _TRADEMARK_SYMBOLS.sub("", name or "")
    return _WHITESPACE.sub(" ", text).strip().casefold()


@dataclass(frozen=True)
class ProductSkuMapping:
    """Variant key layout and SKUs for one product."""

    product_name: str
    key_options: tuple[str, ...]
    skus: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SkuLookup:
    """Outcome of a SKU lookup for one product selection."""

    product_name: str
    sku: str | None = None
    variant_key: str | None = None
    reason: str | None = None
    available_keys: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return self.sku is not None


def build_variant_key(mapping: ProductSkuMapping, selected_options: Mapping[str, str]) -> str | None:
    """Join the selected values of the mapping's key options in catalog order.

    Returns None if any key option is missing or blank.
    """
    values: list[str] = []
    for option in mapping.key_options:
        value = str(selected_options.get(option) or "").strip()
        if not value:
            return None
        values.append(value)
    return VARIANT_KEY_SEPARATOR.join(values)


class SkuCatalog:
    """Static product -> variant key -> SKU mapping."""

    def __init__(self, products: Mapping[str, ProductSkuMapping]) -> None:
        self._products = dict(products)
        self._by_normalized = {
            normalize_product_name(name): mapping for name, mapping in self._products.items()
        }

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_name: object) -> bool:
        return isinstance(product_name, str) and self.get_product(product_name) is not None

    @property
    def product_names(self) -> list[str]:
        return list(self._products)

    def get_product(self, product_name: str) -> ProductSkuMapping | None:
        mapping = self._products.get(product_name)
        if mapping is None:
            mapping = self._by_normalized.get(normalize_product_name(product_name))
        return mapping

    def find_sku(self, product_name: str, selected_options: Mapping[str, str]) -> SkuLookup:
        """Resolve a product selection to its SKU."""
        mapping = self.get_product(product_name)
        if mapping is None:
            logger.warning("No SKU mapping found for product: %s", product_name)
            return SkuLookup(product_name=product_name, reason="unknown_product")

        variant_key = build_variant_key(mapping, selected_options)
        if variant_key is None:
            missing = [o for o in mapping.key_options if not str(selected_options.get(o) or "").strip()]
            logger.warning(
                "Incomplete options for %s: missing %s", mapping.product_name, ", ".join(missing)
            )
            return SkuLookup(product_name=mapping.product_name, reason="incomplete_options")

        sku = mapping.skus.get(variant_key)
        if sku is None:
            logger.warning(
                "No SKU mapping found for key: %s in product: %s (available: %s)",
                variant_key,
                mapping.product_name,
                list(mapping.skus),
            )
            return SkuLookup(
                product_name=mapping.product_name,
                variant_key=variant_key,
                available_keys=tuple(mapping.skus),
                reason="unmapped_variant",
            )

        logger.debug("Resolved %s [%s] -> %s", mapping.product_name, variant_key, sku)
        return SkuLookup(product_name=mapping.product_name, sku=sku, variant_key=variant_key)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, source: str | None = None) -> SkuCatalog:
        """Build a catalog from {product: {key_options: [...], skus: {...}}}."""
        if not isinstance(data, Mapping) or not data:
            raise SkuCatalogError("catalog must be a non-empty mapping of products", source)

        products: dict[str, ProductSkuMapping] = {}
        for name, entry in data.items():
            if not isinstance(entry, Mapping):
                raise SkuCatalogError(f"product '{name}' must be a mapping", source)

            key_options = entry.get("key_options")
            if (
                not isinstance(key_options, (list, tuple))
                or not key_options
                or not all(isinstance(o, str) and o.strip() for o in key_options)
            ):
                raise SkuCatalogError(f"product '{name}' needs a non-empty key_options list", source)

            skus = entry.get("skus")
            if not isinstance(skus, Mapping):
                raise SkuCatalogError(f"product '{name}' needs a skus mapping", source)

            products[str(name)] = ProductSkuMapping(
                product_name=str(name),
                key_options=tuple(o.strip() for o in key_options),
                skus={str(k): str(v) for k, v in skus.items()},
            )
        return cls(products)


def load_sku_catalog(path: str | Path | None = None) -> SkuCatalog:
    """Load the built-in catalog, or a YAML override when a path is given.

    Raises:
        SkuCatalogError: If the override file is missing or malformed.
    """
    if not path:
        return SkuCatalog.from_dict(DEFAULT_SKU_CATALOG, source="built-in")

    file_path = Path(path)
    if not file_path.exists():
        raise SkuCatalogError("catalog file not found", str(file_path))

    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SkuCatalogError(f"invalid YAML: {e}", str(file_path)) from e

    if not isinstance(data, Mapping):
        raise SkuCatalogError("expected a top-level 'products' mapping", str(file_path))

    catalog = SkuCatalog.from_dict(data.get("products"), source=str(file_path))
    logger.info("Loaded SKU catalog from %s (%d products)", file_path, len(catalog))
    return catalog
