"""Cart line-item property parsing.

Bundle selections arrive as line-item properties named "<Product>: <Option>",
e.g. {"Max Comfort Insoles: Size": "M"}. This module groups them per product.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from src.services.exceptions import BundlePropertiesError

logger = logging.getLogger(__name__)

PROPERTY_SEPARATOR = ": "
PRIVATE_PREFIX = "_"


@dataclass
class ProductSelection:
    """Options selected for one product of the bundle."""

    product_name: str
    options: dict[str, str] = field(default_factory=dict)


def _iter_property_pairs(properties: Any) -> Iterable[tuple[str, Any]]:
    """Yield (name, value) pairs from a mapping or a list of name/value dicts."""
    if properties is None:
        return
    if isinstance(properties, Mapping):
        yield from properties.items()
        return
    if isinstance(properties, (list, tuple)):
        for entry in properties:
            if isinstance(entry, Mapping) and "name" in entry:
                yield entry.get("name"), entry.get("value")
            else:
                logger.debug("Skipping malformed property entry: %r", entry)
        return
    raise BundlePropertiesError(
        f"properties must be an object or a list, got {type(properties).__name__}"
    )


def split_property_name(name: str) -> tuple[str, str] | None:
    """Split "<Product>: <Option>" on the last separator.

    Returns None when the name is not a product option property.
    """
    if PROPERTY_SEPARATOR not in name:
        return None
    product, option = name.rsplit(PROPERTY_SEPARATOR, 1)
    product, option = product.strip(), option.strip()
    if not product or not option:
        return None
    return product, option


def parse_bundle_properties(
    properties: Any,
    *,
    expected_items: int = 2,
) -> list[ProductSelection]:
    """Group line-item properties into per-product selections.

    Args:
        properties: Mapping of property name -> value, or a list of
            {"name": ..., "value": ...} entries.
        expected_items: Number of distinct products the bundle must hold.

    Returns:
        Selections in first-seen product order.

    Raises:
        BundlePropertiesError: If no product selections are found or the
            product count differs from expected_items.
    """
    selections: dict[str, ProductSelection] = {}

    for raw_name, raw_value in _iter_property_pairs(properties):
        if raw_name is None:
            continue
        name = str(raw_name).strip()
        if not name or name.startswith(PRIVATE_PREFIX):
            continue

        parts = split_property_name(name)
        if parts is None:
            logger.debug("Ignoring non-selection property: %s", name)
            continue

        value = "" if raw_value is None else str(raw_value).strip()
        if not value:
            logger.debug("Ignoring empty selection: %s", name)
            continue

        product, option = parts
        selection = selections.setdefault(product, ProductSelection(product_name=product))
        selection.options[option] = value

    products = list(selections)
    if not products:
        raise BundlePropertiesError("no product selections found in properties")
    if len(products) != expected_items:
        raise BundlePropertiesError(
            f"expected {expected_items} products, found {len(products)}",
            products=products,
        )

    logger.info("Parsed bundle selections: %s", ", ".join(products))
    return list(selections.values())
