#!/usr/bin/env python3
"""
BUNDLE STOCK CHECK (CLI)
========================
Runs the bundle stock check against the live store from the command line.

Properties are given as "Product: Option=Value" pairs, e.g.:

    python scripts/check_bundle_stock.py \
        "Max Comfort Insoles: Profile=Low Profile" \
        "Max Comfort Insoles: Arch Support=High Arch" \
        "Max Comfort Insoles: Size=M" \
        "NonSlip Carbon Elite Insole: Size=L" \
        --quantity 2

Or as a JSON file with --json properties.json.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any


# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load environment
from dotenv import load_dotenv


load_dotenv(project_root / ".env")

from rich.console import Console
from rich.table import Table

from src.conf.config import get_settings
from src.core.logging import setup_logging
from src.integrations.shopify import InventoryClientError, ShopifyInventoryClient
from src.services.bundle import BundleStockChecker, BundleStockResult, load_sku_catalog
from src.services.exceptions import BundlePropertiesError


console = Console()
logger = logging.getLogger(__name__)


def parse_pairs(pairs: list[str]) -> dict[str, str]:
    """Turn 'Name=Value' arguments into a properties mapping."""
    properties: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise SystemExit(f"Expected 'Product: Option=Value', got: {pair!r}")
        name, value = pair.split("=", 1)
        properties[name.strip()] = value.strip()
    return properties


def render(result: BundleStockResult) -> None:
    table = Table(title=f"Bundle x{result.quantity}")
    table.add_column("Product")
    table.add_column("SKU")
    table.add_column("Status")
    table.add_column("On hand", justify="right")
    table.add_column("Message")

    for item in result.items:
        style = "green" if item.available else "red"
        table.add_row(
            item.product_name,
            item.sku or "-",
            f"[{style}]{item.status.value}[/{style}]",
            "-" if item.available_quantity is None else str(item.available_quantity),
            item.message,
        )

    console.print(table)
    if result.available:
        console.print("[bold green]Bundle available[/bold green]")
    else:
        console.print(f"[bold red]Unavailable:[/bold red] {', '.join(result.unavailable_items)}")


async def run(properties: Any, quantity: int) -> int:
    config = get_settings()
    async with ShopifyInventoryClient(config=config) as client:
        checker = BundleStockChecker(
            client,
            catalog=load_sku_catalog(config.SKU_CATALOG_PATH or None),
            expected_items=config.BUNDLE_ITEM_COUNT,
        )
        try:
            result = await checker.check_bundle(properties, quantity=quantity)
        except BundlePropertiesError as e:
            console.print(f"[red]Invalid bundle:[/red] {e.reason}")
            return 2
        except InventoryClientError as e:
            console.print(f"[red]Shopify error ({e.error_type.value}):[/red] {e.message}")
            return 3

    render(result)
    return 0 if result.available else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Check bundle stock against the live store")
    parser.add_argument("pairs", nargs="*", help='"Product: Option=Value" properties')
    parser.add_argument("--json", dest="json_path", help="JSON file with the properties object/list")
    parser.add_argument("--quantity", type=int, default=1, help="Bundle quantity (default: 1)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(level="DEBUG" if args.verbose else "WARNING")

    if args.json_path:
        properties = json.loads(Path(args.json_path).read_text(encoding="utf-8"))
    else:
        properties = parse_pairs(args.pairs)

    if args.quantity < 1:
        parser.error("--quantity must be >= 1")

    return asyncio.run(run(properties, args.quantity))


if __name__ == "__main__":
    sys.exit(main())
