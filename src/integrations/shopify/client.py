"""Shopify inventory client implementation.

Read-only Shopify Admin REST API integration for SKU and stock lookups.
Documentation: https://shopify.dev/docs/api/admin-rest

Environment variables required:
- SHOPIFY_STORE_DOMAIN: Store domain (your-store.myshopify.com)
- SHOPIFY_ACCESS_TOKEN: Admin API access token
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from src.conf.config import Settings, settings as default_settings
from src.core.http_retry import http_request_with_retry
from src.integrations.shopify.base import (
    BaseInventoryClient,
    InventoryClientError,
    InventoryErrorType,
    InventoryLevel,
    PlatformVariant,
)

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = "id,title,variants"


def next_page_info(response: httpx.Response) -> str | None:
    """Extract the page_info cursor of the rel="next" Link, if any."""
    next_link = response.links.get("next")
    if not next_link or not next_link.get("url"):
        return None
    return httpx.URL(next_link["url"]).params.get("page_info") or None


class ShopifyInventoryClient(BaseInventoryClient):
    """Shopify Admin REST API inventory client.

    Usage:
        async with ShopifyInventoryClient() as client:
            variant = await client.find_variant_by_sku("MCI-LP-MA-M")
            if variant:
                levels = await client.get_inventory_levels(variant.inventory_item_id)
    """

    def __init__(
        self,
        store_domain: str | None = None,
        access_token: str | None = None,
        *,
        api_version: str | None = None,
        page_size: int | None = None,
        max_pages: int | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_initial_delay: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
        config: Settings | None = None,
    ):
        """Initialize Shopify client.

        Args:
            store_domain: Store domain (default from settings)
            access_token: Admin API token (default from settings)
            api_version: REST API version (default from settings)
            page_size: Products per catalog page (max 250)
            max_pages: Catalog pages scanned before giving up on a SKU
            timeout: Request timeout in seconds
            max_retries: Retries for transport errors, 429 and 5xx
            retry_initial_delay: First backoff delay in seconds
            transport: Optional httpx transport (tests)
            config: Settings instance (default: module settings)
        """
        cfg = config or default_settings
        self.store_domain = (store_domain or cfg.SHOPIFY_STORE_DOMAIN).strip().strip("/")
        self.access_token = access_token or cfg.SHOPIFY_ACCESS_TOKEN.get_secret_value()
        self.api_version = api_version or cfg.SHOPIFY_API_VERSION
        self.page_size = max(1, min(page_size or cfg.SHOPIFY_PAGE_SIZE, 250))
        self.max_pages = max_pages or cfg.SHOPIFY_MAX_PAGES
        self.max_retries = cfg.SHOPIFY_MAX_RETRIES if max_retries is None else max_retries
        self.retry_initial_delay = retry_initial_delay
        self.timeout = timeout or cfg.SHOPIFY_TIMEOUT_SECONDS

        base_url = f"https://{self.store_domain}/admin/api/{self.api_version}" if self.store_domain else ""
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=self.timeout,
            transport=transport,
            headers={
                "X-Shopify-Access-Token": self.access_token,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def configured(self) -> bool:
        return bool(self.store_domain and self.access_token)

    def _ensure_configured(self) -> None:
        if not self.configured:
            raise InventoryClientError(
                "Shopify is not configured (SHOPIFY_STORE_DOMAIN / SHOPIFY_ACCESS_TOKEN)",
                InventoryErrorType.CONFIGURATION,
            )

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """GET with retry; convert failures to InventoryClientError."""
        self._ensure_configured()
        try:
            return await http_request_with_retry(
                self._client,
                "GET",
                path,
                params=params,
                max_retries=self.max_retries,
                initial_delay=self.retry_initial_delay,
            )
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            try:
                data = e.response.json()
                error_msg = str(data.get("errors") or data.get("error") or data)
            except ValueError:
                error_msg = e.response.text or f"HTTP {status}"
            logger.error("Shopify %s failed: %d %s", path, status, error_msg[:200])
            raise InventoryClientError.from_status(status, error_msg) from e
        except httpx.TimeoutException as e:
            logger.error("Shopify timeout: %s", e)
            raise InventoryClientError(str(e) or "timeout", InventoryErrorType.CONNECTION) from e
        except httpx.RequestError as e:
            logger.error("Shopify connection error: %s", e)
            raise InventoryClientError(str(e), InventoryErrorType.CONNECTION) from e

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise InventoryClientError(
                "Shopify returned a non-JSON body", InventoryErrorType.UNKNOWN, response.status_code
            ) from e
        return data if isinstance(data, dict) else {}

    async def find_variant_by_sku(self, sku: str) -> PlatformVariant | None:
        """Scan the product catalog page by page for the variant with this SKU.

        Stops at the first match, when the platform reports no next page,
        on an empty page, on a repeated cursor, or after max_pages pages.
        """
        target = (sku or "").strip()
        if not target:
            return None

        started = time.monotonic()
        params: dict[str, Any] = {"limit": self.page_size, "fields": PRODUCT_FIELDS}
        seen_cursors: set[str] = set()
        pages = 0

        while pages < self.max_pages:
            response = await self._get("/products.json", params=params)
            pages += 1
            products = self._json(response).get("products") or []

            for product in products:
                for variant in product.get("variants") or []:
                    if str(variant.get("sku") or "").strip() == target:
                        found = PlatformVariant.from_payload(variant, product)
                        logger.info(
                            "SKU %s resolved to variant %s after %d page(s) in %.0fms",
                            target,
                            found.variant_id,
                            pages,
                            (time.monotonic() - started) * 1000,
                        )
                        return found

            if not products:
                break

            cursor = next_page_info(response)
            if not cursor:
                break
            if cursor in seen_cursors:
                logger.warning("Shopify returned a repeated page cursor; stopping scan for %s", target)
                break
            seen_cursors.add(cursor)
            params = {"limit": self.page_size, "fields": PRODUCT_FIELDS, "page_info": cursor}
        else:
            logger.warning(
                "Stopped catalog scan for SKU %s after max_pages=%d", target, self.max_pages
            )

        logger.info("SKU %s not found after scanning %d page(s)", target, pages)
        return None

    async def get_inventory_levels(self, inventory_item_id: str) -> list[InventoryLevel]:
        """Get on-hand quantities for an inventory item at all locations."""
        if not inventory_item_id:
            return []
        response = await self._get(
            "/inventory_levels.json",
            params={"inventory_item_ids": str(inventory_item_id), "limit": 250},
        )
        levels = self._json(response).get("inventory_levels") or []
        return [
            InventoryLevel.from_payload(level)
            for level in levels
            if str(level.get("inventory_item_id", inventory_item_id)) == str(inventory_item_id)
        ]

    async def health_check(self) -> bool:
        """Check if Shopify connection is healthy."""
        if not self.configured:
            return False
        try:
            await self._get("/shop.json")
            return True
        except InventoryClientError as e:
            logger.warning("Shopify health check failed: %s", e)
            return False
