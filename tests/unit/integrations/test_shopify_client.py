"""
Tests for the Shopify inventory client.
=======================================
Uses httpx.MockTransport to play the Admin REST API.
"""

from __future__ import annotations

import httpx
import pytest

from src.integrations.shopify import (
    InventoryClientError,
    InventoryErrorType,
    ShopifyInventoryClient,
    next_page_info,
)


BASE = "https://test-store.myshopify.com/admin/api/2024-01"


def _link(cursor: str) -> dict[str, str]:
    return {"Link": f'<{BASE}/products.json?limit=2&page_info={cursor}>; rel="next"'}


def _product(product_id: int, *skus: str, management: str | None = "shopify") -> dict:
    return {
        "id": product_id,
        "title": f"Product {product_id}",
        "variants": [
            {
                "id": product_id * 100 + i,
                "product_id": product_id,
                "title": f"Variant {i}",
                "sku": sku,
                "inventory_item_id": product_id * 1000 + i,
                "inventory_management": management,
                "inventory_policy": "deny",
            }
            for i, sku in enumerate(skus)
        ],
    }


class FakeShopify:
    """Serves catalog pages keyed by page_info cursor (None = first page)."""

    def __init__(self, pages: dict[str | None, tuple[list[dict], str | None]]):
        self.pages = pages
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        cursor = request.url.params.get("page_info")
        products, next_cursor = self.pages[cursor]
        headers = _link(next_cursor) if next_cursor else {}
        return httpx.Response(200, json={"products": products}, headers=headers)


def make_client(handler, **kwargs) -> ShopifyInventoryClient:
    options = {
        "store_domain": "test-store.myshopify.com",
        "access_token": "shpat_test_token",
        "api_version": "2024-01",
        "page_size": 2,
        "max_pages": 10,
        "max_retries": 0,
        "retry_initial_delay": 0,
    }
    options.update(kwargs)
    return ShopifyInventoryClient(transport=httpx.MockTransport(handler), **options)


# =============================================================================
# CATALOG SCAN
# =============================================================================


class TestFindVariantBySku:
    @pytest.mark.asyncio
    async def test_follows_cursor_and_stops_at_first_match(self):
        shop = FakeShopify(
            {
                None: ([_product(1, "AAA", "BBB"), _product(2, "CCC")], "p2"),
                "p2": ([_product(3, "NSCE-M")], "p3"),
                "p3": ([_product(4, "NSCE-M")], None),
            }
        )
        async with make_client(shop) as client:
            variant = await client.find_variant_by_sku("NSCE-M")

        assert variant is not None
        assert variant.variant_id == "300"
        assert variant.product_id == "3"
        assert variant.product_title == "Product 3"
        assert variant.inventory_item_id == "3000"
        assert variant.tracked is True
        assert len(shop.requests) == 2

    @pytest.mark.asyncio
    async def test_request_shape(self):
        shop = FakeShopify({None: ([_product(1, "AAA")], "p2"), "p2": ([_product(2, "NSCE-M")], None)})
        async with make_client(shop) as client:
            await client.find_variant_by_sku("NSCE-M")

        first, second = shop.requests
        assert first.url.path == "/admin/api/2024-01/products.json"
        assert first.headers["X-Shopify-Access-Token"] == "shpat_test_token"
        assert dict(first.url.params) == {"limit": "2", "fields": "id,title,variants"}
        assert dict(second.url.params) == {
            "limit": "2",
            "fields": "id,title,variants",
            "page_info": "p2",
        }

    @pytest.mark.asyncio
    async def test_sku_match_ignores_surrounding_whitespace(self):
        shop = FakeShopify({None: ([_product(1, " NSCE-L ")], None)})
        async with make_client(shop) as client:
            variant = await client.find_variant_by_sku("NSCE-L")

        assert variant is not None
        assert variant.sku == "NSCE-L"

    @pytest.mark.asyncio
    async def test_returns_none_after_last_page(self):
        shop = FakeShopify({None: ([_product(1, "AAA")], "p2"), "p2": ([_product(2, "BBB")], None)})
        async with make_client(shop) as client:
            assert await client.find_variant_by_sku("NSCE-M") is None

        assert len(shop.requests) == 2

    @pytest.mark.asyncio
    async def test_empty_page_ends_scan(self):
        shop = FakeShopify({None: ([], "p2"), "p2": ([_product(2, "NSCE-M")], None)})
        async with make_client(shop) as client:
            assert await client.find_variant_by_sku("NSCE-M") is None

        assert len(shop.requests) == 1

    @pytest.mark.asyncio
    async def test_repeated_cursor_ends_scan(self):
        shop = FakeShopify({None: ([_product(1, "AAA")], "loop"), "loop": ([_product(2, "BBB")], "loop")})
        async with make_client(shop) as client:
            assert await client.find_variant_by_sku("NSCE-M") is None

        assert len(shop.requests) == 2

    @pytest.mark.asyncio
    async def test_max_pages_bounds_scan(self):
        pages = {None: ([_product(0, "X0")], "c1")}
        for i in range(1, 20):
            pages[f"c{i}"] = ([_product(i, f"X{i}")], f"c{i + 1}")
        shop = FakeShopify(pages)

        async with make_client(shop, max_pages=3) as client:
            assert await client.find_variant_by_sku("NSCE-M") is None

        assert len(shop.requests) == 3

    @pytest.mark.asyncio
    async def test_blank_sku_makes_no_request(self):
        shop = FakeShopify({})
        async with make_client(shop) as client:
            assert await client.find_variant_by_sku("   ") is None

        assert shop.requests == []

    @pytest.mark.asyncio
    async def test_untracked_variant(self):
        shop = FakeShopify({None: ([_product(7, "NSCE-S", management=None)], None)})
        async with make_client(shop) as client:
            variant = await client.find_variant_by_sku("NSCE-S")

        assert variant.tracked is False
        assert variant.inventory_policy == "deny"


@pytest.mark.asyncio
async def test_base_url_built_from_settings():
    from src.conf.config import Settings

    cfg = Settings(
        _env_file=None,
        SHOPIFY_STORE_DOMAIN="https://my-shop.myshopify.com/",
        SHOPIFY_ACCESS_TOKEN="shpat_x",
        SHOPIFY_API_VERSION="2024-07",
    )
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"shop": {"id": 1}})

    async with ShopifyInventoryClient(config=cfg, transport=httpx.MockTransport(handler)) as client:
        assert await client.health_check() is True

    assert str(seen[0].url) == "https://my-shop.myshopify.com/admin/api/2024-07/shop.json"


def test_next_page_info_parses_link_header():
    response = httpx.Response(
        200,
        headers={
            "Link": (
                f'<{BASE}/products.json?limit=2&page_info=prev1>; rel="previous", '
                f'<{BASE}/products.json?limit=2&page_info=next1>; rel="next"'
            )
        },
    )
    assert next_page_info(response) == "next1"
    assert next_page_info(httpx.Response(200)) is None


# =============================================================================
# INVENTORY LEVELS
# =============================================================================


class TestInventoryLevels:
    @pytest.mark.asyncio
    async def test_returns_level_per_location(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "inventory_levels": [
                        {"inventory_item_id": 3000, "location_id": 11, "available": 4},
                        {"inventory_item_id": 3000, "location_id": 12, "available": None},
                        {"inventory_item_id": 9999, "location_id": 11, "available": 50},
                    ]
                },
            )

        async with make_client(handler) as client:
            levels = await client.get_inventory_levels("3000")

        assert [(lv.location_id, lv.available) for lv in levels] == [("11", 4), ("12", None)]
        assert seen[0].url.path == "/admin/api/2024-01/inventory_levels.json"
        assert seen[0].url.params["inventory_item_ids"] == "3000"

    @pytest.mark.asyncio
    async def test_missing_item_id_makes_no_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("unexpected request")

        async with make_client(handler) as client:
            assert await client.get_inventory_levels("") == []


# =============================================================================
# ERRORS
# =============================================================================


class TestErrors:
    @pytest.mark.asyncio
    async def test_unauthorized_maps_to_authentication_error(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(401, json={"errors": "[API] Invalid API key or access token"})

        async with make_client(handler, max_retries=2) as client:
            with pytest.raises(InventoryClientError) as exc_info:
                await client.find_variant_by_sku("NSCE-M")

        assert exc_info.value.error_type is InventoryErrorType.AUTHENTICATION
        assert exc_info.value.status_code == 401
        assert "Invalid API key" in exc_info.value.message
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_server_error_is_retried(self):
        responses = [
            httpx.Response(503, text="unavailable"),
            httpx.Response(200, json={"inventory_levels": [{"location_id": 1, "available": 2}]}),
        ]

        def handler(request: httpx.Request) -> httpx.Response:
            return responses.pop(0)

        async with make_client(handler, max_retries=1) as client:
            levels = await client.get_inventory_levels("3000")

        assert [lv.available for lv in levels] == [2]

    @pytest.mark.asyncio
    async def test_exhausted_retries_map_to_server_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="bad gateway")

        async with make_client(handler, max_retries=1) as client:
            with pytest.raises(InventoryClientError) as exc_info:
                await client.get_inventory_levels("3000")

        assert exc_info.value.error_type is InventoryErrorType.SERVER_ERROR

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(InventoryClientError) as exc_info:
                await client.find_variant_by_sku("NSCE-M")

        assert exc_info.value.error_type is InventoryErrorType.CONNECTION

    @pytest.mark.asyncio
    async def test_unconfigured_client_fails_before_any_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("unexpected request")

        async with make_client(handler) as client:
            client.store_domain = ""
            client.access_token = ""
            with pytest.raises(InventoryClientError) as exc_info:
                await client.find_variant_by_sku("NSCE-M")

        assert exc_info.value.error_type is InventoryErrorType.CONFIGURATION


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_healthy(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path.endswith("/shop.json")
            return httpx.Response(200, json={"shop": {"id": 1}})

        async with make_client(handler) as client:
            assert await client.health_check() is True

    @pytest.mark.asyncio
    async def test_unhealthy_on_auth_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"errors": "forbidden"})

        async with make_client(handler) as client:
            assert await client.health_check() is False
