import os
import sys
from pathlib import Path

import pytest


# Add project root to path
root = Path(__file__).resolve().parents[1]
project_root = str(root)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Set environment variables for testing (before settings are imported)
os.environ.setdefault("SHOPIFY_STORE_DOMAIN", "test-store.myshopify.com")
os.environ.setdefault("SHOPIFY_ACCESS_TOKEN", "shpat_test_token")
os.environ.setdefault("SHOPIFY_API_VERSION", "2024-01")

from tests.helpers import BUNDLE_PROPERTIES, FakeInventoryClient, stocked_client  # noqa: E402


@pytest.fixture
def bundle_properties() -> dict[str, str]:
    return dict(BUNDLE_PROPERTIES)


@pytest.fixture
def fake_client() -> FakeInventoryClient:
    return stocked_client()
