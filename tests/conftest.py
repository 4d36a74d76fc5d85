import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from stocklink.config import Settings
from stocklink.main import create_app
from stocklink.models import ActionResult
from stocklink.token import LinkSigner

SECRET = "test-link-secret-for-unit-tests-only"


@pytest.fixture
def settings(secret):
    return Settings(
        shopify_store="test-shop.myshopify.com",
        shopify_token="shpat_test",
        location_id=111,
        link_secret=secret,
    )


@pytest.fixture
def secret():
    return SECRET


@pytest.fixture
def signer(secret):
    return LinkSigner(secret)


@pytest.fixture
def connector():
    """Stands in for ShopifyConnector. No network calls are made."""
    conn = MagicMock()
    conn.adjust_inventory.return_value = ActionResult(
        action="adjust_inventory",
        system="shopify",
        success=True,
        output={"inventory_level": {"inventory_item_id": 123, "location_id": 111, "available": 5}},
    )
    conn.get_shop.return_value = ActionResult(
        action="get_shop",
        system="shopify",
        success=True,
        output={"shop": {"name": "Test Shop"}},
    )
    return conn


@pytest.fixture
def client(settings, connector):
    with TestClient(create_app(settings=settings, connector=connector)) as c:
        yield c
