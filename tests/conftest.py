"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.pop("UPSTASH_REDIS_REST_URL", None)
os.environ.pop("UPSTASH_REDIS_REST_TOKEN", None)


def make_table_mock(data=None):
    """Chainable PostgREST query mock whose ``execute()`` returns ``data``."""
    table_mock = Mock()
    for method in (
        "select", "insert", "update", "delete", "upsert",
        "eq", "in_", "limit", "order", "gte", "lte", "ilike",
    ):
        getattr(table_mock, method).return_value = table_mock
    table_mock.execute = AsyncMock(return_value=Mock(data=data if data is not None else []))
    return table_mock


@pytest.fixture
def make_table():
    """Factory for per-table query mocks"""
    return make_table_mock


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client; ``client.tables[name]`` overrides one table."""
    client = Mock()
    client.tables = {}
    default_table = make_table_mock()

    client.table.side_effect = lambda name: client.tables.get(name, default_table)
    client.auth = Mock()
    client.auth.get_user = AsyncMock(return_value=Mock(user=None))
    return client


@pytest.fixture
def mock_database(mock_supabase_client):
    """Database over the mock client with real repositories"""
    from core.services.database import Database

    return Database(mock_supabase_client)


@pytest.fixture
def mock_db():
    """Database stand-in with async repository methods"""
    db = Mock()
    db.client = Mock()

    db.stores = Mock()
    db.stores.get_by_slug = AsyncMock(return_value=None)

    db.products = Mock()
    db.products.get_stock_snapshots = AsyncMock(return_value={})
    db.products.get_stock_snapshot = AsyncMock(return_value=None)

    db.orders = Mock()
    db.orders.get_owned = AsyncMock(return_value=None)
    db.orders.update = AsyncMock(return_value=None)
    db.orders.get_with_items = AsyncMock(return_value=None)
    db.orders.get_customer_id = AsyncMock(return_value=None)

    db.customers = Mock()
    db.customers.get_id_by_email = AsyncMock(return_value=None)

    db.messages = Mock()
    db.messages.create_customer_message = AsyncMock(return_value={})
    db.messages.create_product_request = AsyncMock(return_value={})
    db.messages.list_product_requests = AsyncMock(return_value=[])
    db.messages.update_product_request_status = AsyncMock(return_value=[])

    db.visits = Mock()
    db.visits.record_daily_visit = AsyncMock(return_value=None)

    db.items = Mock()
    db.items.list_active = AsyncMock(return_value=[])
    db.items.get_owned = AsyncMock(return_value=None)
    db.items.create = AsyncMock(return_value={})
    db.items.archive = AsyncMock(return_value=[])
    db.items.delete = AsyncMock(return_value=[])

    db.sales = Mock()
    db.sales.list_for_seller = AsyncMock(return_value=[])
    db.sales.has_sales = AsyncMock(return_value=False)
    db.sales.create = AsyncMock(return_value={})
    db.sales.delete = AsyncMock(return_value=[])
    return db


@pytest.fixture
def sample_store():
    """Sample store settings row"""
    return {
        "id": "store-1",
        "user_id": "seller-1",
        "store_slug": "vintage-finds",
        "store_name": "Vintage Finds",
        "is_active": True,
        "business_email": "owner@vintage.test",
        "business_phone": None,
        "free_shipping_threshold": 100.0,
        "flat_shipping_rate": 7.5,
    }


@pytest.fixture
def sample_product_row():
    """Sample products row with embedded inventory and images"""
    return {
        "id": "prod-1",
        "title": "Brass Lamp",
        "price": 24.99,
        "user_id": "seller-1",
        "is_published": True,
        "items": [{"id": "item-1", "quantity_on_hand": 5}],
        "product_images": [{"image_url": "https://cdn.test/lamp.jpg"}],
    }


@pytest.fixture
def sample_order():
    """Sample order row with lines"""
    return {
        "id": "order-123",
        "user_id": "seller-1",
        "order_number": "ORD-1001",
        "customer_id": "cust-1",
        "fulfillment_status": "pending",
        "shipped_at": None,
        "delivered_at": None,
        "tracking_number": None,
        "total": 49.98,
        "created_at": "2025-01-01T00:00:00Z",
        "order_items": [
            {
                "product_id": "prod-1",
                "title": "Brass Lamp",
                "price": 24.99,
                "quantity": 2,
                "products": {
                    "product_images": [{"image_url": "https://cdn.test/lamp.jpg"}],
                    "items": [{"quantity_on_hand": 5}],
                },
            },
        ],
    }


@pytest.fixture
def sample_item():
    """Sample inventory item row"""
    return {
        "id": "item-1",
        "user_id": "seller-1",
        "name": "Brass Lamp",
        "category": "Lighting",
        "purchase_price": 8.0,
        "purchase_date": "2025-01-01",
        "purchase_location": "Estate sale",
        "quantity_purchased": 5,
        "quantity_on_hand": 5,
        "quantity_sold": 0,
        "is_archived": False,
    }
