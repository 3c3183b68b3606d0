"""
Supabase Database Service

Groups the repositories around one async Supabase client. A Database is
created per request and passed explicitly to the services that need it.

Usage:
    from core.services.database import Database

    db = await Database.create()
    store = await db.stores.get_by_slug("vintage-finds", active_only=True)

In route handlers, depend on ``core.routers.deps.get_db`` instead.
"""

from collections.abc import AsyncIterator

from supabase._async.client import AsyncClient

from core.config import Settings
from core.db import close_supabase, create_supabase
from core.services.models import Order, StockSnapshot, StoreSettings
from core.services.repositories import (
    CustomerRepository,
    ItemRepository,
    MessageRepository,
    OrderRepository,
    ProductRepository,
    SaleRepository,
    StoreRepository,
    VisitRepository,
)


class Database:
    """Supabase client plus the repositories built on it."""

    def __init__(self, client: AsyncClient):
        self.client = client

        self.stores = StoreRepository(client)
        self.products = ProductRepository(client)
        self.orders = OrderRepository(client)
        self.customers = CustomerRepository(client)
        self.messages = MessageRepository(client)
        self.visits = VisitRepository(client)
        self.items = ItemRepository(client)
        self.sales = SaleRepository(client)

    @classmethod
    async def create(cls, settings: Settings | None = None) -> "Database":
        """Async factory: creates the Supabase client and repositories."""
        client = await create_supabase(settings)
        return cls(client)

    async def close(self) -> None:
        """Release the client's HTTP connections."""
        await close_supabase(self.client)


async def get_db() -> AsyncIterator[Database]:
    """FastAPI dependency: a fresh Database for the current request, closed after it."""
    db = await Database.create()
    try:
        yield db
    finally:
        await db.close()


__all__ = ["Database", "Order", "StockSnapshot", "StoreSettings", "get_db"]
