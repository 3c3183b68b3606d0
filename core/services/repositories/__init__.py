"""
Repository Pattern for Database Operations

- StoreRepository: storefront settings lookup by slug
- ProductRepository: published products with stock (stock snapshots)
- OrderRepository: seller-owned orders, fulfillment updates, order lines
- CustomerRepository: customer lookups for storefront sessions
- ItemRepository: the seller's inventory records
- SaleRepository: recorded sales against inventory items
- MessageRepository: contact messages and product requests
- VisitRepository: daily store-visit records
"""
from .customer_repo import CustomerRepository
from .item_repo import ItemRepository
from .message_repo import MessageRepository
from .order_repo import OrderRepository
from .product_repo import ProductRepository
from .sale_repo import SaleRepository
from .store_repo import StoreRepository
from .visit_repo import VisitRepository

__all__ = [
    "CustomerRepository",
    "ItemRepository",
    "MessageRepository",
    "OrderRepository",
    "ProductRepository",
    "SaleRepository",
    "StoreRepository",
    "VisitRepository",
]
