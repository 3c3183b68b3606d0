"""
FastAPI Routers Package

Endpoints are split by area without adding serverless functions.
All routers are included in api/index.py.
"""

from core.routers.checkout import router as checkout_router
from core.routers.contact import router as contact_router
from core.routers.inventory import router as inventory_router
from core.routers.orders import router as orders_router
from core.routers.store_visit import router as store_visit_router
from core.routers.storefront import router as storefront_router

__all__ = [
    "checkout_router",
    "contact_router",
    "inventory_router",
    "orders_router",
    "store_visit_router",
    "storefront_router",
]
