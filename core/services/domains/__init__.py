"""Domain services built on the Database repositories."""
from .inventory import InventoryService, NewItem
from .sales import NewSale, SalesService
from .support import ContactMessage, SupportService
from .visits import VisitService

__all__ = [
    "ContactMessage",
    "InventoryService",
    "NewItem",
    "NewSale",
    "SalesService",
    "SupportService",
    "VisitService",
]
