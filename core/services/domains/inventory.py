"""
Inventory Domain Service

The seller's stock records. ``items.quantity_on_hand`` is the ceiling every
storefront cart and checkout is clamped against.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from core.errors import (
    ERROR_INVALID_PURCHASE_PRICE,
    ERROR_ITEM_CREATE_FAILED,
    ERROR_ITEM_DELETE_FAILED,
    ERROR_ITEM_ID_REQUIRED,
    ERROR_ITEM_NOT_FOUND,
    ERROR_ITEMS_FETCH_FAILED,
    ERROR_MISSING_REQUIRED_FIELDS,
    ERROR_QUANTITY_NOT_POSITIVE,
)
from core.logging import get_logger, sanitize_id_for_logging
from core.outcomes import Outcome
from core.services.money import to_decimal, to_float

logger = get_logger(__name__)


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


def parse_price(value) -> Optional[Decimal]:
    """A JSON number that is finite and not negative, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    price = to_decimal(value)
    if not price.is_finite() or price < 0:
        return None
    return price


def is_positive_quantity(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass
class NewItem:
    """Inventory purchase as entered on the dashboard."""
    name: Optional[str]
    purchase_price: Optional[float]
    purchase_date: Optional[date]
    purchase_location: Optional[str]
    quantity_purchased: Optional[int]
    description: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None

    def has_required_fields(self) -> bool:
        return bool(
            _clean(self.name)
            and self.purchase_price is not None
            and self.purchase_date
            and _clean(self.purchase_location)
            and self.quantity_purchased is not None
        )


class InventoryService:
    """Create, list and retire inventory items for one seller."""

    def __init__(self, db):
        self.db = db

    async def list_items(self, seller_id: str) -> Outcome:
        try:
            items = await self.db.items.list_active(seller_id)
        except Exception as e:
            logger.error(f"Error fetching items: {e}", exc_info=True)
            return Outcome.internal(ERROR_ITEMS_FETCH_FAILED)
        return Outcome.success({"items": items})

    async def create_item(self, seller_id: str, item: NewItem) -> Outcome:
        """Record a purchase. All purchased units start on hand."""
        if not item.has_required_fields():
            return Outcome.validation(ERROR_MISSING_REQUIRED_FIELDS)

        price = parse_price(item.purchase_price)
        if price is None:
            return Outcome.validation(ERROR_INVALID_PURCHASE_PRICE)
        if not is_positive_quantity(item.quantity_purchased):
            return Outcome.validation(ERROR_QUANTITY_NOT_POSITIVE)

        try:
            created = await self.db.items.create({
                "user_id": seller_id,
                "name": _clean(item.name),
                "description": _clean(item.description) or None,
                "sku": _clean(item.sku) or None,
                "category": _clean(item.category) or None,
                "purchase_price": to_float(price),
                "purchase_date": item.purchase_date.isoformat(),
                "purchase_location": _clean(item.purchase_location),
                "quantity_purchased": item.quantity_purchased,
                "quantity_on_hand": item.quantity_purchased,
                "quantity_sold": 0,
                "image_url": _clean(item.image_url) or None,
                "notes": _clean(item.notes) or None,
            })
        except Exception as e:
            logger.error(f"Error creating item: {e}", exc_info=True)
            return Outcome.internal(ERROR_ITEM_CREATE_FAILED)

        return Outcome.success({"item": created})

    async def delete_item(self, seller_id: str, item_id: Optional[str]) -> Outcome:
        """
        Delete an item, or archive it when sales reference it.

        Archived items drop out of ``list_items`` but keep the sales ledger intact.
        """
        if not item_id:
            return Outcome.validation(ERROR_ITEM_ID_REQUIRED)

        safe_item_id = sanitize_id_for_logging(item_id)
        try:
            if await self.db.sales.has_sales(item_id, seller_id):
                rows = await self.db.items.archive(item_id, seller_id)
                message = "Item archived successfully"
            else:
                rows = await self.db.items.delete(item_id, seller_id)
                message = "Item deleted successfully"
        except Exception as e:
            logger.error(f"Error deleting item {safe_item_id}: {e}", exc_info=True)
            return Outcome.internal(ERROR_ITEM_DELETE_FAILED)

        if not rows:
            return Outcome.not_found(ERROR_ITEM_NOT_FOUND)

        logger.info(f"Item {safe_item_id}: {message.lower()}")
        return Outcome.success({"message": message})
