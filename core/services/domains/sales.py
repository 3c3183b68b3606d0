"""
Sales Domain Service

Sales the seller records against their own inventory items, on any platform.
The ``sales`` insert trigger computes profit and moves the sold units out of
``items.quantity_on_hand``; this service only guards ownership and stock.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.errors import (
    ERROR_INVALID_SALE_PRICE,
    ERROR_ITEM_NOT_FOUND,
    ERROR_MISSING_REQUIRED_FIELDS,
    ERROR_QUANTITY_NOT_POSITIVE,
    ERROR_SALE_CREATE_FAILED,
    ERROR_SALE_DELETE_FAILED,
    ERROR_SALE_ID_REQUIRED,
    ERROR_SALE_NOT_FOUND,
    ERROR_SALES_FETCH_FAILED,
)
from core.logging import get_logger, sanitize_id_for_logging
from core.outcomes import Outcome
from core.services.money import to_float

from .inventory import is_positive_quantity, parse_price

logger = get_logger(__name__)

# Item columns read for the ownership/stock check and echoed back on the sale
SALE_ITEM_COLUMNS = "id, name, purchase_price, category, quantity_on_hand"


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


@dataclass
class NewSale:
    """Sale as entered on the dashboard."""
    item_id: Optional[str]
    platform: Optional[str]
    sale_price: Optional[float]
    sale_date: Optional[date]
    quantity_sold: Optional[int]
    platform_fees: Optional[float] = None
    shipping_cost: Optional[float] = None
    other_fees: Optional[float] = None
    notes: Optional[str] = None

    def has_required_fields(self) -> bool:
        return bool(
            _clean(self.item_id)
            and _clean(self.platform)
            and self.sale_price is not None
            and self.sale_date
            and self.quantity_sold is not None
        )


class SalesService:
    """
    Sales ledger service.

    Every method returns an Outcome and scopes reads and writes to the
    calling seller.
    """

    def __init__(self, db):
        self.db = db

    async def list_sales(self, seller_id: str) -> Outcome:
        try:
            sales = await self.db.sales.list_for_seller(seller_id)
        except Exception as e:
            logger.error(f"Error fetching sales: {e}", exc_info=True)
            return Outcome.internal(ERROR_SALES_FETCH_FAILED)
        return Outcome.success({"sales": sales})

    async def record_sale(self, seller_id: str, sale: NewSale) -> Outcome:
        """
        Record a sale of one of the seller's items.

        Rejected with 404 when the item is not the seller's, and with 400
        when fewer units are on hand than were sold.
        """
        if not sale.has_required_fields():
            return Outcome.validation(ERROR_MISSING_REQUIRED_FIELDS)

        price = parse_price(sale.sale_price)
        if price is None:
            return Outcome.validation(ERROR_INVALID_SALE_PRICE)
        if not is_positive_quantity(sale.quantity_sold):
            return Outcome.validation(ERROR_QUANTITY_NOT_POSITIVE)

        item_id = _clean(sale.item_id)
        safe_item_id = sanitize_id_for_logging(item_id)
        try:
            item = await self.db.items.get_owned(item_id, seller_id, columns=SALE_ITEM_COLUMNS)
        except Exception as e:
            logger.error(f"Failed to load item {safe_item_id}: {e}", exc_info=True)
            return Outcome.internal(ERROR_SALE_CREATE_FAILED)

        if not item:
            return Outcome.not_found(ERROR_ITEM_NOT_FOUND)

        on_hand = item.get("quantity_on_hand") or 0
        if on_hand < sale.quantity_sold:
            logger.info(f"Rejected sale of {sale.quantity_sold} for item {safe_item_id}, {on_hand} on hand")
            return Outcome.validation(f"Only {on_hand} units available")

        try:
            created = await self.db.sales.create({
                "user_id": seller_id,
                "item_id": item_id,
                "platform": _clean(sale.platform),
                "sale_price": to_float(price),
                "sale_date": sale.sale_date.isoformat(),
                "quantity_sold": sale.quantity_sold,
                "platform_fees": to_float(parse_price(sale.platform_fees) or 0),
                "shipping_cost": to_float(parse_price(sale.shipping_cost) or 0),
                "other_fees": to_float(parse_price(sale.other_fees) or 0),
                "notes": _clean(sale.notes) or None,
                "is_synced_from_api": False,
            })
        except Exception as e:
            logger.error(f"Error creating sale for item {safe_item_id}: {e}", exc_info=True)
            return Outcome.internal(ERROR_SALE_CREATE_FAILED)

        embedded = {key: item.get(key) for key in ("id", "name", "purchase_price", "category")}
        return Outcome.success({"sale": {**created, "items": embedded}})

    async def delete_sale(self, seller_id: str, sale_id: Optional[str]) -> Outcome:
        if not sale_id:
            return Outcome.validation(ERROR_SALE_ID_REQUIRED)

        try:
            rows = await self.db.sales.delete(sale_id, seller_id)
        except Exception as e:
            logger.error(f"Error deleting sale {sanitize_id_for_logging(sale_id)}: {e}", exc_info=True)
            return Outcome.internal(ERROR_SALE_DELETE_FAILED)

        if not rows:
            return Outcome.not_found(ERROR_SALE_NOT_FOUND)
        return Outcome.success({"message": "Sale deleted successfully"})
