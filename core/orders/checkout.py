"""
Checkout validation.

Re-checks a submitted cart against authoritative stock and prices before
payment. Client-side prices and ceilings are never trusted: every line is
priced from the products table and rejected if stock no longer covers it.
"""
from decimal import Decimal
from typing import Dict, Iterable, List

from core.errors import (
    ERROR_EMPTY_CART,
    ERROR_INTERNAL,
    ERROR_INVALID_QUANTITY,
    ERROR_NO_PRODUCTS_FOUND,
    ERROR_STORE_NOT_FOUND,
    ERROR_STORE_SLUG_REQUIRED,
)
from core.logging import get_logger, sanitize_string_for_logging
from core.outcomes import Outcome
from core.services.database import Database
from core.services.money import multiply, round_money, to_float

logger = get_logger(__name__)


class CheckoutService:
    """Builds a priced quote for a cart or explains why it cannot be bought."""

    def __init__(self, db: Database):
        self.db = db

    async def validate_cart(self, store_slug: str | None, items: Iterable[dict] | None) -> Outcome:
        items = list(items or [])
        if not items:
            return Outcome.validation(ERROR_EMPTY_CART)
        if not store_slug:
            return Outcome.validation(ERROR_STORE_SLUG_REQUIRED)

        # Repeated product ids draw on the same stock
        requested: Dict[str, int] = {}
        for item in items:
            quantity = item.get("quantity")
            if (
                not item.get("product_id")
                or isinstance(quantity, bool)
                or not isinstance(quantity, int)
                or quantity <= 0
            ):
                return Outcome.validation(ERROR_INVALID_QUANTITY)
            requested[item["product_id"]] = requested.get(item["product_id"], 0) + quantity

        try:
            store = await self.db.stores.get_by_slug(store_slug, active_only=True)
            if not store:
                return Outcome.not_found(ERROR_STORE_NOT_FOUND)

            snapshots = await self.db.products.get_stock_snapshots(
                list(requested),
                seller_id=store.user_id,
            )
        except Exception as e:
            logger.error(
                f"Checkout lookup failed for store {sanitize_string_for_logging(store_slug)}: {e}",
                exc_info=True,
            )
            return Outcome.internal(ERROR_INTERNAL)

        if not snapshots:
            return Outcome.not_found(ERROR_NO_PRODUCTS_FOUND)

        lines: List[dict] = []
        subtotal = Decimal("0")

        for item in items:
            product_id = item["product_id"]
            snapshot = snapshots.get(product_id)
            if snapshot is None:
                return Outcome.not_found(f"Product not found: {product_id}")

            if snapshot.quantity_on_hand is None:
                return Outcome.validation(f"No inventory data for {snapshot.title}")

            if snapshot.quantity_on_hand < requested[product_id]:
                return Outcome.validation(
                    f"Insufficient stock for {snapshot.title}. Only {snapshot.quantity_on_hand} available."
                )

            line_total = round_money(multiply(snapshot.price, item["quantity"]))
            subtotal += line_total
            lines.append({
                "product_id": product_id,
                "title": snapshot.title,
                "price": to_float(snapshot.price),
                "quantity": item["quantity"],
                "line_total": to_float(line_total),
            })

        shipping_cost = store.shipping_cost_for(subtotal)
        total = subtotal + shipping_cost

        return Outcome.success({
            "store_id": store.id,
            "store_slug": store.store_slug,
            "items": lines,
            "subtotal": to_float(subtotal),
            "shipping_cost": to_float(shipping_cost),
            "total": to_float(total),
        })
