"""
Reorder: rebuild cart lines from a past order.

Order lines carry the title and price captured at purchase plus a live
reference to the product (images, current stock). Each produced line is fed
through ``CartStore.add_item``, which clamps again against the ceiling set
here.
"""
from typing import Iterable, List, Union

from core.services.models import OrderItem, quantity_on_hand

from .models import CartLine
from .store import CartStore


def _first_image_url(product: dict | None) -> str:
    images = (product or {}).get("product_images") or []
    if not images:
        return ""
    return images[0].get("image_url") or ""


def compose_reorder_line(item: OrderItem) -> CartLine:
    """
    Build one cart line from a historical order line.

    Ceiling is the live stock when there is some; for a product that is gone
    or sold out it falls back to the quantity originally ordered.
    """
    product = item.products or {}
    live_stock = quantity_on_hand(product.get("items"))
    max_quantity = live_stock if live_stock and live_stock > 0 else item.quantity

    return CartLine(
        product_id=item.product_id,
        title=item.title,
        unit_price=item.price,
        quantity=item.quantity,
        image_url=_first_image_url(product),
        max_quantity=max_quantity,
    )


def compose_reorder_lines(items: Iterable[Union[OrderItem, dict]]) -> List[CartLine]:
    return [
        compose_reorder_line(item if isinstance(item, OrderItem) else OrderItem(**item))
        for item in items
    ]


def reorder_into_cart(store: CartStore, items: Iterable[Union[OrderItem, dict]]) -> int:
    """Add every line of a past order to the cart. Returns the number of lines fed in."""
    lines = compose_reorder_lines(items)
    for line in lines:
        store.add_item(line)
    return len(lines)
