"""Database Models - Pydantic models for storefront entities."""
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from core.services.money import to_decimal as _to_decimal

FULFILLMENT_STATUSES = ("pending", "shipped", "delivered", "fulfilled")


def normalize_stock_record(value: Any) -> Optional[dict]:
    """
    Collapse a joined stock reference into a single record.

    PostgREST returns a to-one embed as an object and a to-many embed as a
    list, depending on how the relationship was declared. Callers only ever
    need the first record.
    """
    if isinstance(value, list):
        return value[0] if value else None
    if isinstance(value, dict):
        return value
    return None


def quantity_on_hand(value: Any) -> Optional[int]:
    """Read ``quantity_on_hand`` from a stock reference of either shape."""
    record = normalize_stock_record(value)
    if record is None or record.get("quantity_on_hand") is None:
        return None
    return int(record["quantity_on_hand"])


class StoreSettings(BaseModel):
    """Public storefront configuration for one seller."""
    id: str
    user_id: str
    store_slug: str
    store_name: Optional[str] = None
    is_active: bool = True
    business_email: Optional[str] = None
    business_phone: Optional[str] = None
    free_shipping_threshold: Optional[Decimal] = None
    flat_shipping_rate: Decimal = Decimal("0")

    class Config:
        extra = "ignore"

    @field_validator("flat_shipping_rate", mode="before")
    @classmethod
    def convert_rate_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("free_shipping_threshold", mode="before")
    @classmethod
    def convert_threshold_to_decimal(cls, v):
        return None if v is None else _to_decimal(v)

    def shipping_cost_for(self, subtotal: Decimal) -> Decimal:
        """Flat rate unless the free-shipping threshold is reached."""
        if self.free_shipping_threshold and subtotal >= self.free_shipping_threshold:
            return Decimal("0")
        return self.flat_shipping_rate


class StockSnapshot(BaseModel):
    """Authoritative price and stock for one product at read time."""
    product_id: str
    title: str
    price: Decimal
    quantity_on_hand: Optional[int] = None  # None: product has no inventory record
    item_id: Optional[str] = None
    image_url: str = ""

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @property
    def available(self) -> int:
        return max(self.quantity_on_hand or 0, 0)

    @classmethod
    def from_row(cls, row: dict) -> "StockSnapshot":
        """Build from a ``products`` row with embedded ``items`` and ``product_images``."""
        stock = normalize_stock_record(row.get("items"))
        images = row.get("product_images") or []
        return cls(
            product_id=row["id"],
            title=row.get("title") or "",
            price=row.get("price"),
            quantity_on_hand=quantity_on_hand(stock),
            item_id=stock.get("id") if stock else None,
            image_url=(images[0].get("image_url") if images else None) or "",
        )


class OrderItem(BaseModel):
    """Immutable line of a placed order (title/price captured at purchase)."""
    product_id: str
    title: str
    price: Decimal
    quantity: int
    products: Optional[dict] = None  # live product reference (images, stock)

    class Config:
        extra = "ignore"

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)


class Order(BaseModel):
    """Order model."""
    id: str
    user_id: str  # seller
    order_number: Optional[str] = None
    customer_id: Optional[str] = None
    fulfillment_status: Optional[str] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    tracking_number: Optional[str] = None
    tracking_carrier: Optional[str] = None
    tracking_url: Optional[str] = None
    total: Decimal = Decimal("0")
    created_at: Optional[datetime] = None
    order_items: list[OrderItem] = []

    class Config:
        extra = "ignore"

    @field_validator("total", mode="before")
    @classmethod
    def convert_total_to_decimal(cls, v):
        return _to_decimal(v)
