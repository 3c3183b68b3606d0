"""
API Request Models

Fields the handlers validate themselves are optional here, so a missing
value produces the handler's 400 message rather than a schema error.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


# ==================== ORDER MODELS ====================

class OrderStatusRequest(BaseModel):
    order_id: Optional[str] = None
    fulfillment_status: Optional[str] = None


class OrderTrackingRequest(BaseModel):
    order_id: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_carrier: Optional[str] = None
    tracking_url: Optional[str] = None


# ==================== INVENTORY MODELS ====================

class ItemCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    purchase_price: Optional[float] = None
    purchase_date: Optional[date] = None
    purchase_location: Optional[str] = None
    quantity_purchased: Optional[int] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None


class SaleCreate(BaseModel):
    item_id: Optional[str] = None
    platform: Optional[str] = None
    sale_price: Optional[float] = None
    sale_date: Optional[date] = None
    quantity_sold: Optional[int] = None
    platform_fees: Optional[float] = None
    shipping_cost: Optional[float] = None
    other_fees: Optional[float] = None
    notes: Optional[str] = None


# ==================== STOREFRONT MODELS ====================

class ContactRequest(BaseModel):
    store_slug: Optional[str] = Field(None, alias="storeSlug")
    name: Optional[str] = None
    email: Optional[str] = None
    order_number: Optional[str] = Field(None, alias="orderNumber")
    subject: Optional[str] = None
    message: Optional[str] = None

    class Config:
        populate_by_name = True


class ProductRequestCreate(BaseModel):
    store_slug: Optional[str] = Field(None, alias="storeSlug")
    product_name: Optional[str] = Field(None, alias="productName")
    notes: Optional[str] = None

    class Config:
        populate_by_name = True


class ProductRequestUpdate(BaseModel):
    request_id: Optional[str] = Field(None, alias="requestId")
    status: Optional[str] = None

    class Config:
        populate_by_name = True


class StoreVisitRequest(BaseModel):
    store_slug: Optional[str] = None


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int  # 0 or less removes the line


class CheckoutItem(BaseModel):
    product_id: str
    quantity: int


class CheckoutRequest(BaseModel):
    items: list[CheckoutItem] = []
    store_slug: Optional[str] = None
