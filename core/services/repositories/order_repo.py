"""Order Repository - seller-owned orders."""
from typing import Optional

from core.services.models import Order

from .base import BaseRepository

# Order lines embed the live product so reorders can read current stock
ORDER_WITH_ITEMS_COLUMNS = (
    "id, user_id, order_number, customer_id, fulfillment_status, shipped_at, delivered_at, "
    "tracking_number, tracking_carrier, tracking_url, total, created_at, "
    "order_items (product_id, title, price, quantity, "
    "products (product_images (image_url), items (quantity_on_hand)))"
)


class OrderRepository(BaseRepository):
    """Order database operations."""

    async def get_owned(self, order_id: str, seller_id: str, columns: str = "id, user_id") -> Optional[dict]:
        """Get an order only if it belongs to the seller."""
        result = await (
            self.client.table("orders")
            .select(columns)
            .eq("id", order_id)
            .eq("user_id", seller_id)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None

    async def update(self, order_id: str, seller_id: str, data: dict) -> Optional[dict]:
        """Apply a partial update to one of the seller's orders and return the updated row."""
        result = await (
            self.client.table("orders")
            .update(data)
            .eq("id", order_id)
            .eq("user_id", seller_id)
            .execute()
        )
        return result.data[0] if result.data else None

    async def get_with_items(self, order_id: str, seller_id: Optional[str] = None) -> Optional[Order]:
        """Get order with its lines and live product references."""
        query = self.client.table("orders").select(ORDER_WITH_ITEMS_COLUMNS).eq("id", order_id)
        if seller_id:
            query = query.eq("user_id", seller_id)
        result = await query.limit(1).execute()
        return Order(**result.data[0]) if result.data else None

    async def get_customer_id(self, order_id: str) -> Optional[str]:
        result = await self.client.table("orders").select("customer_id").eq("id", order_id).limit(1).execute()
        if not result.data:
            return None
        return result.data[0].get("customer_id")
