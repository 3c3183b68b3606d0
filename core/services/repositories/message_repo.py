"""Message Repository - customer contact messages and product requests."""
from typing import List

from .base import BaseRepository


class MessageRepository(BaseRepository):
    """Inbound customer communication addressed to a seller."""

    async def create_customer_message(self, data: dict) -> dict:
        result = await self.client.table("customer_messages").insert(data).execute()
        return result.data[0] if result.data else data

    async def create_product_request(self, data: dict) -> dict:
        result = await self.client.table("customer_product_requests").insert(data).execute()
        return result.data[0] if result.data else data

    async def list_product_requests(self, seller_id: str) -> List[dict]:
        result = await (
            self.client.table("customer_product_requests")
            .select("*")
            .eq("user_id", seller_id)
            .order("created_at", desc=True)
            .execute()
        )
        return result.data or []

    async def update_product_request_status(self, request_id: str, seller_id: str, status: str) -> List[dict]:
        """Returns the updated rows (empty when the request is not the seller's)."""
        result = await (
            self.client.table("customer_product_requests")
            .update({"status": status})
            .eq("id", request_id)
            .eq("user_id", seller_id)
            .execute()
        )
        return result.data or []
