"""Item Repository - the seller's inventory records."""
from typing import List, Optional

from .base import BaseRepository


class ItemRepository(BaseRepository):
    """Inventory items; every query is scoped to the owning seller."""

    async def list_active(self, seller_id: str) -> List[dict]:
        """Non-archived items, newest first."""
        result = await (
            self.client.table("items")
            .select("*")
            .eq("user_id", seller_id)
            .eq("is_archived", False)
            .order("created_at", desc=True)
            .execute()
        )
        return result.data or []

    async def get_owned(self, item_id: str, seller_id: str, columns: str = "id") -> Optional[dict]:
        result = await (
            self.client.table("items")
            .select(columns)
            .eq("id", item_id)
            .eq("user_id", seller_id)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None

    async def create(self, data: dict) -> dict:
        result = await self.client.table("items").insert(data).execute()
        return result.data[0] if result.data else data

    async def archive(self, item_id: str, seller_id: str) -> List[dict]:
        """Hide an item that has sales history. Returns the updated rows."""
        result = await (
            self.client.table("items")
            .update({"is_archived": True})
            .eq("id", item_id)
            .eq("user_id", seller_id)
            .execute()
        )
        return result.data or []

    async def delete(self, item_id: str, seller_id: str) -> List[dict]:
        """Returns the deleted rows (empty when the item is not the seller's)."""
        result = await (
            self.client.table("items")
            .delete()
            .eq("id", item_id)
            .eq("user_id", seller_id)
            .execute()
        )
        return result.data or []
