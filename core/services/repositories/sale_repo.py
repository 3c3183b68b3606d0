"""Sale Repository - recorded sales of inventory items."""
from typing import List

from .base import BaseRepository

# Embedded item columns shown next to each sale on the dashboard
SALE_WITH_ITEM_COLUMNS = "*, items (id, name, purchase_price, category, image_url)"


class SaleRepository(BaseRepository):
    """
    Sales ledger.

    Inserting a sale fires the ``sales`` trigger, which computes profit and
    moves units from ``items.quantity_on_hand`` to ``quantity_sold``.
    """

    async def list_for_seller(self, seller_id: str) -> List[dict]:
        result = await (
            self.client.table("sales")
            .select(SALE_WITH_ITEM_COLUMNS)
            .eq("user_id", seller_id)
            .order("sale_date", desc=True)
            .execute()
        )
        return result.data or []

    async def has_sales(self, item_id: str, seller_id: str) -> bool:
        result = await (
            self.client.table("sales")
            .select("id")
            .eq("item_id", item_id)
            .eq("user_id", seller_id)
            .limit(1)
            .execute()
        )
        return bool(result.data)

    async def create(self, data: dict) -> dict:
        result = await self.client.table("sales").insert(data).execute()
        return result.data[0] if result.data else data

    async def delete(self, sale_id: str, seller_id: str) -> List[dict]:
        result = await (
            self.client.table("sales")
            .delete()
            .eq("id", sale_id)
            .eq("user_id", seller_id)
            .execute()
        )
        return result.data or []
