"""Product Repository - published products and their stock."""
from typing import Dict, Iterable, Optional

from core.services.models import StockSnapshot

from .base import BaseRepository

# items holds the inventory record behind a product (one per product)
SNAPSHOT_COLUMNS = (
    "id, title, price, user_id, is_published, "
    "items (id, quantity_on_hand), "
    "product_images (image_url)"
)


class ProductRepository(BaseRepository):
    """Stock snapshot provider."""

    async def get_stock_snapshots(
        self,
        product_ids: Iterable[str],
        seller_id: Optional[str] = None,
        published_only: bool = True,
    ) -> Dict[str, StockSnapshot]:
        """
        Current price and quantity on hand for the given products.

        Products that do not exist, belong to another seller, or are not
        published are absent from the result.
        """
        ids = list(dict.fromkeys(product_ids))
        if not ids:
            return {}

        query = self.client.table("products").select(SNAPSHOT_COLUMNS).in_("id", ids)
        if seller_id:
            query = query.eq("user_id", seller_id)
        if published_only:
            query = query.eq("is_published", True)

        result = await query.execute()
        snapshots = [StockSnapshot.from_row(row) for row in result.data or []]
        return {s.product_id: s for s in snapshots}

    async def get_stock_snapshot(
        self,
        product_id: str,
        seller_id: Optional[str] = None,
    ) -> Optional[StockSnapshot]:
        snapshots = await self.get_stock_snapshots([product_id], seller_id=seller_id)
        return snapshots.get(product_id)
