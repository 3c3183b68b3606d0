"""Store Repository - storefront settings."""
from typing import Optional

from core.services.models import StoreSettings

from .base import BaseRepository

STORE_COLUMNS = (
    "id, user_id, store_slug, store_name, is_active, business_email, business_phone, "
    "free_shipping_threshold, flat_shipping_rate"
)


class StoreRepository(BaseRepository):
    """Storefront settings lookups."""

    async def get_by_slug(self, store_slug: str, active_only: bool = False) -> Optional[StoreSettings]:
        """Get store by its public slug."""
        query = self.client.table("store_settings").select(STORE_COLUMNS).eq("store_slug", store_slug)
        if active_only:
            query = query.eq("is_active", True)
        result = await query.limit(1).execute()
        return StoreSettings(**result.data[0]) if result.data else None
