"""Customer Repository - storefront customers."""
from typing import Optional

from .base import BaseRepository


class CustomerRepository(BaseRepository):
    """Customer lookups."""

    async def get_id_by_email(self, email: str) -> Optional[str]:
        result = await (
            self.client.table("customers")
            .select("id")
            .eq("email", email.strip())
            .limit(1)
            .execute()
        )
        return result.data[0]["id"] if result.data else None
