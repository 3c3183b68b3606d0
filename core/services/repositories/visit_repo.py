"""Visit Repository - one row per visitor per store per day."""
from .base import BaseRepository


class VisitRepository(BaseRepository):
    """Store visit records."""

    async def record_daily_visit(self, store_slug: str, visitor_key_hash: str, visited_date: str) -> None:
        """Insert the visit unless this visitor was already counted today."""
        await (
            self.client.table("store_visits")
            .upsert(
                {
                    "store_slug": store_slug,
                    "visitor_key_hash": visitor_key_hash,
                    "visited_date": visited_date,
                },
                on_conflict="store_slug,visitor_key_hash,visited_date",
                ignore_duplicates=True,
            )
            .execute()
        )
