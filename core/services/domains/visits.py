"""
Store visit recording.

A visit is counted at most once per visitor per store per UTC day. The
visitor key is a hash of the client IP and a random per-browser cookie, so no
raw identifiers are stored.
"""
import hashlib
import re
from datetime import datetime, timezone
from typing import Optional

from core.errors import ERROR_INVALID_STORE, ERROR_STORE_NOT_FOUND, ERROR_VISIT_RECORD_FAILED
from core.logging import get_logger
from core.outcomes import Outcome

logger = get_logger(__name__)

SLUG_REGEX = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def is_valid_slug(value: Optional[str]) -> bool:
    return bool(value) and bool(SLUG_REGEX.match(value))


def hash_visitor_key(client_ip: str, visit_sid: str) -> str:
    return hashlib.sha256(f"{client_ip}{visit_sid}".encode("utf-8")).hexdigest()


def today_utc(now: Optional[datetime] = None) -> str:
    return (now or datetime.now(timezone.utc)).strftime("%Y-%m-%d")


class VisitService:
    """Records storefront page views."""

    def __init__(self, db):
        self.db = db

    async def record_visit(self, store_slug: Optional[str], client_ip: str, visit_sid: str) -> Outcome:
        store_slug = store_slug.strip() if isinstance(store_slug, str) else ""
        if not is_valid_slug(store_slug):
            return Outcome.validation(ERROR_INVALID_STORE)

        try:
            store = await self.db.stores.get_by_slug(store_slug, active_only=True)
            if not store:
                return Outcome.not_found(ERROR_STORE_NOT_FOUND)

            await self.db.visits.record_daily_visit(
                store_slug,
                hash_visitor_key(client_ip, visit_sid),
                today_utc(),
            )
        except Exception as e:
            logger.error(f"Store visit insert error: {e}")
            return Outcome.internal(ERROR_VISIT_RECORD_FAILED)

        return Outcome.success()
