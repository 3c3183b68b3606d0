"""
Database Module - Supabase and Redis client factories

Clients are created explicitly and handed to whoever needs them:
- Async Supabase client: one per request (see core.routers.deps.get_db)
- Upstash Redis client: one per process, owned by the visit rate limiter
"""

from supabase._async.client import AsyncClient
from supabase._async.client import create_client as acreate_client
from upstash_redis.asyncio import Redis as AsyncRedis

from core.config import Settings, get_settings
from core.logging import get_logger

logger = get_logger(__name__)


async def create_supabase(settings: Settings | None = None) -> AsyncClient:
    """
    Create an async Supabase client with the service role key.

    Row ownership is enforced in queries (``user_id`` filters), not by RLS.
    """
    settings = settings or get_settings()
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
    return await acreate_client(settings.supabase_url, settings.supabase_service_role_key)


async def close_supabase(client: AsyncClient) -> None:
    """
    Close the HTTP pools a Supabase client opened.

    PostgREST is created lazily on first query; the auth client always holds
    its own pool. Each close is attempted even if the other fails.
    """
    postgrest = getattr(client, "_postgrest", None)
    if postgrest is not None:
        try:
            await postgrest.aclose()
        except Exception as e:
            logger.warning(f"Failed to close PostgREST session: {e}")
    try:
        await client.auth.close()
    except Exception as e:
        logger.warning(f"Failed to close auth HTTP client: {e}")


def create_redis(settings: Settings | None = None) -> AsyncRedis | None:
    """
    Create an async Upstash Redis client, or None when Redis is not configured.

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    settings = settings or get_settings()
    if not settings.redis_configured:
        return None
    return AsyncRedis(url=settings.upstash_redis_rest_url, token=settings.upstash_redis_rest_token)


class RedisKeys:
    """Redis key prefixes."""

    VISIT_RATE_LIMIT = "rate_limit:store_visit:"  # rate_limit:store_visit:{ip}

    @staticmethod
    def visit_rate_limit_key(client_ip: str) -> str:
        return f"{RedisKeys.VISIT_RATE_LIMIT}{client_ip}"


class TTL:
    """Time-to-live constants (seconds)."""

    VISIT_RATE_LIMIT_WINDOW = 60
