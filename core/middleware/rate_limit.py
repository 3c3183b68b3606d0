"""Rate Limiting Middleware for FastAPI.

Limits requests per client IP on selected paths, backed by Upstash Redis with
an in-memory fallback.
"""

import time
from collections.abc import Callable, Iterable
from typing import Any

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from core.db import TTL, RedisKeys
from core.errors import ERROR_TOO_MANY_REQUESTS
from core.logging import get_logger, mask_ip_for_logging

logger = get_logger(__name__)

DEFAULT_CLIENT_IP = "127.0.0.1"


def get_client_ip(request: Request) -> str:
    """Original client IP behind Vercel's proxy."""
    if forwarded_for := request.headers.get("X-Forwarded-For"):
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    if real_ip := request.headers.get("X-Real-IP"):
        return real_ip.strip()
    return DEFAULT_CLIENT_IP


class RateLimiter:
    """Fixed-window request counter per key."""

    def __init__(
        self,
        requests_per_window: int = 20,
        window_seconds: int = TTL.VISIT_RATE_LIMIT_WINDOW,
        redis_client: Any = None,
    ) -> None:
        self.requests_per_window = requests_per_window
        self.window_seconds = window_seconds
        self.redis_client = redis_client
        self._cache: dict[str, list[float]] = {}  # Fallback in-memory cache
        self._last_sweep = 0.0

    async def is_limited(self, key: str) -> bool:
        if self.redis_client:
            try:
                current = await self.redis_client.get(key)
                return bool(current) and int(current) >= self.requests_per_window
            except Exception as e:
                logger.warning(f"Redis rate limit check failed: {e}, falling back to in-memory")

        now = time.time()
        if key not in self._cache:
            return False

        entries = self._live_entries(key, now)
        if not entries:
            del self._cache[key]
            return False
        self._cache[key] = entries
        return len(entries) >= self.requests_per_window

    async def record(self, key: str) -> None:
        now = time.time()

        if self.redis_client:
            try:
                current = await self.redis_client.get(key)
                if current is None:
                    await self.redis_client.setex(key, self.window_seconds, "1")
                else:
                    # Upstash REST has no atomic INCR with TTL in one call
                    await self.redis_client.setex(key, self.window_seconds, str(int(current) + 1))
                return
            except Exception as e:
                logger.warning(f"Redis rate limit record failed: {e}, falling back to in-memory")

        self._sweep(now)
        entries = self._live_entries(key, now)
        entries.append(now)
        self._cache[key] = entries

    def _live_entries(self, key: str, now: float) -> list[float]:
        return [t for t in self._cache.get(key, []) if now - t < self.window_seconds]

    def _sweep(self, now: float) -> None:
        """Drop keys whose whole window has expired, at most once per window."""
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        stale = [
            key for key, entries in self._cache.items()
            if not entries or now - entries[-1] >= self.window_seconds
        ]
        for key in stale:
            del self._cache[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limiting middleware.

    A request counts against the limit only when it succeeds, so rejected
    or failed beacons do not lock a visitor out.
    """

    def __init__(
        self,
        app: Any,
        limiter: RateLimiter,
        paths: Iterable[str] = ("/api/store-visit",),
    ) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.paths = tuple(paths)

    async def dispatch(self, request: Request, call_next: Callable[..., Any]) -> Response:
        if request.method != "POST" or not request.url.path.startswith(self.paths):
            return await call_next(request)  # type: ignore[no-any-return]

        client_ip = get_client_ip(request)
        key = RedisKeys.visit_rate_limit_key(client_ip)

        if await self.limiter.is_limited(key):
            logger.warning(f"Rate limit exceeded for {mask_ip_for_logging(client_ip)} on {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": ERROR_TOO_MANY_REQUESTS},
                headers={"Retry-After": str(self.limiter.window_seconds)},
            )

        response = await call_next(request)
        if response.status_code < 400:
            await self.limiter.record(key)
        return response  # type: ignore[no-any-return]
