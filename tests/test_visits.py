"""
Tests for store visit recording and the visit rate limiter
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock, patch

import pytest

from core.db import RedisKeys
from core.middleware.rate_limit import RateLimiter, get_client_ip
from core.outcomes import OutcomeKind
from core.services.domains import VisitService
from core.services.domains.visits import hash_visitor_key, is_valid_slug, today_utc
from core.services.models import StoreSettings


class TestVisitHelpers:
    """Tests for slug validation and visitor hashing."""

    @pytest.mark.parametrize("slug", ["vintage-finds", "shop1", "a-b-c"])
    def test_valid_slugs(self, slug):
        assert is_valid_slug(slug)

    @pytest.mark.parametrize("slug", ["", None, "Vintage", "-shop", "shop-", "a--b", "shop/1"])
    def test_invalid_slugs(self, slug):
        assert not is_valid_slug(slug)

    def test_visitor_hash_is_stable_and_opaque(self):
        first = hash_visitor_key("203.0.113.7", "sid")
        assert first == hash_visitor_key("203.0.113.7", "sid")
        assert first != hash_visitor_key("203.0.113.7", "other")
        assert "203.0.113.7" not in first
        assert len(first) == 64

    def test_today_utc(self):
        assert today_utc(datetime(2025, 6, 30, 23, 59, tzinfo=timezone.utc)) == "2025-06-30"


class TestVisitService:
    """Tests for VisitService.record_visit."""

    @pytest.mark.asyncio
    async def test_invalid_slug_rejected_before_lookup(self, mock_db):
        outcome = await VisitService(mock_db).record_visit("Bad Slug!", "1.2.3.4", "sid")

        assert outcome.kind is OutcomeKind.VALIDATION
        mock_db.stores.get_by_slug.assert_not_called()

    @pytest.mark.asyncio
    async def test_inactive_or_unknown_store(self, mock_db):
        outcome = await VisitService(mock_db).record_visit("vintage-finds", "1.2.3.4", "sid")

        assert outcome.kind is OutcomeKind.NOT_FOUND
        mock_db.stores.get_by_slug.assert_awaited_once_with("vintage-finds", active_only=True)
        mock_db.visits.record_daily_visit.assert_not_called()

    @pytest.mark.asyncio
    async def test_visit_recorded(self, mock_db, sample_store):
        mock_db.stores.get_by_slug.return_value = StoreSettings(**sample_store)

        outcome = await VisitService(mock_db).record_visit(" vintage-finds ", "1.2.3.4", "sid")

        assert outcome.ok
        slug, visitor_hash, visited = mock_db.visits.record_daily_visit.call_args.args
        assert slug == "vintage-finds"
        assert visitor_hash == hash_visitor_key("1.2.3.4", "sid")
        assert len(visited) == 10

    @pytest.mark.asyncio
    async def test_insert_failure_is_internal(self, mock_db, sample_store):
        mock_db.stores.get_by_slug.return_value = StoreSettings(**sample_store)
        mock_db.visits.record_daily_visit = AsyncMock(side_effect=RuntimeError("db down"))

        outcome = await VisitService(mock_db).record_visit("vintage-finds", "1.2.3.4", "sid")

        assert outcome.kind is OutcomeKind.INTERNAL


class TestGetClientIp:
    """Tests for client IP resolution behind the proxy."""

    def request(self, headers):
        return Mock(headers=headers)

    def test_forwarded_for_first_hop(self):
        assert get_client_ip(self.request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})) == "203.0.113.7"

    def test_real_ip(self):
        assert get_client_ip(self.request({"X-Real-IP": " 198.51.100.2 "})) == "198.51.100.2"

    def test_default(self):
        assert get_client_ip(self.request({})) == "127.0.0.1"


class TestRateLimiter:
    """Tests for the fixed-window limiter."""

    @pytest.mark.asyncio
    async def test_in_memory_limit(self):
        limiter = RateLimiter(requests_per_window=2, window_seconds=60)
        key = RedisKeys.visit_rate_limit_key("1.2.3.4")

        assert not await limiter.is_limited(key)
        await limiter.record(key)
        await limiter.record(key)
        assert await limiter.is_limited(key)
        assert not await limiter.is_limited(RedisKeys.visit_rate_limit_key("5.6.7.8"))

    @pytest.mark.asyncio
    async def test_in_memory_drops_expired_keys(self):
        limiter = RateLimiter(requests_per_window=2, window_seconds=60)

        with patch("core.middleware.rate_limit.time") as clock:
            clock.time.return_value = 1000.0
            await limiter.record("rate_limit:store_visit:1.2.3.4")
            await limiter.record("rate_limit:store_visit:5.6.7.8")

            clock.time.return_value = 1061.0
            await limiter.record("rate_limit:store_visit:9.9.9.9")

        assert list(limiter._cache) == ["rate_limit:store_visit:9.9.9.9"]

    @pytest.mark.asyncio
    async def test_in_memory_check_forgets_expired_key(self):
        limiter = RateLimiter(requests_per_window=1, window_seconds=60)

        with patch("core.middleware.rate_limit.time") as clock:
            clock.time.return_value = 1000.0
            await limiter.record("key")
            assert await limiter.is_limited("key")

            clock.time.return_value = 1060.0
            assert not await limiter.is_limited("key")

        assert "key" not in limiter._cache

    @pytest.mark.asyncio
    async def test_redis_counter(self):
        redis = Mock()
        redis.get = AsyncMock(return_value="20")
        redis.setex = AsyncMock()
        limiter = RateLimiter(requests_per_window=20, redis_client=redis)

        assert await limiter.is_limited("rate_limit:store_visit:1.2.3.4")

        await limiter.record("rate_limit:store_visit:1.2.3.4")
        redis.setex.assert_awaited_once_with("rate_limit:store_visit:1.2.3.4", 60, "21")

    @pytest.mark.asyncio
    async def test_redis_failure_falls_back_to_memory(self):
        redis = Mock()
        redis.get = AsyncMock(side_effect=ConnectionError("upstash unreachable"))
        limiter = RateLimiter(requests_per_window=1, redis_client=redis)

        await limiter.record("key")
        assert await limiter.is_limited("key")
