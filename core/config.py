"""
Application settings.

All configuration comes from environment variables (Vercel project settings in
production, a local .env file during development).

Usage:
    from core.config import get_settings
    settings = get_settings()
"""

import os
from dataclasses import dataclass
from functools import cache

from dotenv import load_dotenv

# One year, matches the visit cookie lifetime
DEFAULT_COOKIE_MAX_AGE = 60 * 60 * 24 * 365

# Carts survive 30 days of inactivity on the device
DEFAULT_CART_COOKIE_MAX_AGE = 60 * 60 * 24 * 30

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment."""

    supabase_url: str
    supabase_service_role_key: str
    upstash_redis_rest_url: str
    upstash_redis_rest_token: str
    enforce_forward_fulfillment: bool
    cart_cookie_max_age: int
    visit_cookie_max_age: int
    cookie_secure: bool
    is_production: bool

    @classmethod
    def from_env(cls) -> "Settings":
        is_production = os.environ.get("VERCEL") == "1"
        return cls(
            supabase_url=os.environ.get("SUPABASE_URL", ""),
            supabase_service_role_key=os.environ.get("SUPABASE_SERVICE_ROLE_KEY", ""),
            upstash_redis_rest_url=os.environ.get("UPSTASH_REDIS_REST_URL", ""),
            upstash_redis_rest_token=os.environ.get("UPSTASH_REDIS_REST_TOKEN", ""),
            enforce_forward_fulfillment=_env_flag("ENFORCE_FORWARD_FULFILLMENT"),
            cart_cookie_max_age=_env_int("CART_COOKIE_MAX_AGE", DEFAULT_CART_COOKIE_MAX_AGE),
            visit_cookie_max_age=_env_int("VISIT_COOKIE_MAX_AGE", DEFAULT_COOKIE_MAX_AGE),
            cookie_secure=_env_flag("COOKIE_SECURE", default=is_production),
            is_production=is_production,
        )

    @property
    def redis_configured(self) -> bool:
        return bool(self.upstash_redis_rest_url and self.upstash_redis_rest_token)


@cache
def get_settings() -> Settings:
    """Load settings once per process (.env is read on first call)."""
    load_dotenv()
    return Settings.from_env()


__all__ = ["Settings", "get_settings"]
