"""
Storefront Core Module

This package contains the core infrastructure components:
- config: environment-driven settings
- db: Database clients (Supabase + Redis)
- cart: per-store cart kept on the customer's device
- orders: fulfillment status, tracking and checkout validation
- services: repositories and domain services
- routers: FastAPI endpoints

Note: Imports are lazy to avoid circular dependency issues
and ensure clean module loading in serverless environments.
"""

__all__ = [
    "create_supabase",
    "create_redis",
    "get_settings",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "create_supabase":
        from core.db import create_supabase
        return create_supabase
    elif name == "create_redis":
        from core.db import create_redis
        return create_redis
    elif name == "get_settings":
        from core.config import get_settings
        return get_settings
    raise AttributeError(f"module 'core' has no attribute '{name}'")
