"""
Storefront API - Main FastAPI Application

Single entry point for the seller dashboard and storefront API routes.
Deployed as one Vercel serverless function.
"""
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Vercel runs this file directly; make the project root importable
_base_path = Path(__file__).parent.parent
if str(_base_path) not in sys.path:
    sys.path.insert(0, str(_base_path))

from core.db import create_redis
from core.errors import ERROR_INTERNAL, ERROR_INVALID_REQUEST
from core.logging import get_logger
from core.middleware.rate_limit import RateLimiter, RateLimitMiddleware
from core.routers import (
    checkout_router,
    contact_router,
    inventory_router,
    orders_router,
    store_visit_router,
    storefront_router,
)

logger = get_logger(__name__)

# Store visit beacons allowed per client IP per minute
VISIT_REQUESTS_PER_MINUTE = 20


# ==================== FASTAPI APP ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("Storefront API starting")
    yield
    logger.info("Storefront API shutting down")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors, reported like any other validation failure."""
    logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": ERROR_INVALID_REQUEST})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": ERROR_INTERNAL})


def create_app(limiter: RateLimiter | None = None) -> FastAPI:
    """Build the application. Tests pass their own ``limiter``."""
    app = FastAPI(
        title="Storefront API",
        description="Multi-tenant storefront, cart and order management API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        RateLimitMiddleware,
        limiter=limiter or RateLimiter(
            requests_per_window=VISIT_REQUESTS_PER_MINUTE,
            redis_client=create_redis(),
        ),
    )

    # Storefronts are served from seller domains
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(orders_router)
    app.include_router(contact_router)
    app.include_router(inventory_router)
    app.include_router(checkout_router)
    app.include_router(store_visit_router)
    app.include_router(storefront_router)

    # ==================== HEALTH CHECK ====================

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "ok", "service": "storefront-api"}

    return app


app = create_app()
