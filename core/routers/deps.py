"""
Shared Dependencies for Routers

Per-request services built on the request's Database, plus the helper that
turns an Outcome into a JSON response.
"""

from fastapi import Depends
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.orders import CheckoutService, OrderStatusService
from core.outcomes import Outcome
from core.services.database import Database, get_db
from core.services.domains import InventoryService, SalesService, SupportService, VisitService


# ==================== SERVICES ====================

def get_order_status_service(
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> OrderStatusService:
    return OrderStatusService(db, enforce_forward=settings.enforce_forward_fulfillment)


def get_checkout_service(db: Database = Depends(get_db)) -> CheckoutService:
    return CheckoutService(db)


def get_support_service(db: Database = Depends(get_db)) -> SupportService:
    return SupportService(db)


def get_visit_service(db: Database = Depends(get_db)) -> VisitService:
    return VisitService(db)


def get_inventory_service(db: Database = Depends(get_db)) -> InventoryService:
    return InventoryService(db)


def get_sales_service(db: Database = Depends(get_db)) -> SalesService:
    return SalesService(db)


# ==================== RESPONSES ====================

def outcome_response(outcome: Outcome, success_status: int | None = None) -> JSONResponse:
    """
    Success payload as-is; failures as ``{"error": reason}`` with the mapped status.

    ``success_status`` overrides 200 for handlers that create a resource.
    """
    if outcome.ok:
        return JSONResponse(status_code=success_status or outcome.status_code, content=outcome.data or {})
    return JSONResponse(status_code=outcome.status_code, content={"error": outcome.error})


__all__ = [
    "get_checkout_service",
    "get_db",
    "get_inventory_service",
    "get_order_status_service",
    "get_sales_service",
    "get_settings",
    "get_support_service",
    "get_visit_service",
    "outcome_response",
]
