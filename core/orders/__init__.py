"""Order processing module."""
from .checkout import CheckoutService
from .status_service import (
    FULFILLMENT_TRANSITIONS,
    OrderStatusService,
    build_status_update,
    can_transition,
)

__all__ = [
    "CheckoutService",
    "FULFILLMENT_TRANSITIONS",
    "OrderStatusService",
    "build_status_update",
    "can_transition",
]
