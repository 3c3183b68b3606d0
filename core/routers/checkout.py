"""
Checkout Router

Validates a cart against live stock and prices before payment.
"""
from fastapi import APIRouter, Depends

from core.orders import CheckoutService

from .deps import get_checkout_service, outcome_response
from .models import CheckoutRequest

router = APIRouter(prefix="/api", tags=["checkout"])


@router.post("/checkout")
async def validate_checkout(
    request: CheckoutRequest,
    service: CheckoutService = Depends(get_checkout_service),
):
    """Return a priced quote (lines, subtotal, shipping, total) or the reason the cart cannot be bought."""
    outcome = await service.validate_cart(
        request.store_slug,
        [item.model_dump() for item in request.items],
    )
    return outcome_response(outcome)
