"""
Seller Order Router

Fulfillment status and tracking updates for the seller dashboard.
"""
from fastapi import APIRouter, Depends

from core.auth import SellerPrincipal, verify_seller_auth
from core.orders import OrderStatusService

from .deps import get_order_status_service, outcome_response
from .models import OrderStatusRequest, OrderTrackingRequest

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.patch("/status")
async def update_order_status(
    request: OrderStatusRequest,
    seller: SellerPrincipal = Depends(verify_seller_auth),
    service: OrderStatusService = Depends(get_order_status_service),
):
    """Set an order's fulfillment status (pending, shipped, delivered, fulfilled)."""
    outcome = await service.update_fulfillment_status(seller.id, request.order_id, request.fulfillment_status)
    return outcome_response(outcome)


@router.patch("/tracking")
async def update_order_tracking(
    request: OrderTrackingRequest,
    seller: SellerPrincipal = Depends(verify_seller_auth),
    service: OrderStatusService = Depends(get_order_status_service),
):
    """Attach carrier tracking; a pending order becomes shipped."""
    outcome = await service.update_tracking(
        seller.id,
        request.order_id,
        tracking_number=request.tracking_number,
        tracking_carrier=request.tracking_carrier,
        tracking_url=request.tracking_url,
    )
    if outcome.ok:
        outcome.data.pop("first_tracking", None)
    return outcome_response(outcome)
