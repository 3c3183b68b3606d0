"""
Customer Contact Router

Public endpoints customers use to reach a store, plus the seller's view of
product requests.
"""
from fastapi import APIRouter, Depends

from core.auth import SellerPrincipal, verify_seller_auth
from core.services.domains import ContactMessage, SupportService

from .deps import get_support_service, outcome_response
from .models import ContactRequest, ProductRequestCreate, ProductRequestUpdate

router = APIRouter(prefix="/api", tags=["contact"])


@router.post("/contact")
async def submit_contact_message(
    request: ContactRequest,
    service: SupportService = Depends(get_support_service),
):
    """Send a message to the store owner."""
    outcome = await service.submit_contact_message(ContactMessage(
        store_slug=request.store_slug,
        name=request.name,
        email=request.email,
        subject=request.subject,
        message=request.message,
        order_number=request.order_number,
    ))
    return outcome_response(outcome)


@router.post("/customer-product-requests")
async def submit_product_request(
    request: ProductRequestCreate,
    service: SupportService = Depends(get_support_service),
):
    """Ask a store to carry a product."""
    outcome = await service.submit_product_request(request.store_slug, request.product_name, request.notes)
    return outcome_response(outcome)


@router.get("/customer-product-requests")
async def list_product_requests(
    seller: SellerPrincipal = Depends(verify_seller_auth),
    service: SupportService = Depends(get_support_service),
):
    """Product requests addressed to the current seller, newest first."""
    return outcome_response(await service.list_product_requests(seller.id))


@router.patch("/customer-product-requests")
async def update_product_request(
    request: ProductRequestUpdate,
    seller: SellerPrincipal = Depends(verify_seller_auth),
    service: SupportService = Depends(get_support_service),
):
    outcome = await service.update_product_request(seller.id, request.request_id, request.status)
    return outcome_response(outcome)
