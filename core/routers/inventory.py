"""
Inventory Router

Seller dashboard endpoints for inventory items and the sales recorded
against them. Every route requires the seller's bearer token.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from core.auth import SellerPrincipal, verify_seller_auth
from core.services.domains import InventoryService, NewItem, NewSale, SalesService

from .deps import get_inventory_service, get_sales_service, outcome_response
from .models import ItemCreate, SaleCreate

router = APIRouter(prefix="/api", tags=["inventory"])


# ==================== ITEMS ====================

@router.get("/items")
async def list_items(
    seller: SellerPrincipal = Depends(verify_seller_auth),
    service: InventoryService = Depends(get_inventory_service),
):
    """The seller's non-archived items, newest first."""
    return outcome_response(await service.list_items(seller.id))


@router.post("/items")
async def create_item(
    request: ItemCreate,
    seller: SellerPrincipal = Depends(verify_seller_auth),
    service: InventoryService = Depends(get_inventory_service),
):
    outcome = await service.create_item(seller.id, NewItem(**request.model_dump()))
    return outcome_response(outcome, success_status=status.HTTP_201_CREATED)


@router.delete("/items")
async def delete_item(
    item_id: Optional[str] = Query(None, alias="id"),
    seller: SellerPrincipal = Depends(verify_seller_auth),
    service: InventoryService = Depends(get_inventory_service),
):
    """Delete an item, or archive it if it has sales."""
    return outcome_response(await service.delete_item(seller.id, item_id))


# ==================== SALES ====================

@router.get("/sales")
async def list_sales(
    seller: SellerPrincipal = Depends(verify_seller_auth),
    service: SalesService = Depends(get_sales_service),
):
    """The seller's sales with their item, most recent sale date first."""
    return outcome_response(await service.list_sales(seller.id))


@router.post("/sales")
async def record_sale(
    request: SaleCreate,
    seller: SellerPrincipal = Depends(verify_seller_auth),
    service: SalesService = Depends(get_sales_service),
):
    outcome = await service.record_sale(seller.id, NewSale(**request.model_dump()))
    return outcome_response(outcome, success_status=status.HTTP_201_CREATED)


@router.delete("/sales")
async def delete_sale(
    sale_id: Optional[str] = Query(None, alias="id"),
    seller: SellerPrincipal = Depends(verify_seller_auth),
    service: SalesService = Depends(get_sales_service),
):
    return outcome_response(await service.delete_sale(seller.id, sale_id))
