"""
Storefront Cart Router

Cart endpoints for one store, addressed by slug. The cart itself lives in a
cookie on the customer's browser; the server only reads stock and prices.

Cart mutations that need no stock lookup (quantity change, remove, clear)
never touch the database.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, Response

from core.auth import (
    CUSTOMER_ID_COOKIE,
    SESSION_TOKEN_COOKIE,
    SessionResolvers,
    resolve_customer_session,
)
from core.cart import CartLine, CartStore, CookieCartStorage, reorder_into_cart
from core.config import Settings, get_settings
from core.errors import (
    ERROR_INTERNAL,
    ERROR_INVALID_STORE,
    ERROR_ORDER_NOT_FOUND,
    ERROR_PRODUCT_NOT_FOUND,
    ERROR_STORE_NOT_FOUND,
)
from core.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from core.services.database import Database, get_db
from core.services.domains.visits import is_valid_slug
from core.services.models import StoreSettings

from .models import AddToCartRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/api/store/{slug}", tags=["storefront-cart"])


def get_cart_store(
    slug: str,
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
) -> CartStore:
    """Cart for this store, persisted to the customer's cookie on change."""
    if not is_valid_slug(slug):
        raise HTTPException(status_code=400, detail=ERROR_INVALID_STORE)
    storage = CookieCartStorage(
        request.cookies,
        response,
        slug,
        max_age=settings.cart_cookie_max_age,
        secure=settings.cookie_secure,
    )
    return CartStore(storage)


async def _get_active_store(db: Database, slug: str) -> StoreSettings:
    store = await db.stores.get_by_slug(slug, active_only=True)
    if not store:
        raise HTTPException(status_code=404, detail=ERROR_STORE_NOT_FOUND)
    return store


# ==================== CART ====================

@router.get("/cart")
async def get_cart(cart: CartStore = Depends(get_cart_store)):
    return cart.summary()


@router.post("/cart/items")
async def add_to_cart(
    slug: str,
    request: AddToCartRequest,
    cart: CartStore = Depends(get_cart_store),
    db: Database = Depends(get_db),
):
    """Add a product at its current price, clamped to current stock."""
    try:
        store = await _get_active_store(db, slug)
        snapshot = await db.products.get_stock_snapshot(request.product_id, seller_id=store.user_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to look up stock for {sanitize_id_for_logging(request.product_id)}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=ERROR_INTERNAL)

    if not snapshot:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)

    cart.add_item(CartLine(
        product_id=snapshot.product_id,
        title=snapshot.title,
        unit_price=snapshot.price,
        quantity=request.quantity,
        image_url=snapshot.image_url,
        max_quantity=snapshot.available,
    ))
    return cart.summary()


@router.patch("/cart/items/{product_id}")
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    cart: CartStore = Depends(get_cart_store),
):
    """Change a line's quantity (0 removes it)."""
    cart.update_quantity(product_id, request.quantity)
    return cart.summary()


@router.delete("/cart/items/{product_id}")
async def remove_cart_item(product_id: str, cart: CartStore = Depends(get_cart_store)):
    cart.remove_item(product_id)
    return cart.summary()


@router.delete("/cart")
async def clear_cart(cart: CartStore = Depends(get_cart_store)):
    cart.clear_cart()
    return cart.summary()


@router.post("/cart/sync")
async def sync_cart(
    slug: str,
    cart: CartStore = Depends(get_cart_store),
    db: Database = Depends(get_db),
):
    """
    Refresh ceilings and prices from live stock.

    If the lookup fails the cart is returned as-is with ``synced: false``;
    stale ceilings are fine until the next successful sync.
    """
    if cart.is_empty:
        return {**cart.summary(), "synced": True, "removed": [], "adjusted": []}

    try:
        store = await _get_active_store(db, slug)
        snapshots = await db.products.get_stock_snapshots(
            [line.product_id for line in cart.lines],
            seller_id=store.user_id,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.warning(f"Cart sync skipped for {sanitize_string_for_logging(slug)}: {e}")
        return {**cart.summary(), "synced": False, "removed": [], "adjusted": []}

    report = cart.sync_stock(snapshots)
    return {**cart.summary(), "synced": True, **report}


# ==================== REORDER ====================

@router.post("/orders/{order_id}/reorder")
async def reorder(
    slug: str,
    order_id: str,
    request: Request,
    cart: CartStore = Depends(get_cart_store),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Put the lines of one of the customer's past orders back in the cart."""
    session = await resolve_customer_session(
        request.cookies.get(CUSTOMER_ID_COOKIE),
        request.cookies.get(SESSION_TOKEN_COOKIE),
        SessionResolvers(
            get_order_customer_id=db.orders.get_customer_id,
            get_customer_id_by_email=db.customers.get_id_by_email,
        ),
        secret=settings.supabase_service_role_key or None,
    )
    # Anonymous and foreign orders look the same as missing ones
    if not session.is_authenticated:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)

    try:
        store = await _get_active_store(db, slug)
        order = await db.orders.get_with_items(order_id, seller_id=store.user_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to load order {sanitize_id_for_logging(order_id)} for reorder: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=ERROR_INTERNAL)

    if not order or order.customer_id != session.customer_id:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)

    added_lines = reorder_into_cart(cart, order.order_items)
    return {**cart.summary(), "added_lines": added_lines}
