"""
Order Fulfillment Status Service

Seller-initiated fulfillment changes on placed orders:
pending -> shipped -> delivered, with fulfilled as a terminal shortcut.

Every write is scoped to the requesting seller. An order owned by someone
else is reported exactly like a missing one, so order ids never leak across
stores.
"""
from datetime import datetime, timezone
from typing import Optional

from core.errors import (
    ERROR_INVALID_FULFILLMENT_STATUS,
    ERROR_ORDER_ID_REQUIRED,
    ERROR_ORDER_NOT_FOUND,
    ERROR_ORDER_STATUS_REQUIRED,
    ERROR_STATUS_UPDATE_FAILED,
    ERROR_TRACKING_UPDATE_FAILED,
)
from core.logging import get_logger, sanitize_id_for_logging
from core.outcomes import Outcome
from core.services.database import Database
from core.services.models import FULFILLMENT_STATUSES

logger = get_logger(__name__)

# Statuses that mean the parcel has left the seller
SHIPPED_STATUSES = ("shipped", "delivered", "fulfilled")
# Statuses that mean the parcel has arrived
DELIVERED_STATUSES = ("delivered", "fulfilled")

# Used only when forward-only enforcement is switched on
FULFILLMENT_TRANSITIONS = {
    "pending": ["shipped", "delivered", "fulfilled"],
    "shipped": ["delivered", "fulfilled"],
    "delivered": ["fulfilled"],
    "fulfilled": [],  # Final state
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_status_update(fulfillment_status: str, now: Optional[datetime] = None) -> dict:
    """
    Row changes for moving an order to ``fulfillment_status``.

    ``shipped_at`` is re-stamped on every shipped/delivered/fulfilled write,
    ``delivered_at`` on every delivered/fulfilled write.
    """
    stamp = (now or _utcnow()).isoformat()
    update_data = {"fulfillment_status": fulfillment_status}

    if fulfillment_status in SHIPPED_STATUSES:
        update_data["shipped_at"] = stamp
    if fulfillment_status in DELIVERED_STATUSES:
        update_data["delivered_at"] = stamp

    return update_data


def can_transition(current_status: Optional[str], target_status: str) -> tuple[bool, Optional[str]]:
    """
    Check a forward-only move.

    Returns:
        (can_transition, reason_if_not)
    """
    current = (current_status or "pending").lower()
    allowed = FULFILLMENT_TRANSITIONS.get(current, [])
    if target_status not in allowed:
        return False, f"Cannot transition from '{current}' to '{target_status}'. Allowed: {allowed}"
    return True, None


class OrderStatusService:
    """Fulfillment status and tracking updates for seller-owned orders."""

    def __init__(self, db: Database, enforce_forward: bool = False):
        self.db = db
        self.enforce_forward = enforce_forward

    async def update_fulfillment_status(
        self,
        seller_id: str,
        order_id: Optional[str],
        fulfillment_status: Optional[str],
    ) -> Outcome:
        """
        Move an order to a new fulfillment status.

        Validation happens before any storage access. With ``enforce_forward``
        off (the default) any of the four statuses may be written, including
        moving a fulfilled order back to pending.
        """
        if not order_id or not fulfillment_status:
            return Outcome.validation(ERROR_ORDER_STATUS_REQUIRED)

        if fulfillment_status not in FULFILLMENT_STATUSES:
            return Outcome.validation(ERROR_INVALID_FULFILLMENT_STATUS)

        safe_order_id = sanitize_id_for_logging(order_id)

        try:
            order = await self.db.orders.get_owned(order_id, seller_id, columns="id, user_id, fulfillment_status")
        except Exception as e:
            logger.error(f"Failed to load order {safe_order_id}: {e}", exc_info=True)
            return Outcome.internal(ERROR_STATUS_UPDATE_FAILED)

        if not order:
            return Outcome.not_found(ERROR_ORDER_NOT_FOUND)

        if self.enforce_forward:
            allowed, reason = can_transition(order.get("fulfillment_status"), fulfillment_status)
            if not allowed:
                logger.warning(f"Rejected status change for order {safe_order_id}: {reason}")
                return Outcome.validation(reason)

        update_data = build_status_update(fulfillment_status)

        try:
            updated = await self.db.orders.update(order_id, seller_id, update_data)
        except Exception as e:
            logger.error(f"Error updating order status for {safe_order_id}: {e}", exc_info=True)
            return Outcome.internal(ERROR_STATUS_UPDATE_FAILED)

        if not updated:
            # Row vanished or changed owner between ownership check and write
            logger.warning(f"No rows updated for order {safe_order_id}")
            return Outcome.not_found(ERROR_ORDER_NOT_FOUND)

        logger.info(f"Order {safe_order_id} fulfillment status -> {fulfillment_status}")
        return Outcome.success({"order": updated})

    async def update_tracking(
        self,
        seller_id: str,
        order_id: Optional[str],
        tracking_number: Optional[str] = None,
        tracking_carrier: Optional[str] = None,
        tracking_url: Optional[str] = None,
    ) -> Outcome:
        """
        Set shipment tracking details.

        Adding a tracking number to an order that has not shipped yet marks it
        shipped.
        """
        if not order_id:
            return Outcome.validation(ERROR_ORDER_ID_REQUIRED)

        safe_order_id = sanitize_id_for_logging(order_id)

        try:
            order = await self.db.orders.get_owned(
                order_id,
                seller_id,
                columns="id, user_id, order_number, fulfillment_status, tracking_number",
            )
        except Exception as e:
            logger.error(f"Failed to load order {safe_order_id}: {e}", exc_info=True)
            return Outcome.internal(ERROR_TRACKING_UPDATE_FAILED)

        if not order:
            return Outcome.not_found(ERROR_ORDER_NOT_FOUND)

        update_data = {
            "tracking_number": tracking_number or None,
            "tracking_carrier": tracking_carrier or None,
            "tracking_url": tracking_url or None,
        }

        current_status = order.get("fulfillment_status")
        if tracking_number and (not current_status or current_status == "pending"):
            update_data.update(build_status_update("shipped"))

        try:
            updated = await self.db.orders.update(order_id, seller_id, update_data)
        except Exception as e:
            logger.error(f"Error updating tracking for {safe_order_id}: {e}", exc_info=True)
            return Outcome.internal(ERROR_TRACKING_UPDATE_FAILED)

        if not updated:
            return Outcome.not_found(ERROR_ORDER_NOT_FOUND)

        first_tracking = bool(tracking_number) and not order.get("tracking_number")
        return Outcome.success({"order": updated, "first_tracking": first_tracking})
