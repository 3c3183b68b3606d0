"""
Support Domain Service

Customer-to-seller communication from the public storefront:
- Contact / support messages
- Product requests ("can you stock X?")
"""
from dataclasses import dataclass
from typing import Optional

from core.errors import (
    ERROR_INVALID_REQUEST_STATUS,
    ERROR_MESSAGE_SEND_FAILED,
    ERROR_MISSING_CONTACT_FIELDS,
    ERROR_NOT_FOUND,
    ERROR_PRODUCT_NAME_REQUIRED,
    ERROR_REQUEST_FETCH_FAILED,
    ERROR_REQUEST_FIELDS_REQUIRED,
    ERROR_REQUEST_SUBMIT_FAILED,
    ERROR_REQUEST_UPDATE_FAILED,
    ERROR_STORE_NOT_FOUND,
    ERROR_STORE_REQUIRED,
)
from core.logging import get_logger, mask_email_for_logging, sanitize_string_for_logging
from core.outcomes import Outcome

logger = get_logger(__name__)

# Statuses a seller can move a product request to
PRODUCT_REQUEST_STATUSES = ("reviewed", "completed")


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


@dataclass
class ContactMessage:
    """Contact form submission."""
    store_slug: Optional[str]
    name: Optional[str]
    email: Optional[str]
    subject: Optional[str]
    message: Optional[str]
    order_number: Optional[str] = None

    def missing_fields(self) -> list[str]:
        required = {
            "storeSlug": self.store_slug,
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
        }
        return [field for field, value in required.items() if not _clean(value)]


class SupportService:
    """
    Support domain service.

    Every method returns an Outcome; nothing is written unless validation
    passes and the store exists.
    """

    def __init__(self, db):
        self.db = db

    async def submit_contact_message(self, contact: ContactMessage) -> Outcome:
        """Store a contact message for the store owner."""
        missing = contact.missing_fields()
        if missing:
            logger.info(f"Rejected contact message, missing: {', '.join(missing)}")
            return Outcome.validation(ERROR_MISSING_CONTACT_FIELDS)

        store_slug = _clean(contact.store_slug)
        try:
            store = await self.db.stores.get_by_slug(store_slug)
            if not store:
                return Outcome.not_found(ERROR_STORE_NOT_FOUND)

            await self.db.messages.create_customer_message({
                "user_id": store.user_id,
                "customer_name": _clean(contact.name),
                "customer_email": _clean(contact.email),
                "order_number": _clean(contact.order_number) or None,
                "subject": _clean(contact.subject),
                "message": _clean(contact.message),
                "status": "new",
            })
        except Exception as e:
            logger.error(
                f"Error creating customer message for {sanitize_string_for_logging(store_slug)}: {e}",
                exc_info=True,
            )
            return Outcome.internal(ERROR_MESSAGE_SEND_FAILED)

        logger.info(
            f"Contact message from {mask_email_for_logging(contact.email)} "
            f"for {sanitize_string_for_logging(store_slug)}"
        )
        return Outcome.success({"success": True})

    async def submit_product_request(
        self,
        store_slug: Optional[str],
        product_name: Optional[str],
        notes: Optional[str] = None,
    ) -> Outcome:
        """Record a customer's request for a product the store does not carry."""
        name = _clean(product_name)
        if not name:
            return Outcome.validation(ERROR_PRODUCT_NAME_REQUIRED)
        if not _clean(store_slug):
            return Outcome.validation(ERROR_STORE_REQUIRED)

        try:
            store = await self.db.stores.get_by_slug(_clean(store_slug))
            if not store:
                return Outcome.not_found(ERROR_STORE_NOT_FOUND)

            await self.db.messages.create_product_request({
                "user_id": store.user_id,
                "product_name": name,
                "notes": _clean(notes) or None,
            })
        except Exception as e:
            logger.error(f"Error creating product request: {e}", exc_info=True)
            return Outcome.internal(ERROR_REQUEST_SUBMIT_FAILED)

        return Outcome.success({"success": True})

    async def list_product_requests(self, seller_id: str) -> Outcome:
        try:
            requests = await self.db.messages.list_product_requests(seller_id)
        except Exception as e:
            logger.error(f"Error fetching product requests: {e}", exc_info=True)
            return Outcome.internal(ERROR_REQUEST_FETCH_FAILED)
        return Outcome.success({"requests": requests})

    async def update_product_request(
        self,
        seller_id: str,
        request_id: Optional[str],
        status: Optional[str],
    ) -> Outcome:
        if not request_id or not status:
            return Outcome.validation(ERROR_REQUEST_FIELDS_REQUIRED)
        if status not in PRODUCT_REQUEST_STATUSES:
            return Outcome.validation(ERROR_INVALID_REQUEST_STATUS)

        try:
            updated = await self.db.messages.update_product_request_status(request_id, seller_id, status)
        except Exception as e:
            logger.error(f"Error updating product request: {e}", exc_info=True)
            return Outcome.internal(ERROR_REQUEST_UPDATE_FAILED)

        if not updated:
            return Outcome.not_found(ERROR_NOT_FOUND)
        return Outcome.success({"success": True})
