"""
Tests for contact messages and product requests
"""

from unittest.mock import AsyncMock

import pytest

from core.errors import ERROR_MESSAGE_SEND_FAILED, ERROR_MISSING_CONTACT_FIELDS
from core.outcomes import OutcomeKind
from core.services.domains import ContactMessage, SupportService
from core.services.models import StoreSettings


def contact(**overrides):
    data = {
        "store_slug": "vintage-finds",
        "name": "Ada",
        "email": "ada@example.com",
        "subject": "Shipping",
        "message": "When will my lamp ship?",
        "order_number": None,
    }
    data.update(overrides)
    return ContactMessage(**data)


@pytest.fixture
def store(sample_store):
    return StoreSettings(**sample_store)


class TestContactMessage:
    """Tests for ContactMessage validation."""

    def test_complete_message(self):
        assert contact().missing_fields() == []

    def test_whitespace_counts_as_missing(self):
        assert contact(name="   ").missing_fields() == ["name"]

    def test_order_number_optional(self):
        assert contact(order_number=None).missing_fields() == []


class TestSubmitContactMessage:
    """Tests for SupportService.submit_contact_message."""

    @pytest.mark.asyncio
    async def test_missing_email_rejected_before_insert(self, mock_db):
        outcome = await SupportService(mock_db).submit_contact_message(contact(email=None))

        assert outcome.kind is OutcomeKind.VALIDATION
        assert outcome.error == ERROR_MISSING_CONTACT_FIELDS
        mock_db.stores.get_by_slug.assert_not_called()
        mock_db.messages.create_customer_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_store(self, mock_db):
        outcome = await SupportService(mock_db).submit_contact_message(contact())

        assert outcome.kind is OutcomeKind.NOT_FOUND
        mock_db.messages.create_customer_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_message_stored_for_store_owner(self, mock_db, store):
        mock_db.stores.get_by_slug.return_value = store

        outcome = await SupportService(mock_db).submit_contact_message(
            contact(name="  Ada ", order_number="ORD-1001")
        )

        assert outcome.ok
        assert outcome.data == {"success": True}
        row = mock_db.messages.create_customer_message.call_args.args[0]
        assert row["user_id"] == "seller-1"
        assert row["customer_name"] == "Ada"
        assert row["order_number"] == "ORD-1001"
        assert row["status"] == "new"

    @pytest.mark.asyncio
    async def test_insert_failure_is_internal(self, mock_db, store):
        mock_db.stores.get_by_slug.return_value = store
        mock_db.messages.create_customer_message = AsyncMock(side_effect=RuntimeError("insert failed"))

        outcome = await SupportService(mock_db).submit_contact_message(contact())

        assert outcome.kind is OutcomeKind.INTERNAL
        assert outcome.error == ERROR_MESSAGE_SEND_FAILED


class TestProductRequests:
    """Tests for customer product requests."""

    @pytest.mark.asyncio
    async def test_product_name_required(self, mock_db):
        outcome = await SupportService(mock_db).submit_product_request("vintage-finds", " ")
        assert outcome.status_code == 400
        mock_db.messages.create_product_request.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_required(self, mock_db):
        outcome = await SupportService(mock_db).submit_product_request(None, "Teak chair")
        assert outcome.status_code == 400

    @pytest.mark.asyncio
    async def test_request_created(self, mock_db, store):
        mock_db.stores.get_by_slug.return_value = store

        outcome = await SupportService(mock_db).submit_product_request("vintage-finds", "Teak chair", "")

        assert outcome.ok
        row = mock_db.messages.create_product_request.call_args.args[0]
        assert row == {"user_id": "seller-1", "product_name": "Teak chair", "notes": None}

    @pytest.mark.asyncio
    async def test_list_requests(self, mock_db):
        mock_db.messages.list_product_requests.return_value = [{"id": "req-1"}]

        outcome = await SupportService(mock_db).list_product_requests("seller-1")

        assert outcome.data == {"requests": [{"id": "req-1"}]}
        mock_db.messages.list_product_requests.assert_awaited_once_with("seller-1")

    @pytest.mark.asyncio
    async def test_invalid_request_status(self, mock_db):
        outcome = await SupportService(mock_db).update_product_request("seller-1", "req-1", "archived")

        assert outcome.kind is OutcomeKind.VALIDATION
        mock_db.messages.update_product_request_status.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_foreign_request_not_found(self, mock_db):
        outcome = await SupportService(mock_db).update_product_request("seller-2", "req-1", "reviewed")
        assert outcome.kind is OutcomeKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_update_request(self, mock_db):
        mock_db.messages.update_product_request_status.return_value = [{"id": "req-1", "status": "completed"}]

        outcome = await SupportService(mock_db).update_product_request("seller-1", "req-1", "completed")

        assert outcome.ok
        mock_db.messages.update_product_request_status.assert_awaited_once_with("req-1", "seller-1", "completed")
