"""
Tests for the storefront cart store
"""

import json
from decimal import Decimal
from unittest.mock import Mock

import pytest

from core.cart import (
    CartLine,
    CartStore,
    CookieCartStorage,
    MemoryCartStorage,
    dump_lines,
    load_lines,
)
from core.cart.storage import cart_cookie_name, decode_cookie_value, encode_cookie_value
from core.services.models import StockSnapshot


def make_line(product_id="prod-a", quantity=1, max_quantity=5, price="10.00", title=None):
    return CartLine(
        product_id=product_id,
        title=title or f"Product {product_id}",
        unit_price=Decimal(price),
        quantity=quantity,
        max_quantity=max_quantity,
    )


@pytest.fixture
def storage():
    return MemoryCartStorage()


@pytest.fixture
def cart(storage):
    return CartStore(storage)


def assert_invariants(cart):
    ids = [line.product_id for line in cart.lines]
    assert len(ids) == len(set(ids))
    for line in cart.lines:
        assert 0 < line.quantity <= line.max_quantity


class TestCartLine:
    """Tests for CartLine dataclass."""

    def test_price_coerced_to_decimal(self):
        line = CartLine(product_id="p", title="T", unit_price=19.99, quantity=1, max_quantity=1)
        assert line.unit_price == Decimal("19.99")

    def test_line_total(self):
        line = make_line(quantity=3, price="0.10")
        assert line.line_total == Decimal("0.30")

    def test_to_dict_uses_price_key(self):
        data = make_line(price="4.50").to_dict()
        assert data["price"] == "4.50"
        assert "unit_price" not in data

    def test_from_dict_requires_max_quantity(self):
        with pytest.raises(KeyError):
            CartLine.from_dict({"product_id": "p", "price": "1", "quantity": 1})


class TestAddItem:
    """Tests for merging selections."""

    def test_add_new_line_appends(self, cart):
        cart.add_item(make_line("a"))
        cart.add_item(make_line("b"))

        assert [line.product_id for line in cart.lines] == ["a", "b"]

    def test_add_same_product_merges_with_ceiling(self, cart):
        cart.add_item(make_line("a", quantity=3, max_quantity=4))
        cart.add_item(make_line("a", quantity=3, max_quantity=4))

        assert len(cart.lines) == 1
        assert cart.get("a").quantity == 4  # min(3 + 3, 4)

    def test_merge_below_ceiling_sums(self, cart):
        cart.add_item(make_line("a", quantity=1, max_quantity=10))
        cart.add_item(make_line("a", quantity=2, max_quantity=10))

        assert cart.get("a").quantity == 3

    def test_incoming_ceiling_overwrites_stored(self, cart):
        cart.add_item(make_line("a", quantity=4, max_quantity=10))
        cart.add_item(make_line("a", quantity=1, max_quantity=2))

        line = cart.get("a")
        assert line.max_quantity == 2
        assert line.quantity == 2

    def test_merge_into_zero_ceiling_removes_line(self, cart):
        cart.add_item(make_line("a", quantity=2, max_quantity=5))
        cart.add_item(make_line("a", quantity=1, max_quantity=0))

        assert cart.get("a") is None

    def test_new_line_clamped_to_ceiling(self, cart):
        cart.add_item(make_line("a", quantity=9, max_quantity=3))
        assert cart.get("a").quantity == 3

    def test_out_of_stock_line_not_stored(self, cart, storage):
        cart.add_item(make_line("a", quantity=1, max_quantity=0))

        assert cart.is_empty
        assert storage.writes == 0

    def test_non_positive_quantity_ignored(self, cart, storage):
        cart.add_item(make_line("a", quantity=0))
        assert cart.is_empty
        assert storage.writes == 0

    def test_invariants_hold_for_mixed_sequence(self, cart):
        cart.add_item(make_line("a", quantity=2, max_quantity=3))
        cart.add_item(make_line("b", quantity=5, max_quantity=1))
        cart.update_quantity("a", 99)
        cart.add_item(make_line("a", quantity=4, max_quantity=2))
        cart.update_quantity("b", 0)
        cart.add_item(make_line("c", quantity=1, max_quantity=1))
        cart.update_quantity("c", -3)

        assert_invariants(cart)
        assert [line.product_id for line in cart.lines] == ["a"]


class TestRemoveAndUpdate:
    """Tests for removal and quantity changes."""

    def test_remove_item(self, cart):
        cart.add_item(make_line("a"))
        cart.remove_item("a")
        assert cart.is_empty

    def test_remove_absent_is_noop(self, cart, storage):
        cart.add_item(make_line("a"))
        writes = storage.writes
        before = cart.lines

        cart.remove_item("missing")

        assert cart.lines == before
        assert storage.writes == writes

    def test_update_quantity_clamps_to_stored_max(self, cart):
        cart.add_item(make_line("a", quantity=1, max_quantity=3))
        cart.update_quantity("a", 10)
        assert cart.get("a").quantity == 3

    def test_update_quantity_preserves_position(self, cart):
        for pid in ("a", "b", "c"):
            cart.add_item(make_line(pid))
        cart.update_quantity("b", 2)

        assert [line.product_id for line in cart.lines] == ["a", "b", "c"]
        assert cart.get("b").quantity == 2

    def test_update_quantity_zero_removes(self, cart):
        cart.add_item(make_line("a"))
        cart.update_quantity("a", 0)
        assert cart.get("a") is None

    def test_update_absent_is_noop(self, cart, storage):
        cart.update_quantity("missing", 3)
        assert cart.is_empty
        assert storage.writes == 0

    def test_clear_cart(self, cart, storage):
        cart.add_item(make_line("a"))
        cart.add_item(make_line("b"))
        cart.clear_cart()

        assert cart.is_empty
        assert json.loads(storage.payload) == []


class TestDerivedValues:
    """Tests for subtotal, total and item count."""

    def test_empty_cart(self, cart):
        assert cart.subtotal == Decimal("0")
        assert cart.total == Decimal("0")
        assert cart.item_count == 0

    def test_subtotal_and_count(self, cart):
        cart.add_item(make_line("a", quantity=2, price="10.00"))
        cart.add_item(make_line("b", quantity=1, price="5.55"))

        assert cart.subtotal == Decimal("25.55")
        assert cart.item_count == 3

    def test_total_equals_subtotal(self, cart):
        cart.add_item(make_line("a", quantity=3, price="0.10"))
        assert cart.total == cart.subtotal == Decimal("0.30")

    def test_summary(self, cart):
        cart.add_item(make_line("a", quantity=2, price="12.50"))
        summary = cart.summary()

        assert summary["item_count"] == 2
        assert summary["subtotal"] == 25.0
        assert summary["total"] == 25.0
        assert summary["items"][0]["price"] == 12.5
        assert summary["items"][0]["line_total"] == 25.0


class TestPersistence:
    """Tests for the persisted cart format."""

    def test_every_mutation_persists(self, cart, storage):
        cart.add_item(make_line("a"))
        cart.update_quantity("a", 2)
        cart.remove_item("a")
        assert storage.writes == 3

    def test_round_trip(self):
        lines = [
            make_line("A", quantity=2, max_quantity=5, price="3.99"),
            make_line("B", quantity=1, max_quantity=1, price="120.00"),
        ]
        assert load_lines(dump_lines(lines)) == lines

    def test_store_reloads_persisted_state(self, storage):
        first = CartStore(storage)
        first.add_item(make_line("A", quantity=2, max_quantity=5))
        first.add_item(make_line("B", quantity=1, max_quantity=1))

        second = CartStore(MemoryCartStorage(storage.payload))
        assert second.lines == first.lines

    def test_loads_once(self):
        storage = Mock()
        storage.load.return_value = dump_lines([make_line("a")])
        cart = CartStore(storage)

        cart.lines
        cart.subtotal
        cart.add_item(make_line("b"))

        storage.load.assert_called_once()

    @pytest.mark.parametrize("payload", [
        "not json",
        "{\"product_id\": \"a\"}",
        "[{\"product_id\": \"a\"}]",
        "[1, 2, 3]",
        "[{\"product_id\": \"a\", \"price\": \"1\", \"quantity\": \"x\", \"max_quantity\": 1}]",
        "[{\"product_id\": \"a\", \"price\": \"Infinity\", \"quantity\": 1, \"max_quantity\": 1}]",
        "[{\"product_id\": \"a\", \"price\": \"NaN\", \"quantity\": 1, \"max_quantity\": 1}]",
        "[{\"product_id\": \"a\", \"price\": \"-5\", \"quantity\": 1, \"max_quantity\": 1}]",
        "[{\"product_id\": \"a\", \"price\": \"1e400\", \"quantity\": 1, \"max_quantity\": 1}]",
        "[{\"product_id\": \"a\", \"price\": \"1\", \"quantity\": 1e400, \"max_quantity\": 1}]",
        "[{\"product_id\": \"a\", \"price\": \"1\", \"quantity\": 1, \"max_quantity\": Infinity}]",
        "[{\"product_id\": \"a\", \"price\": \"1\", \"quantity\": true, \"max_quantity\": 1}]",
    ])
    def test_corrupt_payload_yields_empty_cart(self, payload):
        cart = CartStore(MemoryCartStorage(payload))

        assert cart.is_empty
        assert cart.summary()["items"] == []

    def test_deeply_nested_payload_yields_empty_cart(self):
        cart = CartStore(MemoryCartStorage("[" * 100000 + "]" * 100000))

        assert cart.summary()["items"] == []

    def test_corrupt_payload_replaced_on_next_write(self):
        storage = MemoryCartStorage("garbage")
        cart = CartStore(storage)
        cart.add_item(make_line("a"))

        assert [row["product_id"] for row in json.loads(storage.payload)] == ["a"]

    def test_load_drops_rows_breaking_invariants(self):
        payload = json.dumps([
            {"product_id": "a", "title": "A", "price": "1", "quantity": 3, "max_quantity": 2},
            {"product_id": "a", "title": "A", "price": "1", "quantity": 1, "max_quantity": 2},
            {"product_id": "b", "title": "B", "price": "1", "quantity": 0, "max_quantity": 2},
        ])
        lines = load_lines(payload)

        assert len(lines) == 1
        assert lines[0].quantity == 2

    def test_write_failure_keeps_memory_state(self):
        storage = Mock()
        storage.load.return_value = None
        storage.save.side_effect = RuntimeError("disk full")
        cart = CartStore(storage)

        cart.add_item(make_line("a"))

        assert cart.get("a") is not None


class TestSyncStock:
    """Tests for refreshing ceilings from stock snapshots."""

    def snapshot(self, product_id, quantity, price="10.00"):
        return StockSnapshot(product_id=product_id, title=f"Product {product_id}", price=price, quantity_on_hand=quantity)

    def test_sync_adjusts_and_removes(self, cart):
        cart.add_item(make_line("a", quantity=4, max_quantity=5))
        cart.add_item(make_line("b", quantity=1, max_quantity=5))
        cart.add_item(make_line("c", quantity=1, max_quantity=5))

        report = cart.sync_stock({
            "a": self.snapshot("a", 2),
            "b": self.snapshot("b", 0),
        })

        assert report == {"removed": ["b", "c"], "adjusted": ["a"]}
        assert cart.get("a").quantity == 2
        assert cart.get("a").max_quantity == 2
        assert_invariants(cart)

    def test_sync_updates_price(self, cart):
        cart.add_item(make_line("a", price="10.00"))
        report = cart.sync_stock({"a": self.snapshot("a", 5, price="12.00")})

        assert report["adjusted"] == ["a"]
        assert cart.get("a").unit_price == Decimal("12.00")

    def test_sync_without_changes_does_not_write(self, cart, storage):
        cart.add_item(make_line("a", quantity=1, max_quantity=5))
        writes = storage.writes

        report = cart.sync_stock({"a": self.snapshot("a", 5)})

        assert report == {"removed": [], "adjusted": []}
        assert storage.writes == writes


class TestCookieCartStorage:
    """Tests for the per-store cookie backend."""

    def test_cookie_name_is_per_store(self):
        assert cart_cookie_name("vintage-finds") == "cart_vintage-finds"

    def test_save_sets_cookie(self):
        response = Mock()
        storage = CookieCartStorage({}, response, "vintage-finds", max_age=60)

        storage.save("[]")

        response.set_cookie.assert_called_once()
        args, kwargs = response.set_cookie.call_args
        assert args[0] == "cart_vintage-finds"
        assert decode_cookie_value(args[1]) == "[]"
        assert kwargs["httponly"] is True
        assert kwargs["max_age"] == 60

    def test_load_reads_request_cookie(self):
        payload = dump_lines([make_line("a")])
        cookies = {"cart_vintage-finds": encode_cookie_value(payload)}
        storage = CookieCartStorage(cookies, Mock(), "vintage-finds", max_age=60)

        assert storage.load() == payload

    def test_other_store_cookie_ignored(self):
        cookies = {"cart_other-store": encode_cookie_value("[]")}
        storage = CookieCartStorage(cookies, Mock(), "vintage-finds", max_age=60)

        assert storage.load() is None

    def test_garbage_cookie_yields_empty_cart(self):
        cookies = {"cart_vintage-finds": "%%%not-base64%%%"}
        cart = CartStore(CookieCartStorage(cookies, Mock(), "vintage-finds", max_age=60))

        assert cart.is_empty
