"""Cart models with Decimal-based pricing."""
import json
from dataclasses import dataclass
from decimal import Decimal
from typing import List

from core.services.money import multiply, round_money, to_decimal


def _strict_int(value) -> int:
    # bool is an int subclass; floats cover 1e400 and Infinity
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer quantity, got {value!r}")
    return value


@dataclass
class CartLine:
    """Single product selection in a storefront cart."""
    product_id: str
    title: str
    unit_price: Decimal
    quantity: int
    image_url: str = ""
    max_quantity: int = 0  # stock ceiling at last sync

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)
        self.quantity = int(self.quantity)
        self.max_quantity = max(int(self.max_quantity), 0)

    @property
    def line_total(self) -> Decimal:
        """Price for all units of this line."""
        return round_money(multiply(self.unit_price, self.quantity))

    def to_dict(self) -> dict:
        """Persisted form; the price key is ``price``."""
        return {
            "product_id": self.product_id,
            "title": self.title,
            "price": str(self.unit_price),
            "quantity": self.quantity,
            "image_url": self.image_url,
            "max_quantity": self.max_quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        """
        Build a line from its persisted form.

        The payload comes back from the customer's device, so prices must be
        finite and non-negative and both quantities must be JSON integers.
        """
        price = Decimal(str(data["price"]))
        if not price.is_finite() or price < 0:
            raise ValueError(f"invalid cart price: {data['price']!r}")
        return cls(
            product_id=str(data["product_id"]),
            title=data.get("title") or "",
            unit_price=price,
            quantity=_strict_int(data["quantity"]),
            image_url=data.get("image_url") or "",
            max_quantity=_strict_int(data["max_quantity"]),
        )


def dump_lines(lines: List[CartLine]) -> str:
    """Serialize cart lines to the JSON array stored on the customer's device."""
    return json.dumps([line.to_dict() for line in lines], separators=(",", ":"))


def load_lines(payload: str) -> List[CartLine]:
    """
    Parse a persisted cart.

    Raises ValueError (JSONDecodeError included), KeyError, TypeError or
    ArithmeticError on a malformed payload; CartStore absorbs those.
    """
    data = json.loads(payload)
    if not isinstance(data, list):
        raise TypeError(f"cart payload must be a list, got {type(data).__name__}")
    lines: List[CartLine] = []
    seen = set()
    for raw in data:
        line = CartLine.from_dict(raw)
        # Drop rows that would break the per-cart invariants
        if line.product_id in seen or line.quantity <= 0:
            continue
        line.quantity = min(line.quantity, line.max_quantity)
        if line.quantity <= 0:
            continue
        seen.add(line.product_id)
        lines.append(line)
    # Totals must fit the money context or every later summary would raise
    round_money(sum((line.line_total for line in lines), Decimal("0")))
    return lines
