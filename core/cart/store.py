"""
Cart store: in-progress selections for one customer against one storefront.

State lives in memory for the lifetime of the store object and is mirrored to
a CartStorage backend after every change. Nothing here raises to the caller:
a corrupted persisted cart is logged and replaced by an empty one, and a
failed write is logged and the in-memory state is kept.
"""
from dataclasses import replace
from decimal import Decimal
from typing import Dict, List, Mapping, Optional

from core.logging import get_logger
from core.services.models import StockSnapshot
from core.services.money import to_float

from .models import CartLine, dump_lines, load_lines
from .storage import CartStorage

logger = get_logger(__name__)


class CartStore:
    """
    Ordered set of CartLine keyed by product_id.

    Invariant: every stored line has ``0 < quantity <= max_quantity``.
    """

    def __init__(self, storage: CartStorage):
        self.storage = storage
        self._lines: Optional[List[CartLine]] = None

    # ==================== STATE ====================

    def _load(self) -> List[CartLine]:
        if self._lines is None:
            self._lines = self._read_persisted()
        return self._lines

    def _read_persisted(self) -> List[CartLine]:
        try:
            payload = self.storage.load()
            if not payload:
                return []
            return load_lines(payload)
        except (ValueError, KeyError, TypeError, ArithmeticError, RecursionError) as e:
            logger.warning(f"Discarding corrupted cart payload: {e!r}")
            return []

    def _persist(self) -> None:
        try:
            self.storage.save(dump_lines(self._load()))
        except Exception as e:
            logger.error(f"Failed to persist cart: {e}", exc_info=True)

    def _index_of(self, product_id: str) -> Optional[int]:
        for index, line in enumerate(self._load()):
            if line.product_id == product_id:
                return index
        return None

    @property
    def lines(self) -> List[CartLine]:
        """Snapshot of the current lines (copies, safe to mutate)."""
        return [replace(line) for line in self._load()]

    def get(self, product_id: str) -> Optional[CartLine]:
        index = self._index_of(product_id)
        return None if index is None else replace(self._load()[index])

    # ==================== MUTATIONS ====================

    def add_item(self, line: CartLine) -> None:
        """
        Add a selection, merging with an existing line for the same product.

        The incoming ``max_quantity`` is the freshest stock ceiling and replaces
        the stored one; the merged quantity is clamped to it.
        """
        if line.quantity <= 0:
            return

        lines = self._load()
        index = self._index_of(line.product_id)

        if index is not None:
            existing = lines[index]
            new_quantity = min(existing.quantity + line.quantity, line.max_quantity)
            if new_quantity <= 0:
                del lines[index]
            else:
                lines[index] = replace(existing, quantity=new_quantity, max_quantity=line.max_quantity)
        else:
            quantity = min(line.quantity, line.max_quantity)
            if quantity <= 0:
                return
            lines.append(replace(line, quantity=quantity))

        self._persist()

    def remove_item(self, product_id: str) -> None:
        """Remove a line; absent product ids are ignored."""
        index = self._index_of(product_id)
        if index is None:
            return
        del self._load()[index]
        self._persist()

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity, clamped to its stored ceiling; ``<= 0`` removes it."""
        if quantity <= 0:
            self.remove_item(product_id)
            return

        index = self._index_of(product_id)
        if index is None:
            return

        lines = self._load()
        line = lines[index]
        new_quantity = min(quantity, line.max_quantity)
        if new_quantity <= 0:
            del lines[index]
        else:
            lines[index] = replace(line, quantity=new_quantity)
        self._persist()

    def clear_cart(self) -> None:
        self._lines = []
        self._persist()

    def sync_stock(self, snapshots: Mapping[str, StockSnapshot]) -> Dict[str, List[str]]:
        """
        Refresh ceilings and prices from authoritative stock.

        Lines whose product is missing from ``snapshots`` are no longer for
        sale and are dropped. Returns the affected product ids.
        """
        removed: List[str] = []
        adjusted: List[str] = []
        kept: List[CartLine] = []

        for line in self._load():
            snapshot = snapshots.get(line.product_id)
            if snapshot is None:
                removed.append(line.product_id)
                continue

            ceiling = snapshot.available
            quantity = min(line.quantity, ceiling)
            if quantity <= 0:
                removed.append(line.product_id)
                continue
            if quantity != line.quantity or snapshot.price != line.unit_price:
                adjusted.append(line.product_id)

            kept.append(replace(
                line,
                title=snapshot.title or line.title,
                unit_price=snapshot.price,
                image_url=line.image_url or snapshot.image_url,
                quantity=quantity,
                max_quantity=ceiling,
            ))

        changed = kept != self._load()
        self._lines = kept
        if changed:
            self._persist()
        return {"removed": removed, "adjusted": adjusted}

    # ==================== DERIVED ====================

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self._load()), Decimal("0"))

    @property
    def total(self) -> Decimal:
        """Amount due; no tax, discount or shipping layer applies yet."""
        return self.subtotal

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._load())

    @property
    def is_empty(self) -> bool:
        return not self._load()

    def summary(self) -> dict:
        """JSON-ready view of the cart."""
        return {
            "items": [
                {**line.to_dict(), "price": to_float(line.unit_price), "line_total": to_float(line.line_total)}
                for line in self._load()
            ],
            "subtotal": to_float(self.subtotal),
            "total": to_float(self.total),
            "item_count": self.item_count,
        }
