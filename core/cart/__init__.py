"""Cart package: line model, persistence backends, store and reorder."""
from .models import CartLine, dump_lines, load_lines
from .reorder import compose_reorder_line, compose_reorder_lines, reorder_into_cart
from .storage import CartStorage, CookieCartStorage, MemoryCartStorage
from .store import CartStore

__all__ = [
    "CartLine",
    "CartStore",
    "CartStorage",
    "CookieCartStorage",
    "MemoryCartStorage",
    "compose_reorder_line",
    "compose_reorder_lines",
    "dump_lines",
    "load_lines",
    "reorder_into_cart",
]
