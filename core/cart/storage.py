"""
Cart persistence backends.

A backend stores one opaque string (the serialized cart) for one browsing
context. ``CookieCartStorage`` keeps it on the customer's device, so cart
mutations never wait on network I/O.
"""
import base64
from typing import Mapping, Optional

from fastapi import Response

from core.logging import get_logger

logger = get_logger(__name__)

CART_COOKIE_PREFIX = "cart_"

# Browsers silently drop cookies over 4096 bytes (name + value + attributes)
MAX_COOKIE_VALUE_BYTES = 3800


class CartStorage:
    """Interface for cart persistence."""

    def load(self) -> Optional[str]:
        raise NotImplementedError

    def save(self, payload: str) -> None:
        raise NotImplementedError


class MemoryCartStorage(CartStorage):
    """In-process storage for scripts and tests."""

    def __init__(self, payload: Optional[str] = None):
        self.payload = payload
        self.writes = 0

    def load(self) -> Optional[str]:
        return self.payload

    def save(self, payload: str) -> None:
        self.payload = payload
        self.writes += 1


def cart_cookie_name(store_slug: str) -> str:
    return f"{CART_COOKIE_PREFIX}{store_slug}"


def encode_cookie_value(payload: str) -> str:
    # "=" would force the cookie value to be quoted
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii").rstrip("=")


def decode_cookie_value(value: str) -> str:
    """Raises ValueError (binascii.Error / UnicodeDecodeError) on garbage."""
    padded = value + "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")


class CookieCartStorage(CartStorage):
    """
    Stores the cart in a per-store cookie on the customer's browser.

    Reads come from the incoming request cookies; writes are attached to the
    outgoing response as Set-Cookie.
    """

    def __init__(
        self,
        cookies: Mapping[str, str],
        response: Response,
        store_slug: str,
        max_age: int,
        secure: bool = False,
    ):
        self.cookies = cookies
        self.response = response
        self.name = cart_cookie_name(store_slug)
        self.max_age = max_age
        self.secure = secure

    def load(self) -> Optional[str]:
        value = self.cookies.get(self.name)
        if not value:
            return None
        return decode_cookie_value(value)

    def save(self, payload: str) -> None:
        value = encode_cookie_value(payload)
        if len(value) > MAX_COOKIE_VALUE_BYTES:
            logger.warning(f"Cart cookie {self.name} is {len(value)} bytes, browser may drop it")
        self.response.set_cookie(
            self.name,
            value,
            max_age=self.max_age,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self.secure,
        )
