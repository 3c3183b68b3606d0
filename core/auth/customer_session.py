"""
Storefront customer sessions.

Customers are not Supabase Auth users. A browser identifies its customer
either by a ``customer_id`` cookie (set after checkout) or by a
``customer_session`` token issued by the order portal:

    base64(json payload)[.hex hmac-sha256 signature]

Payloads carry ``exp`` in epoch milliseconds and are either
``{"type": "guest", "orderId": ...}`` or
``{"type": "customer", "customerId": ... | "email": ...}``.
"""
import base64
import binascii
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from core.logging import get_logger

logger = get_logger(__name__)

CUSTOMER_ID_COOKIE = "customer_id"
SESSION_TOKEN_COOKIE = "customer_session"

# Portal tokens are short-lived
DEFAULT_TOKEN_TTL_MINUTES = 15

Resolver = Callable[[str], Awaitable[Optional[str]]]


class SessionType(str, Enum):
    CUSTOMER = "customer"
    GUEST = "guest"
    NONE = "none"


@dataclass(frozen=True)
class CustomerSession:
    session_type: SessionType
    customer_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.session_type is not SessionType.NONE and bool(self.customer_id)


NO_SESSION = CustomerSession(SessionType.NONE, None)


@dataclass
class SessionResolvers:
    """Lookups needed to turn token claims into a customer id."""
    get_order_customer_id: Optional[Resolver] = None
    get_customer_id_by_email: Optional[Resolver] = None


def _now_ms() -> int:
    return int(time.time() * 1000)


def _sign(data: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), data.encode("utf-8"), hashlib.sha256).hexdigest()


def sign_session_token(payload: dict, secret: str, expires_in_minutes: int = DEFAULT_TOKEN_TTL_MINUTES) -> str:
    """Issue a signed portal token."""
    data = json.dumps({**payload, "exp": _now_ms() + expires_in_minutes * 60 * 1000})
    encoded = base64.b64encode(data.encode("utf-8")).decode("ascii")
    return f"{encoded}.{_sign(data, secret)}"


def decode_session_token(token: str, secret: Optional[str] = None) -> Optional[dict]:
    """
    Decode a session token, or None if it is malformed, forged or expired.

    With a ``secret`` the token must carry a valid signature; without one,
    unsigned tokens are accepted.
    """
    encoded, _, signature = token.partition(".")
    try:
        data = base64.b64decode(encoded, validate=True).decode("utf-8")
        payload = json.loads(data)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None

    if secret is not None:
        if not signature or not hmac.compare_digest(signature, _sign(data, secret)):
            return None

    if not isinstance(payload, dict):
        return None

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or _now_ms() >= exp:
        return None

    return payload


async def resolve_customer_session(
    customer_id_cookie: Optional[str],
    session_token: Optional[str],
    resolvers: Optional[SessionResolvers] = None,
    secret: Optional[str] = None,
) -> CustomerSession:
    """Work out which customer (if any) the browser belongs to."""
    if customer_id_cookie:
        return CustomerSession(SessionType.CUSTOMER, customer_id_cookie)

    if not session_token:
        return NO_SESSION

    payload = decode_session_token(session_token, secret)
    if payload is None:
        return NO_SESSION

    resolvers = resolvers or SessionResolvers()
    session_type = payload.get("type")

    try:
        if session_type == SessionType.GUEST.value:
            order_id = payload.get("orderId")
            if not order_id or not resolvers.get_order_customer_id:
                return NO_SESSION
            customer_id = await resolvers.get_order_customer_id(order_id)
            return CustomerSession(SessionType.GUEST, customer_id) if customer_id else NO_SESSION

        if session_type == SessionType.CUSTOMER.value:
            if payload.get("customerId"):
                return CustomerSession(SessionType.CUSTOMER, str(payload["customerId"]))
            email = payload.get("email")
            if email and resolvers.get_customer_id_by_email:
                customer_id = await resolvers.get_customer_id_by_email(email)
                return CustomerSession(SessionType.CUSTOMER, customer_id) if customer_id else NO_SESSION
    except Exception as e:
        logger.warning(f"Customer session lookup failed: {e}")
        return NO_SESSION

    return NO_SESSION
