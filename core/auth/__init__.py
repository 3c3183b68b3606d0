"""Authentication package."""
from .customer_session import (
    CUSTOMER_ID_COOKIE,
    SESSION_TOKEN_COOKIE,
    CustomerSession,
    SessionResolvers,
    SessionType,
    decode_session_token,
    resolve_customer_session,
    sign_session_token,
)
from .seller import SellerPrincipal, verify_seller_auth

__all__ = [
    "CUSTOMER_ID_COOKIE",
    "SESSION_TOKEN_COOKIE",
    "CustomerSession",
    "SellerPrincipal",
    "SessionResolvers",
    "SessionType",
    "decode_session_token",
    "resolve_customer_session",
    "sign_session_token",
    "verify_seller_auth",
]
