"""Seller authentication via Supabase Auth access tokens."""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException

from core.errors import ERROR_UNAUTHORIZED
from core.logging import get_logger
from core.services.database import Database, get_db

logger = get_logger(__name__)


@dataclass(frozen=True)
class SellerPrincipal:
    """Authenticated store owner."""
    id: str
    email: Optional[str] = None


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) == 2 and parts[0].lower() == "bearer" and parts[1]:
        return parts[1]
    return None


async def verify_seller_auth(
    authorization: str = Header(None, alias="Authorization"),
    db: Database = Depends(get_db),
) -> SellerPrincipal:
    """
    Resolve the seller behind ``Authorization: Bearer <access_token>``.

    Any failure (missing header, expired or forged token, auth outage) is a
    401; no resource identity is involved yet.
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)

    try:
        response = await db.client.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Seller token rejected: {e}")
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)

    user = getattr(response, "user", None)
    if not user:
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)

    return SellerPrincipal(id=str(user.id), email=getattr(user, "email", None))
