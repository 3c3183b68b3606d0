"""
Store Visit Router

Beacon fired by storefront pages. The page never waits on it or looks at the
result; rate limiting is applied by RateLimitMiddleware.
"""
import secrets

from fastapi import APIRouter, Depends, Request, Response

from core.config import Settings, get_settings
from core.middleware.rate_limit import get_client_ip
from core.services.domains import VisitService

from .deps import get_visit_service, outcome_response

router = APIRouter(prefix="/api", tags=["store-visit"])

VISIT_COOKIE_NAME = "store_visit_sid"


@router.post("/store-visit", status_code=204)
async def record_store_visit(
    request: Request,
    service: VisitService = Depends(get_visit_service),
    settings: Settings = Depends(get_settings),
):
    try:
        body = await request.json()
    except ValueError:
        body = {}
    store_slug = body.get("store_slug") if isinstance(body, dict) else None

    visit_sid = request.cookies.get(VISIT_COOKIE_NAME) or ""
    new_sid = not visit_sid
    if new_sid:
        visit_sid = secrets.token_hex(16)

    outcome = await service.record_visit(store_slug, get_client_ip(request), visit_sid)
    response = Response(status_code=204) if outcome.ok else outcome_response(outcome)

    if new_sid:
        response.set_cookie(
            VISIT_COOKIE_NAME,
            visit_sid,
            max_age=settings.visit_cookie_max_age,
            path="/",
            httponly=True,
            samesite="lax",
            secure=settings.cookie_secure,
        )
    return response
