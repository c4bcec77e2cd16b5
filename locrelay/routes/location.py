"""
Location endpoints - the token-gated sharing page and the intake API.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from locrelay.core.settings import settings
from locrelay.services.location_intake import LocationIntakeHandler
from locrelay.services.notifications import NotificationSender, get_notification_sender
from locrelay.services.page_renderer import render_location_page
from locrelay.services.token_registry import TokenRegistry, get_token_registry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Location"])

INVALID_LINK_MESSAGE = "Link inválido."


def get_intake_handler(
    registry: TokenRegistry = Depends(get_token_registry),
    sender: NotificationSender = Depends(get_notification_sender),
) -> LocationIntakeHandler:
    return LocationIntakeHandler(registry=registry, sender=sender, config=settings)


@router.get("/loc/{token}")
async def location_page(token: str, registry: TokenRegistry = Depends(get_token_registry)):
    """
    Serve the location sharing page.

    Unknown tokens get a plain-text 404 so the link reveals nothing.
    """
    if not registry.is_valid(token):
        return PlainTextResponse(INVALID_LINK_MESSAGE, status_code=status.HTTP_404_NOT_FOUND)
    return HTMLResponse(render_location_page(token))


@router.post("/api/location")
async def submit_location(request: Request, handler: LocationIntakeHandler = Depends(get_intake_handler)):
    """
    Accept a location submission and relay it by email.

    Body: {token, lat, lon, acc?, ts?}

    Returns:
        200 {ok: true}, 403 invalid_token, 400 bad_coords or 500 email_failed
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("POST /api/location - body is not valid JSON")
        payload = {}

    result = await handler.handle(payload)
    return JSONResponse(status_code=result.status_code, content=result.body)
