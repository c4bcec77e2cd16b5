"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from locrelay.core.settings import settings
from datetime import datetime, timezone


router = APIRouter(tags=["Health"])


@router.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness probe. Always 200 "OK"."""
    return "OK"


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
