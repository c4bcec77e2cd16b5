"""
Location Relay - FastAPI Application Entry Point

Serves a token-gated page that asks the browser for its location and
relays the coordinates it posts back as a notification email.

DESIGN PRINCIPLES:
- Submitted locations are never stored; the log line and the email are the record
- Token and coordinate checks happen before any outbound call
- Clients only ever see short error codes, never provider output
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from locrelay.core.errors import ConfigurationMissing, LocationRelayError
from locrelay.core.logging_config import configure_logging
from locrelay.core.settings import settings
from locrelay.routes import health, location

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Token-gated location capture relayed by email",
    debug=settings.DEBUG
)


@app.exception_handler(ConfigurationMissing)
async def configuration_missing_handler(request: Request, exc: ConfigurationMissing):
    """A required setting was reached at request time."""
    logger.critical(f"{exc} ({request.method} {request.url.path})")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "error": exc.error_code}
    )


@app.exception_handler(LocationRelayError)
async def location_relay_error_handler(request: Request, exc: LocationRelayError):
    """Authorization and validation failures -> {ok: false, error: <code>}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": exc.error_code}
    )


# Global exception handler to catch ALL exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unhandled exceptions with full traceback; answer with a generic 500."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "error": "server_error"}
    )


# Application lifecycle events
@app.on_event("startup")
async def startup_event():
    """
    Refuse to start without the required email settings.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    missing = settings.missing_required()
    if missing:
        logger.critical(f"Missing required settings: {', '.join(missing)}")
        raise ConfigurationMissing(missing[0])


@app.on_event("shutdown")
async def shutdown_event():
    """
    Cleanup on application shutdown.
    """
    logger.info(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(location.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
