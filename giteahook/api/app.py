"""FastAPI application for receiving Gitea webhooks.

This module provides:
- create_app: application factory wiring settings, verifier and dispatcher
- WebhookError to JSON error response mapping
- /health endpoint
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from giteahook.api.webhooks import DELIVERY_HEADER, create_webhook_router
from giteahook.config import Settings
from giteahook.config import settings as default_settings
from giteahook.webhooks.dispatcher import EventDispatcher, get_event_dispatcher
from giteahook.webhooks.errors import EventNotSubscribedError, WebhookError
from giteahook.webhooks.verifier import WebhookVerifier

logger = structlog.get_logger(__name__)


class ErrorResponse(BaseModel):
    """Body returned when a delivery is rejected."""

    accepted: bool = False
    error: str
    code: str
    details: dict[str, Any] | None = None


def create_app(
    settings: Settings | None = None,
    *,
    verifier: WebhookVerifier | None = None,
    dispatcher: EventDispatcher | None = None,
    title: str = "Gitea Webhook Receiver",
    version: str = "1.0.0",
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings (uses the global settings if not provided).
        verifier: Webhook verifier (built from settings if not provided).
        dispatcher: Event dispatcher (uses the global dispatcher if not provided).
        title: API title.
        version: API version.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or default_settings
    verifier = verifier or WebhookVerifier.from_settings(settings)
    dispatcher = dispatcher or get_event_dispatcher()

    app = FastAPI(title=title, version=version)

    @app.exception_handler(WebhookError)
    async def webhook_error_handler(request: Request, exc: WebhookError) -> JSONResponse:
        log = logger.debug if isinstance(exc, EventNotSubscribedError) else logger.info
        log(
            "webhook_rejected",
            code=exc.code,
            error=exc.message,
            delivery_id=request.headers.get(DELIVERY_HEADER),
        )
        status_code = 200 if settings.WEBHOOK_ACK_ON_FAILURE else exc.status_code
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=exc.message,
                code=exc.code,
                details=exc.details or None,
            ).model_dump(),
        )

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, Any]:
        return {
            "status": "healthy",
            "signing_enabled": verifier.config.signing_enabled,
            "events": list(settings.WEBHOOK_EVENTS),
        }

    app.include_router(create_webhook_router(settings, verifier, dispatcher))

    return app
