"""Webhook receiving endpoint.

Hosts the Gitea webhook URL and hands every request to the verifier.
Decoded payloads are passed on to the event dispatcher.
"""

import structlog
from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from giteahook.config import Settings
from giteahook.events import GiteaEvent
from giteahook.webhooks.dispatcher import EventDispatcher
from giteahook.webhooks.verifier import WebhookRequest, WebhookVerifier

logger = structlog.get_logger(__name__)

DELIVERY_HEADER = "X-Gitea-Delivery"

# Every method is routed here so the verifier reports wrong-method requests
# the same way as every other rejection.
ACCEPTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


# ============================================================================
# Response Models
# ============================================================================


class WebhookReceipt(BaseModel):
    """Response for an accepted delivery."""

    accepted: bool = Field(default=True, description="Whether the delivery was accepted")
    event: GiteaEvent = Field(..., description="Event kind of the delivery")
    delivery_id: str | None = Field(
        default=None, description="Delivery identifier sent by Gitea"
    )
    listeners: int = Field(
        default=0, description="Listeners that processed the payload"
    )


# ============================================================================
# Endpoints
# ============================================================================


def create_webhook_router(
    settings: Settings,
    verifier: WebhookVerifier,
    dispatcher: EventDispatcher,
) -> APIRouter:
    """Create the router hosting the webhook endpoint.

    Args:
        settings: Application settings (path and subscribed events).
        verifier: Verifier for inbound requests.
        dispatcher: Dispatcher receiving decoded payloads.

    Returns:
        Router with the webhook endpoint registered.
    """
    router = APIRouter(tags=["Webhooks"])

    @router.api_route(
        settings.WEBHOOK_PATH,
        methods=ACCEPTED_METHODS,
        response_model=WebhookReceipt,
        responses={
            202: {"description": "Event not subscribed"},
            400: {"description": "Malformed delivery"},
            401: {"description": "Signature missing or invalid"},
            405: {"description": "Method not allowed"},
            422: {"description": "Payload could not be decoded"},
            501: {"description": "Event kind not implemented"},
        },
    )
    async def receive_webhook(request: Request) -> WebhookReceipt:
        """Verify a Gitea delivery and dispatch its payload."""
        body = await request.body()
        delivery_id = request.headers.get(DELIVERY_HEADER)

        # Decoding is synchronous and CPU bound
        payload = await run_in_threadpool(
            verifier.verify_and_decode,
            WebhookRequest.from_bytes(request.method, request.headers, body),
            *settings.WEBHOOK_EVENTS,
        )

        delivered = await dispatcher.dispatch(payload)

        logger.info(
            "webhook_received",
            event_kind=payload.event.value,
            delivery_id=delivery_id,
            listeners=delivered,
        )

        return WebhookReceipt(
            event=payload.event,
            delivery_id=delivery_id,
            listeners=delivered,
        )

    return router
