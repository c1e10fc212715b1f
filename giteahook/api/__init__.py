"""HTTP surface for the Gitea webhook receiver."""

from giteahook.api.app import ErrorResponse, create_app
from giteahook.api.webhooks import WebhookReceipt, create_webhook_router

__all__ = [
    "ErrorResponse",
    "WebhookReceipt",
    "create_app",
    "create_webhook_router",
]
