"""Verification and dispatch of inbound Gitea webhooks.

This module provides:
- WebhookVerifier: method, header, subscription and signature checks, then
  type-directed payload decoding
- WebhookRequest / VerifierConfig: verifier inputs
- EventDispatcher: in-process fan-out of decoded payloads
- HMAC signature helpers
- The WebhookError taxonomy
"""

from giteahook.events import GiteaEvent
from giteahook.webhooks.dispatcher import (
    EventDispatcher,
    get_event_dispatcher,
    set_event_dispatcher,
)
from giteahook.webhooks.errors import (
    EventNotSubscribedError,
    InvalidHTTPMethodError,
    MissingEventHeaderError,
    MissingSignatureHeaderError,
    NoEventsToMatchError,
    PayloadDecodeError,
    PayloadReadError,
    SignatureMismatchError,
    UnimplementedEventError,
    UnknownEventError,
    VerificationError,
    WebhookError,
)
from giteahook.webhooks.security import (
    EVENT_HEADER,
    SIGNATURE_HEADER,
    create_signature_headers,
    generate_signature,
    verify_signature,
)
from giteahook.webhooks.verifier import VerifierConfig, WebhookRequest, WebhookVerifier

__all__ = [
    # Events
    "GiteaEvent",
    # Verifier
    "VerifierConfig",
    "WebhookRequest",
    "WebhookVerifier",
    # Dispatcher
    "EventDispatcher",
    "get_event_dispatcher",
    "set_event_dispatcher",
    # Security
    "EVENT_HEADER",
    "SIGNATURE_HEADER",
    "create_signature_headers",
    "generate_signature",
    "verify_signature",
    # Errors
    "EventNotSubscribedError",
    "InvalidHTTPMethodError",
    "MissingEventHeaderError",
    "MissingSignatureHeaderError",
    "NoEventsToMatchError",
    "PayloadDecodeError",
    "PayloadReadError",
    "SignatureMismatchError",
    "UnimplementedEventError",
    "UnknownEventError",
    "VerificationError",
    "WebhookError",
]
