"""Verification and decoding of inbound Gitea webhook deliveries.

A WebhookVerifier checks a request in a fixed order and stops at the first
failure:

1. at least one event kind was requested
2. the method is POST
3. the event header is present
4. the event kind is one of the requested kinds
5. the body is readable and not empty
6. the signature matches (only when a secret is configured)
7. the event kind has a payload shape
8. the body decodes into that shape

The request body is drained and closed on every exit path.
"""

import io
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from giteahook.events import GiteaEvent
from giteahook.payloads.events import PAYLOAD_TYPES, Payload
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
)
from giteahook.webhooks.security import EVENT_HEADER, SIGNATURE_HEADER, verify_signature

if TYPE_CHECKING:
    from giteahook.config import Settings

logger = structlog.get_logger(__name__)

_DRAIN_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class WebhookRequest:
    """A raw inbound request as seen by the verifier.

    Attributes:
        method: HTTP method.
        headers: Request headers. Lookups fall back to a case-insensitive match.
        body: Unconsumed body stream. The verifier drains and closes it.
    """

    method: str
    headers: Mapping[str, str]
    body: BinaryIO

    @classmethod
    def from_bytes(
        cls,
        method: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> "WebhookRequest":
        """Build a request around an in-memory body."""
        return cls(method=method, headers=headers, body=io.BytesIO(body))

    def header(self, name: str) -> str:
        """Return a header value, or an empty string if absent."""
        value = self.headers.get(name)
        if value is None:
            lowered = name.lower()
            for key, candidate in self.headers.items():
                if key.lower() == lowered:
                    value = candidate
                    break
        return value or ""


class VerifierConfig(BaseModel):
    """Immutable verifier configuration.

    A verifier without a secret skips signature verification entirely.
    """

    model_config = ConfigDict(frozen=True)

    secret: bytes | None = Field(
        default=None,
        description="Shared secret used to verify delivery signatures",
        repr=False,
    )
    event_header: str = Field(
        default=EVENT_HEADER,
        description="Header carrying the event kind",
    )
    signature_header: str = Field(
        default=SIGNATURE_HEADER,
        description="Header carrying the HMAC-SHA256 hex digest",
    )

    @property
    def signing_enabled(self) -> bool:
        """Whether deliveries must carry a valid signature."""
        return bool(self.secret)


def _event_name(event: GiteaEvent | str) -> str:
    return event.value if isinstance(event, GiteaEvent) else event


class WebhookVerifier:
    """Verifies Gitea webhook requests and decodes their payloads.

    Holds only immutable configuration, so a single instance can serve
    concurrent requests.
    """

    def __init__(self, config: VerifierConfig | None = None) -> None:
        """Initialize the verifier.

        Args:
            config: Verifier configuration (no secret if not provided).
        """
        self._config = config or VerifierConfig()
        self._logger = logger.bind(
            component="webhook_verifier",
            signing_enabled=self._config.signing_enabled,
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "WebhookVerifier":
        """Create a verifier from application settings."""
        return cls(VerifierConfig(secret=settings.GITEA_WEBHOOK_SECRET or None))

    @property
    def config(self) -> VerifierConfig:
        return self._config

    def verify_and_decode(
        self,
        request: WebhookRequest,
        *events: GiteaEvent | str,
    ) -> Payload:
        """Verify a delivery and decode its payload.

        Args:
            request: Inbound request.
            *events: Event kinds the caller wants to receive.

        Returns:
            Payload model matching the delivery's event kind.

        Raises:
            WebhookError: A subclass naming the first check that failed.
        """
        try:
            return self._verify_and_decode(request, events)
        finally:
            self._release_body(request.body)

    def _verify_and_decode(
        self,
        request: WebhookRequest,
        events: Iterable[GiteaEvent | str],
    ) -> Payload:
        subscribed = [_event_name(event) for event in events]
        if not subscribed:
            raise NoEventsToMatchError()

        if request.method.upper() != "POST":
            raise InvalidHTTPMethodError(request.method)

        event_name = request.header(self._config.event_header)
        if not event_name:
            raise MissingEventHeaderError(self._config.event_header)

        if event_name not in subscribed:
            self._logger.debug(
                "webhook_event_not_subscribed",
                event_kind=event_name,
                subscribed=subscribed,
            )
            raise EventNotSubscribedError(event_name)

        body = self._read_body(request.body)

        if self._config.secret:
            self._check_signature(request, body, event_name, self._config.secret)

        return self._decode(event_name, body)

    def _read_body(self, stream: BinaryIO) -> bytes:
        try:
            body = stream.read()
        except Exception as e:
            raise PayloadReadError(
                "error reading payload", details={"error": str(e)}
            ) from e

        if not body:
            raise PayloadReadError("empty payload")
        return body

    def _check_signature(
        self,
        request: WebhookRequest,
        body: bytes,
        event_name: str,
        secret: bytes,
    ) -> None:
        header = self._config.signature_header
        signature = request.header(header)
        if not signature:
            self._logger.warning("webhook_signature_missing", event_kind=event_name)
            raise MissingSignatureHeaderError(header)

        if not verify_signature(body, signature, secret):
            raise SignatureMismatchError(header)

    def _decode(self, event_name: str, body: bytes) -> Payload:
        event = GiteaEvent.lookup(event_name)
        if event is None:
            raise UnknownEventError(event_name)

        payload_type = PAYLOAD_TYPES.get(event)
        if payload_type is None:
            self._logger.info("webhook_event_unimplemented", event_kind=event_name)
            raise UnimplementedEventError(event_name)

        try:
            payload = payload_type.model_validate_json(body)
        except ValidationError as e:
            self._logger.warning(
                "webhook_payload_invalid",
                event_kind=event_name,
                error_count=e.error_count(),
            )
            raise PayloadDecodeError(
                event_name,
                original_error=e,
                details={"error_count": e.error_count()},
            ) from e

        self._logger.info(
            "webhook_payload_decoded",
            event_kind=event_name,
            payload_length=len(body),
        )
        return payload  # type: ignore[return-value]

    def _release_body(self, stream: BinaryIO) -> None:
        """Drain whatever is left of the body and close it.

        Failures here are logged and never replace the verification outcome.
        """
        if getattr(stream, "closed", False):
            return
        try:
            while stream.read(_DRAIN_CHUNK_SIZE):
                pass
        except Exception as e:
            self._logger.debug("webhook_body_drain_failed", error=str(e))

        try:
            stream.close()
        except Exception as e:
            self._logger.debug("webhook_body_close_failed", error=str(e))
