"""Errors raised while verifying and decoding webhook deliveries.

Every failure step of verification has its own exception type so callers can
react to each case without parsing messages.

Exception Hierarchy:
    WebhookError (base)
    ├── NoEventsToMatchError - caller passed no subscribed events
    ├── InvalidHTTPMethodError - request is not a POST
    ├── MissingEventHeaderError - no X-Gitea-Event header
    ├── EventNotSubscribedError - event kind not in the subscription set
    ├── PayloadReadError - body empty or unreadable
    ├── VerificationError - signature problems
    │   ├── MissingSignatureHeaderError
    │   └── SignatureMismatchError
    ├── UnimplementedEventError - known event kind without a payload shape
    ├── UnknownEventError - event kind Gitea does not define
    └── PayloadDecodeError - body does not decode into the payload shape
"""

from typing import Any, ClassVar


class WebhookError(Exception):
    """Base exception for webhook verification failures.

    Attributes:
        message: Human-readable error message.
        details: Additional error details.
        code: Stable identifier of the failure kind.
        status_code: HTTP status suggested for the response.
    """

    code: ClassVar[str] = "webhook_error"
    status_code: ClassVar[int] = 400

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/API responses."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class NoEventsToMatchError(WebhookError):
    """No event kinds were given to match the delivery against."""

    code = "no_events_to_match"
    status_code = 500

    def __init__(self, message: str = "no event specified to parse", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class InvalidHTTPMethodError(WebhookError):
    """The delivery was not sent with POST.

    Attributes:
        method: The method that was used.
    """

    code = "invalid_http_method"
    status_code = 405

    def __init__(self, method: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"invalid HTTP method: {method}", details=details)
        self.method = method

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        base = super().to_dict()
        base.update({"method": self.method})
        return base


class MissingEventHeaderError(WebhookError):
    code = "missing_event_header"

    def __init__(self, header: str = "X-Gitea-Event", **kwargs: Any) -> None:
        super().__init__(f"missing {header} header", **kwargs)
        self.header = header


class EventNotSubscribedError(WebhookError):
    """The event kind is valid but the caller did not ask for it.

    This is an expected outcome for receivers that only handle a subset of
    the events a hook sends.
    """

    code = "event_not_subscribed"
    status_code = 202

    def __init__(self, event: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"event not defined to be parsed: {event}", details=details)
        self.event = event

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        base = super().to_dict()
        base.update({"event": self.event})
        return base


class PayloadReadError(WebhookError):
    """The request body was empty or could not be read."""

    code = "payload_read_failed"

    def __init__(self, message: str = "error reading payload", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class VerificationError(WebhookError):
    """The delivery could not be authenticated.

    Never retried and never treated as an unsigned delivery.
    """

    code = "verification_failed"
    status_code = 401


class MissingSignatureHeaderError(VerificationError):
    code = "missing_signature_header"

    def __init__(self, header: str = "X-Gitea-Signature", **kwargs: Any) -> None:
        super().__init__(f"missing {header} header", **kwargs)
        self.header = header


class SignatureMismatchError(VerificationError):
    code = "signature_mismatch"

    def __init__(self, header: str = "X-Gitea-Signature", **kwargs: Any) -> None:
        super().__init__(f"{header} is invalid", **kwargs)
        self.header = header


class UnimplementedEventError(WebhookError):
    """The event kind is known but has no payload shape to decode into."""

    code = "unimplemented_event"
    status_code = 501

    def __init__(self, event: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"unimplemented event {event}", details=details)
        self.event = event

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        base = super().to_dict()
        base.update({"event": self.event})
        return base


class UnknownEventError(WebhookError):
    """The event kind is not one Gitea defines."""

    code = "unknown_event"

    def __init__(self, event: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"unknown event {event}", details=details)
        self.event = event

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        base = super().to_dict()
        base.update({"event": self.event})
        return base


class PayloadDecodeError(WebhookError):
    """A verified body did not decode into its payload shape.

    Distinct from verification failures: the sender is authentic but the
    content is malformed.

    Attributes:
        event: Event kind being decoded.
        original_error: The underlying validation error.
    """

    code = "payload_decode_failed"
    status_code = 422

    def __init__(
        self,
        event: str,
        *,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"error parsing {event} payload", details=details)
        self.event = event
        self.original_error = original_error

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        base = super().to_dict()
        base.update(
            {
                "event": self.event,
                "original_error": str(self.original_error) if self.original_error else None,
            }
        )
        return base
