"""Tests for webhook error types."""

import pytest

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

# ============================================================================
# Exception Hierarchy Tests
# ============================================================================


class TestWebhookError:
    """Tests for base WebhookError."""

    def test_basic_creation(self) -> None:
        error = WebhookError("something failed")

        assert str(error) == "something failed"
        assert error.message == "something failed"
        assert error.details == {}

    def test_to_dict(self) -> None:
        error = WebhookError("something failed", details={"key": "value"})

        assert error.to_dict() == {
            "error_type": "WebhookError",
            "code": "webhook_error",
            "message": "something failed",
            "details": {"key": "value"},
        }

    @pytest.mark.parametrize(
        "error",
        [
            NoEventsToMatchError(),
            InvalidHTTPMethodError("GET"),
            MissingEventHeaderError(),
            EventNotSubscribedError("push"),
            PayloadReadError(),
            MissingSignatureHeaderError(),
            SignatureMismatchError(),
            UnimplementedEventError("issue_comment"),
            UnknownEventError("wiki"),
            PayloadDecodeError("push"),
        ],
    )
    def test_all_errors_are_webhook_errors(self, error) -> None:
        assert isinstance(error, WebhookError)

    def test_codes_are_distinct(self) -> None:
        classes = [
            NoEventsToMatchError,
            InvalidHTTPMethodError,
            MissingEventHeaderError,
            EventNotSubscribedError,
            PayloadReadError,
            MissingSignatureHeaderError,
            SignatureMismatchError,
            UnimplementedEventError,
            UnknownEventError,
            PayloadDecodeError,
        ]

        assert len({cls.code for cls in classes}) == len(classes)


class TestSpecificErrors:
    """Tests for individual error types."""

    def test_default_messages(self) -> None:
        assert NoEventsToMatchError().message == "no event specified to parse"
        assert MissingEventHeaderError().message == "missing X-Gitea-Event header"
        assert MissingSignatureHeaderError().message == "missing X-Gitea-Signature header"
        assert SignatureMismatchError().message == "X-Gitea-Signature is invalid"

    def test_invalid_method(self) -> None:
        error = InvalidHTTPMethodError("PUT")

        assert error.method == "PUT"
        assert error.status_code == 405
        assert error.to_dict()["method"] == "PUT"

    def test_not_subscribed(self) -> None:
        error = EventNotSubscribedError("push")

        assert error.message == "event not defined to be parsed: push"
        assert error.status_code == 202

    def test_signature_errors_share_parent(self) -> None:
        assert isinstance(MissingSignatureHeaderError(), VerificationError)
        assert isinstance(SignatureMismatchError(), VerificationError)
        assert SignatureMismatchError.status_code == 401

    def test_decode_error_carries_original(self) -> None:
        original = ValueError("bad json")
        error = PayloadDecodeError("push", original_error=original)

        data = error.to_dict()

        assert error.original_error is original
        assert data["event"] == "push"
        assert data["original_error"] == "bad json"

    def test_decode_error_without_original(self) -> None:
        assert PayloadDecodeError("push").to_dict()["original_error"] is None

    def test_unimplemented_and_unknown(self) -> None:
        assert UnimplementedEventError("issue_comment").status_code == 501
        assert UnknownEventError("wiki").message == "unknown event wiki"
