"""Webhook security utilities.

Gitea signs each delivery with HMAC-SHA256 over the raw request body,
keyed by the hook secret, and sends the lowercase hex digest in the
``X-Gitea-Signature`` header.
"""

import hashlib
import hmac

import structlog

logger = structlog.get_logger(__name__)

EVENT_HEADER = "X-Gitea-Event"
SIGNATURE_HEADER = "X-Gitea-Signature"


def _as_bytes(value: bytes | str) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def generate_signature(body: bytes | str, secret: bytes | str) -> str:
    """Generate the HMAC-SHA256 signature Gitea sends for a body.

    Args:
        body: Raw request body.
        secret: Webhook secret key.

    Returns:
        Lowercase hex digest.
    """
    return hmac.new(_as_bytes(secret), _as_bytes(body), hashlib.sha256).hexdigest()


def verify_signature(body: bytes, signature: str, secret: bytes | str) -> bool:
    """Verify a delivery signature.

    The comparison runs in constant time with respect to the signature
    contents and is safe for signatures of any length.

    Args:
        body: Raw request body exactly as received.
        signature: Value of the signature header.
        secret: Webhook secret key.

    Returns:
        True if the signature matches, False otherwise.
    """
    expected_signature = generate_signature(body, secret)

    is_valid = hmac.compare_digest(
        signature.encode("utf-8"), expected_signature.encode("utf-8")
    )

    if not is_valid:
        logger.warning(
            "webhook_signature_invalid",
            payload_length=len(body),
        )
    else:
        logger.debug(
            "webhook_signature_verified",
            payload_length=len(body),
        )

    return is_valid


def create_signature_headers(
    body: bytes | str,
    secret: bytes | str,
    *,
    event: str | None = None,
) -> dict[str, str]:
    """Create the headers Gitea would send for a signed delivery.

    Args:
        body: Raw request body.
        secret: Webhook secret key.
        event: Optional event kind to include as the event header.

    Returns:
        Dictionary of headers to include in a request.
    """
    headers = {SIGNATURE_HEADER: generate_signature(body, secret)}
    if event is not None:
        headers[EVENT_HEADER] = event
    return headers
