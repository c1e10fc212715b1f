"""Tests for webhook security module."""

import hashlib
import hmac

import pytest

from giteahook.webhooks.security import (
    EVENT_HEADER,
    SIGNATURE_HEADER,
    create_signature_headers,
    generate_signature,
    verify_signature,
)

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def sample_body():
    """Sample webhook body."""
    return b'{"ref":"refs/heads/master","commits":[]}'


@pytest.fixture
def sample_secret():
    """Sample webhook secret."""
    return "sampleToken"


def _flip_hex(char: str) -> str:
    return "0" if char != "0" else "1"


# ============================================================================
# generate_signature Tests
# ============================================================================


class TestGenerateSignature:
    """Tests for generate_signature function."""

    def test_matches_hmac_sha256(self, sample_body, sample_secret):
        expected = hmac.new(sample_secret.encode(), sample_body, hashlib.sha256).hexdigest()

        assert generate_signature(sample_body, sample_secret) == expected

    def test_lowercase_hex(self, sample_body, sample_secret):
        signature = generate_signature(sample_body, sample_secret)

        assert len(signature) == 64  # SHA256 hex is 64 chars
        assert signature == signature.lower()
        int(signature, 16)

    def test_bytes_and_str_secret_agree(self, sample_body):
        assert generate_signature(sample_body, "secret") == generate_signature(
            sample_body, b"secret"
        )

    def test_different_secrets(self, sample_body):
        assert generate_signature(sample_body, "secret1") != generate_signature(
            sample_body, "secret2"
        )


# ============================================================================
# verify_signature Tests
# ============================================================================


class TestVerifySignature:
    """Tests for verify_signature function."""

    def test_verify_valid_signature(self, sample_body, sample_secret):
        signature = generate_signature(sample_body, sample_secret)

        assert verify_signature(sample_body, signature, sample_secret) is True

    @pytest.mark.parametrize("position", [0, 1, 31, 62, 63])
    def test_single_flipped_character(self, sample_body, sample_secret, position):
        """Test that changing any one hex character fails verification."""
        signature = generate_signature(sample_body, sample_secret)
        tampered = (
            signature[:position] + _flip_hex(signature[position]) + signature[position + 1:]
        )

        assert verify_signature(sample_body, tampered, sample_secret) is False

    def test_uppercase_signature_rejected(self, sample_body, sample_secret):
        signature = generate_signature(sample_body, sample_secret).upper()

        assert verify_signature(sample_body, signature, sample_secret) is False

    def test_truncated_signature(self, sample_body, sample_secret):
        signature = generate_signature(sample_body, sample_secret)

        assert verify_signature(sample_body, signature[:32], sample_secret) is False

    def test_wrong_secret(self, sample_body, sample_secret):
        signature = generate_signature(sample_body, sample_secret)

        assert verify_signature(sample_body, signature, "wrong_secret") is False

    def test_modified_body(self, sample_body, sample_secret):
        signature = generate_signature(sample_body, sample_secret)

        assert verify_signature(sample_body + b" ", signature, sample_secret) is False


# ============================================================================
# create_signature_headers Tests
# ============================================================================


class TestCreateSignatureHeaders:
    """Tests for create_signature_headers function."""

    def test_create_headers(self, sample_body, sample_secret):
        headers = create_signature_headers(sample_body, sample_secret)

        assert headers == {SIGNATURE_HEADER: generate_signature(sample_body, sample_secret)}

    def test_create_headers_with_event(self, sample_body, sample_secret):
        headers = create_signature_headers(sample_body, sample_secret, event="push")

        assert headers[EVENT_HEADER] == "push"

    def test_headers_are_verifiable(self, sample_body, sample_secret):
        headers = create_signature_headers(sample_body, sample_secret)

        assert verify_signature(sample_body, headers[SIGNATURE_HEADER], sample_secret)
