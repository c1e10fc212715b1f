"""Shared fixtures for webhook payload tests."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Secret used to sign fixture deliveries
TEST_SECRET = "sampleToken"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding sample Gitea payloads."""
    return FIXTURES_DIR


@pytest.fixture
def load_fixture() -> Callable[[str], bytes]:
    """Load a sample payload as raw bytes."""

    def _load(name: str) -> bytes:
        return (FIXTURES_DIR / name).read_bytes()

    return _load


@pytest.fixture
def load_fixture_json(load_fixture) -> Callable[[str], dict[str, Any]]:
    """Load a sample payload as a dictionary."""

    def _load(name: str) -> dict[str, Any]:
        return json.loads(load_fixture(name))

    return _load


@pytest.fixture
def test_secret() -> str:
    return TEST_SECRET
