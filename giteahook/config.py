"""Application configuration settings.

This module provides centralized configuration management using environment
variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field

from giteahook.payloads.events import PAYLOAD_TYPES


def _get_bool_env(name: str, default: bool = False) -> bool:
    """Get a boolean value from environment variable.

    Args:
        name: Environment variable name.
        default: Default value if not set.

    Returns:
        Boolean value from environment.
    """
    value = os.getenv(name, "").lower()
    if value in ("true", "1", "yes", "on"):
        return True
    if value in ("false", "0", "no", "off"):
        return False
    return default


def _get_list_env(name: str, default: list[str]) -> list[str]:
    """Get a comma-separated list from environment variable.

    Blank items are dropped; an unset or blank variable yields the default.
    """
    items = [item.strip() for item in os.getenv(name, "").split(",")]
    items = [item for item in items if item]
    return items or list(default)


def _default_events() -> list[str]:
    return [event.value for event in PAYLOAD_TYPES]


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        GITEA_WEBHOOK_SECRET: Shared secret configured on the Gitea hook.
            Signature verification is skipped when unset.
        WEBHOOK_PATH: Path the receiving endpoint is mounted on.
        WEBHOOK_EVENTS: Event kinds the endpoint accepts.
        WEBHOOK_ACK_ON_FAILURE: Answer 200 even when verification fails,
            reporting the error only in the response body.
    """

    GITEA_WEBHOOK_SECRET: str | None = None
    WEBHOOK_PATH: str = "/gitea/webhooks"
    WEBHOOK_EVENTS: list[str] = field(default_factory=_default_events)
    WEBHOOK_ACK_ON_FAILURE: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables.

        Returns:
            Settings instance populated from environment.
        """
        return cls(
            GITEA_WEBHOOK_SECRET=os.getenv("GITEA_WEBHOOK_SECRET") or None,
            WEBHOOK_PATH=os.getenv("WEBHOOK_PATH", "/gitea/webhooks"),
            WEBHOOK_EVENTS=_get_list_env("WEBHOOK_EVENTS", _default_events()),
            WEBHOOK_ACK_ON_FAILURE=_get_bool_env("WEBHOOK_ACK_ON_FAILURE", default=False),
        )


# Global settings instance
settings = Settings.from_env()
