"""Configuration for the Cloud Code onboarding handshake.

Holds the candidate endpoint list, the client identification headers sent
with every request, and the polling limits.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field

DEFAULT_ONBOARD_ENDPOINTS: tuple[str, ...] = (
    "https://daily-cloudcode-pa.googleapis.com",
    "https://cloudcode-pa.googleapis.com",
)

DEFAULT_CLIENT_METADATA = {
    "ideType": "IDE_UNSPECIFIED",
    "platform": "PLATFORM_UNSPECIFIED",
    "pluginType": "GEMINI",
}

DEFAULT_CLIENT_HEADERS: dict[str, str] = {
    "User-Agent": "antigravity/1.11.5 darwin/arm64",
    "X-Goog-Api-Client": "google-cloud-sdk vscode_cloudshelldev/0.1",
    "Client-Metadata": json.dumps(DEFAULT_CLIENT_METADATA),
}

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_DELAY_MS = 5000
DEFAULT_TIMEOUT_SECONDS = 30.0


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_from_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class OnboardingConfig:
    """Configuration for onboarding polling.

    Attributes:
        endpoints: Ordered candidate base URLs, tried in sequence.
        headers: Client identification headers added to every request.
        max_attempts: Polls per endpoint before moving on (>= 1).
        delay_ms: Wait between polls on the same endpoint, in milliseconds.
        timeout_seconds: HTTP timeout for a single poll.
    """

    endpoints: tuple[str, ...] = DEFAULT_ONBOARD_ENDPOINTS
    headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CLIENT_HEADERS))
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay_ms: int = DEFAULT_DELAY_MS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if isinstance(self.endpoints, str):
            self.endpoints = (self.endpoints,)
        self.endpoints = tuple(endpoint.rstrip("/") for endpoint in self.endpoints)
        self.validate()

    def validate(self) -> None:
        """Check the configuration values.

        Raises:
            ValueError: If any value is out of range.
        """
        if not self.endpoints:
            raise ValueError("at least one onboarding endpoint is required")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {self.delay_ms}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

    @classmethod
    def from_env(cls) -> OnboardingConfig:
        """Create configuration from environment variables.

        Environment variables:
            CLOUDCODE_ONBOARD_ENDPOINTS: Comma separated base URLs
            CLOUDCODE_ONBOARD_MAX_ATTEMPTS: Polls per endpoint (default: 10)
            CLOUDCODE_ONBOARD_DELAY_MS: Wait between polls (default: 5000)
            CLOUDCODE_HTTP_TIMEOUT: Per-request timeout in seconds (default: 30)
        """
        raw_endpoints = os.environ.get("CLOUDCODE_ONBOARD_ENDPOINTS", "")
        endpoints = tuple(e.strip() for e in raw_endpoints.split(",") if e.strip())

        return cls(
            endpoints=endpoints or DEFAULT_ONBOARD_ENDPOINTS,
            max_attempts=_int_from_env("CLOUDCODE_ONBOARD_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
            delay_ms=_int_from_env("CLOUDCODE_ONBOARD_DELAY_MS", DEFAULT_DELAY_MS),
            timeout_seconds=_float_from_env("CLOUDCODE_HTTP_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        )
