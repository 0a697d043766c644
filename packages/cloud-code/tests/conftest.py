"""Shared fixtures for Cloud Code package tests."""

from unittest.mock import AsyncMock

import httpx
import pytest
from cloudcode.onboarding import OnboardingConfig, OnboardingCoordinator


@pytest.fixture
def onboarding_config():
    """Two-endpoint configuration with short polling limits."""
    return OnboardingConfig(
        endpoints=("https://primary.example.com", "https://fallback.example.com"),
        headers={"User-Agent": "test-agent/1.0", "X-Goog-Api-Client": "test-client"},
        max_attempts=3,
        delay_ms=100,
    )


@pytest.fixture
def mock_sleep():
    """Stand-in for asyncio.sleep so tests never wait."""
    return AsyncMock()


@pytest.fixture
def make_coordinator(onboarding_config, mock_sleep):
    """Build a coordinator whose HTTP calls are answered by a handler function."""

    def _make(handler, config=None):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return OnboardingCoordinator(
            config=config or onboarding_config,
            client=client,
            sleep=mock_sleep,
        )

    return _make


@pytest.fixture
def sample_allowed_tiers():
    """allowedTiers payload as returned by loadCodeAssist."""
    return [
        {"id": "FREE", "isDefault": False},
        {"id": "PRO", "isDefault": True},
        {"id": "ULTRA"},
    ]
