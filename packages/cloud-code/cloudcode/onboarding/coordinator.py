"""Managed project onboarding coordinator.

Drives the ``onboardUser`` handshake against the configured Cloud Code
endpoints, polling until the backend reports the managed project as
provisioned or every endpoint has been tried.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from cloudcode.onboarding.config import DEFAULT_CLIENT_METADATA, OnboardingConfig
from cloudcode.onboarding.tiers import Tier

logger = logging.getLogger(__name__)

ONBOARD_USER_PATH = "/v1internal:onboardUser"


@dataclass
class OnboardingRequest:
    """Body of a single ``onboardUser`` call."""

    tier_id: str
    project_id: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.tier_id, Tier):
            self.tier_id = self.tier_id.value

    def metadata(self) -> dict[str, str]:
        """Return the client metadata block, tagged with the project if known."""
        metadata = dict(DEFAULT_CLIENT_METADATA)
        if self.project_id:
            metadata["duetProject"] = self.project_id
        return metadata

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body.

        Paid tiers must name the companion project; FREE never does.
        """
        payload: dict[str, Any] = {
            "tierId": self.tier_id,
            "metadata": self.metadata(),
        }
        if self.tier_id != Tier.FREE.value and self.project_id:
            payload["cloudaicompanionProject"] = self.project_id
        return payload


@dataclass
class OnboardingOutcome:
    """Parsed result of one poll."""

    done: bool = False
    managed_project_id: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.done

    @classmethod
    def from_response(cls, data: Any) -> OnboardingOutcome:
        """Parse a response body, treating unexpected shapes as not done."""
        if not isinstance(data, Mapping):
            return cls()

        project_id = None
        response = data.get("response")
        if isinstance(response, Mapping):
            project = response.get("cloudaicompanionProject")
            if isinstance(project, Mapping):
                candidate = project.get("id")
                if isinstance(candidate, str) and candidate:
                    project_id = candidate

        return cls(done=data.get("done") is True, managed_project_id=project_id)


class PollAction(str, Enum):
    """What the coordinator does after a single poll."""

    COMPLETE = "complete"
    RETRY = "retry"
    ABANDON = "abandon"


@dataclass
class PollResult:
    """Tagged outcome of a single poll."""

    action: PollAction
    project_id: str | None = None
    detail: str | None = None


class OnboardingCoordinator:
    """Provisions a managed project for an account.

    Endpoints are tried strictly in order. Each endpoint gets up to
    ``max_attempts`` polls; a poll that is not done yet waits ``delay_ms``
    and retries the same endpoint, while a transport or HTTP failure
    abandons that endpoint at once and moves to the next one. Nothing is
    raised for backend problems: the result is the project id or None.

    Example:
        >>> coordinator = OnboardingCoordinator()
        >>> project = await coordinator.onboard(token, Tier.PRO, project_id="my-project")
        >>> if project is None:
        ...     print("Onboarding did not finish")
    """

    def __init__(
        self,
        config: OnboardingConfig | None = None,
        client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ):
        """Initialize the coordinator.

        Args:
            config: Onboarding configuration. If None, loads from environment.
            client: Shared HTTP client. If None, one is opened per onboarding run.
            sleep: Coroutine used to wait between polls (default: asyncio.sleep).
        """
        self._config = config
        self._client = client
        self._sleep = sleep or asyncio.sleep

    @property
    def config(self) -> OnboardingConfig:
        """Lazy-initialize configuration from environment."""
        if self._config is None:
            self._config = OnboardingConfig.from_env()
        return self._config

    def build_headers(self, token: str) -> dict[str, str]:
        """Return the request headers for a bearer token."""
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            **self.config.headers,
        }

    @asynccontextmanager
    async def _client_session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return

        async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
            yield client

    async def poll_once(
        self,
        client: httpx.AsyncClient,
        endpoint: str,
        request: OnboardingRequest,
        token: str,
        attempt: int,
    ) -> PollResult:
        """Submit one ``onboardUser`` call and classify the result.

        Args:
            client: HTTP client to send with.
            endpoint: Base URL of the endpoint.
            request: The onboarding request to send.
            token: Bearer token.
            attempt: 1-based attempt number, for logging.

        Returns:
            PollResult telling the caller to finish, retry, or move on.
        """
        url = f"{endpoint}{ONBOARD_USER_PATH}"

        try:
            response = await client.post(
                url,
                headers=self.build_headers(token),
                json=request.to_payload(),
            )
        except Exception as e:
            logger.debug(f"onboardUser error at {endpoint}: {type(e).__name__}: {e}")
            return PollResult(PollAction.ABANDON, detail=str(e))

        if not response.is_success:
            logger.debug(
                f"onboardUser failed at {endpoint}: {response.status_code} - {response.text[:500]}"
            )
            return PollResult(PollAction.ABANDON, detail=f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            logger.debug(f"onboardUser returned invalid JSON at {endpoint}: {e}")
            return PollResult(PollAction.ABANDON, detail="invalid JSON")

        logger.debug(f"onboardUser response (attempt {attempt}): {data}")
        outcome = OnboardingOutcome.from_response(data)

        if outcome.is_terminal and outcome.managed_project_id:
            return PollResult(PollAction.COMPLETE, project_id=outcome.managed_project_id)

        if outcome.is_terminal and request.project_id:
            logger.warning(
                f"onboardUser at {endpoint} reported done without a managed project; "
                f"using caller project {request.project_id}"
            )
            return PollResult(PollAction.COMPLETE, project_id=request.project_id)

        return PollResult(PollAction.RETRY)

    async def onboard(
        self,
        token: str,
        tier_id: str,
        project_id: str | None = None,
        max_attempts: int | None = None,
        delay_ms: int | None = None,
    ) -> str | None:
        """Onboard an account and return its managed project id.

        Args:
            token: OAuth access token.
            tier_id: Tier to onboard to (e.g. "FREE", "PRO", "ULTRA").
            project_id: Caller's GCP project, required for non-FREE tiers.
            max_attempts: Polls per endpoint (default from config).
            delay_ms: Wait between polls in milliseconds (default from config).

        Returns:
            The managed project id, or None if onboarding did not finish.

        Raises:
            ValueError: If token is empty or the polling limits are out of range.
        """
        if not token:
            raise ValueError("token is required")

        max_attempts = self.config.max_attempts if max_attempts is None else max_attempts
        delay_ms = self.config.delay_ms if delay_ms is None else delay_ms
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")

        async with self._client_session() as client:
            for endpoint in self.config.endpoints:
                request = OnboardingRequest(tier_id=tier_id, project_id=project_id)

                for attempt in range(1, max_attempts + 1):
                    result = await self.poll_once(client, endpoint, request, token, attempt)

                    if result.action is PollAction.COMPLETE:
                        logger.info(f"Onboarding completed at {endpoint}: {result.project_id}")
                        return result.project_id

                    if result.action is PollAction.ABANDON:
                        break

                    if attempt < max_attempts:
                        logger.debug(f"onboardUser not complete, waiting {delay_ms}ms...")
                        await self._sleep(delay_ms / 1000)

        logger.warning(
            f"Onboarding did not complete after trying {len(self.config.endpoints)} endpoint(s)"
        )
        return None


async def onboard_user(
    token: str,
    tier_id: str,
    project_id: str | None = None,
    max_attempts: int = 10,
    delay_ms: int = 5000,
    config: OnboardingConfig | None = None,
) -> str | None:
    """Onboard an account with a one-off coordinator.

    See OnboardingCoordinator.onboard.
    """
    coordinator = OnboardingCoordinator(config=config)
    return await coordinator.onboard(
        token,
        tier_id,
        project_id=project_id,
        max_attempts=max_attempts,
        delay_ms=delay_ms,
    )
