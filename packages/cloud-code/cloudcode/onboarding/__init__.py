"""Cloud Code Account Onboarding Package.

Provides managed project onboarding including:
- OnboardingCoordinator: Polls onboardUser across candidate endpoints
- OnboardingRequest / OnboardingOutcome: Request body and parsed poll result
- OnboardingConfig: Endpoints, client headers and polling limits
- Tier helpers: Default tier selection from allowed tiers

Usage:
    from cloudcode.onboarding import OnboardingCoordinator, Tier

    coordinator = OnboardingCoordinator()
    project_id = await coordinator.onboard(token, Tier.FREE)
"""

from cloudcode.onboarding.config import (
    DEFAULT_CLIENT_HEADERS,
    DEFAULT_ONBOARD_ENDPOINTS,
    OnboardingConfig,
)
from cloudcode.onboarding.coordinator import (
    OnboardingCoordinator,
    OnboardingOutcome,
    OnboardingRequest,
    PollAction,
    PollResult,
    onboard_user,
)
from cloudcode.onboarding.tiers import (
    Tier,
    TierDescriptor,
    get_default_tier,
    get_default_tier_id,
)

__all__ = [
    "DEFAULT_CLIENT_HEADERS",
    "DEFAULT_ONBOARD_ENDPOINTS",
    "OnboardingConfig",
    "OnboardingCoordinator",
    "OnboardingOutcome",
    "OnboardingRequest",
    "PollAction",
    "PollResult",
    "onboard_user",
    "Tier",
    "TierDescriptor",
    "get_default_tier",
    "get_default_tier_id",
]
