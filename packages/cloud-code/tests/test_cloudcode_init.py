"""Tests for package public API exports."""


class TestPackageExports:
    """Test that all expected classes are exported."""

    def test_onboarding_exports(self):
        """Test onboarding classes are exported."""
        from cloudcode.onboarding import (
            OnboardingConfig,
            OnboardingCoordinator,
            OnboardingOutcome,
            OnboardingRequest,
        )

        assert OnboardingCoordinator is not None
        assert OnboardingRequest is not None
        assert OnboardingOutcome is not None
        assert OnboardingConfig is not None

    def test_session_exports(self):
        """Test session classes are exported."""
        from cloudcode.session import SessionIdentityStore, generate_session_id

        assert SessionIdentityStore is not None
        assert callable(generate_session_id)

    def test_all_exports_complete(self):
        """Test __all__ includes all expected exports."""
        from cloudcode import onboarding, session

        expected_onboarding = [
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
        for export in expected_onboarding:
            assert export in onboarding.__all__, f"{export} not in __all__"

        assert "SessionIdentityStore" in session.__all__

    def test_submodule_imports(self):
        """Test direct submodule imports work."""
        from cloudcode.onboarding.config import OnboardingConfig
        from cloudcode.onboarding.coordinator import OnboardingCoordinator
        from cloudcode.onboarding.tiers import get_default_tier_id
        from cloudcode.session.store import SessionIdentityStore

        assert OnboardingConfig is not None
        assert OnboardingCoordinator is not None
        assert get_default_tier_id is not None
        assert SessionIdentityStore is not None
