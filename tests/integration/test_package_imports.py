"""Integration tests for package imports."""


class TestAllPackagesImportable:
    """Test that all Cloud Code packages can be imported together."""

    def test_onboarding_package_imports(self):
        """Onboarding package classes should be importable."""
        from cloudcode.onboarding import OnboardingCoordinator
        from cloudcode.onboarding import OnboardingConfig
        from cloudcode.onboarding import Tier
        from cloudcode.onboarding import get_default_tier_id

        assert OnboardingCoordinator is not None
        assert OnboardingConfig is not None
        assert Tier is not None
        assert get_default_tier_id is not None

    def test_session_package_imports(self):
        """Session package classes should be importable."""
        from cloudcode.session import SessionIdentityStore

        assert SessionIdentityStore is not None


class TestCrossPackageIntegration:
    """Test that packages work together."""

    def test_packages_share_namespace(self):
        """Both packages live under the cloudcode namespace."""
        import cloudcode.onboarding
        import cloudcode.session

        assert cloudcode.onboarding.__name__ == "cloudcode.onboarding"
        assert cloudcode.session.__name__ == "cloudcode.session"

    def test_onboarding_and_session_are_independent(self):
        """A composition root can wire both without shared state."""
        from cloudcode.onboarding import OnboardingConfig, OnboardingCoordinator
        from cloudcode.session import SessionIdentityStore

        store = SessionIdentityStore()
        coordinator = OnboardingCoordinator(config=OnboardingConfig())

        session_id = store.derive_session_id(None, "user@example.com")

        assert coordinator.config.max_attempts == 10
        assert store.derive_session_id(None, "user@example.com") == session_id
