"""
Unit tests for Account Service.
"""

import pytest
from pydantic import ValidationError

from health_tracker.accounts import AccountError, AccountService
from health_tracker.models import ActivityLevel


class TestRegistration:
    """Test suite for AccountService.register."""

    def test_register(self, accounts):
        result = accounts.register("Ani@Example.com", "rahasia123", "Ani")

        assert result.success
        assert result.profile.email == "ani@example.com"
        assert result.profile.activity_level == ActivityLevel.SEDENTARY

    def test_short_password(self, accounts):
        result = accounts.register("ani@example.com", "12345", "Ani")

        assert not result.success
        assert "at least 6" in result.message

    def test_invalid_email(self, accounts):
        result = accounts.register("bukan-email", "rahasia123", "Ani")

        assert not result.success
        assert "Invalid profile" in result.message

    def test_duplicate_email(self, accounts):
        accounts.register("ani@example.com", "rahasia123", "Ani")
        result = accounts.register("ANI@example.com", "lainnya123", "Ani Lain")

        assert not result.success
        assert result.message == "Email already registered"

    def test_registry_persists(self, accounts, data_store, privacy_module):
        accounts.register("ani@example.com", "rahasia123", "Ani")

        reopened = AccountService(data_store=data_store, privacy_module=privacy_module)

        assert reopened.authenticate("ani@example.com", "rahasia123").success


class TestAuthentication:
    """Test suite for AccountService.authenticate."""

    def test_success_returns_user_key(self, accounts):
        registration = accounts.register("ani@example.com", "rahasia123", "Ani")

        result = accounts.authenticate("ANI@example.com", "rahasia123")

        assert result.success
        assert result.user_id == registration.profile.id
        assert len(result.user_key) == 32
        assert accounts.get_profile(result.user_id, result.user_key).name == "Ani"

    def test_wrong_password(self, accounts):
        accounts.register("ani@example.com", "rahasia123", "Ani")

        result = accounts.authenticate("ani@example.com", "salah123")

        assert not result.success
        assert result.user_key is None

    def test_unknown_email(self, accounts):
        result = accounts.authenticate("siapa@example.com", "rahasia123")
        assert not result.success
        assert result.message == "Invalid credentials"


class TestProfile:
    """Test suite for profile reads and updates."""

    @pytest.fixture
    def session(self, accounts):
        accounts.register("ani@example.com", "rahasia123", "Ani")
        return accounts.authenticate("ani@example.com", "rahasia123")

    def test_update_profile(self, accounts, session):
        updated = accounts.update_profile(
            session.user_id, session.user_key,
            name="Ani Lestari", activity_level="moderate", email="other@example.com"
        )

        assert updated.name == "Ani Lestari"
        assert updated.activity_level == ActivityLevel.MODERATE
        assert updated.email == "ani@example.com"
        assert accounts.get_profile(session.user_id, session.user_key) == updated

    def test_update_profile_validates(self, accounts, session):
        with pytest.raises(ValidationError):
            accounts.update_profile(session.user_id, session.user_key, height_cm=-1)

    def test_update_missing_profile(self, accounts, user_key):
        with pytest.raises(AccountError):
            accounts.update_profile("nobody", user_key, name="X")

    def test_default_activity_level(self, accounts, session, user_key):
        assert accounts.default_activity_level(session.user_id, session.user_key) == ActivityLevel.SEDENTARY
        assert accounts.default_activity_level("nobody", user_key) == ActivityLevel.UNSPECIFIED
