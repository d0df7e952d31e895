from datetime import datetime, timedelta, timezone

import pytest

from modules.licensing.exceptions import (
    AuthorityUnavailableError,
    LicenseInvalidError,
    LicenseRevokedError,
    MissingLicenseKeyError,
)
from modules.licensing.interfaces import ILicenseActivationService
from modules.profiles.exceptions import ProfileNotFoundError
from modules.profiles.models import NewProfile
from tests.factories import GOOD_KEY, REFUNDED_KEY, TEST_PRODUCT_ID, UNREACHABLE_KEY, make_user

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def service(container):
    return container.activation


@pytest.fixture
def linked(store):
    return store.insert(NewProfile(auth_user_id="test-user-123", email="test@example.com"))


class TestLicenseActivation:
    def test_implements_protocol(self, service):
        assert isinstance(service, ILicenseActivationService)

    @pytest.mark.asyncio
    async def test_activation_grants_thirty_days(self, service, store, linked, authority):
        result = await service.activate(make_user(), f"  {GOOD_KEY} ", now=NOW)

        assert result.premium_expires_at == NOW + timedelta(days=30)
        profile = store.get_by_id(linked.id)
        assert profile.is_premium
        assert profile.license_key == GOOD_KEY
        assert profile.premium_expires_at == NOW + timedelta(days=30)
        assert authority.calls == [(TEST_PRODUCT_ID, GOOD_KEY)]

    @pytest.mark.asyncio
    async def test_reactivation_refreshes_expiry(self, service, store, linked):
        await service.activate(make_user(), GOOD_KEY, now=NOW)
        later = NOW + timedelta(days=20)
        result = await service.activate(make_user(), GOOD_KEY, now=later)

        assert result.premium_expires_at == later + timedelta(days=30)
        assert store.get_by_id(linked.id).premium_expires_at == later + timedelta(days=30)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", [None, "", "   "])
    async def test_missing_key(self, service, authority, key):
        with pytest.raises(MissingLicenseKeyError):
            await service.activate(make_user(), key, now=NOW)
        assert authority.calls == []

    @pytest.mark.asyncio
    async def test_unknown_key_leaves_profile_untouched(self, service, store, linked):
        with pytest.raises(LicenseInvalidError):
            await service.activate(make_user(), "BOGUS-KEY", now=NOW)
        assert store.get_by_id(linked.id) == linked

    @pytest.mark.asyncio
    async def test_refunded_key_leaves_profile_untouched(self, service, store, linked):
        with pytest.raises(LicenseRevokedError) as exc_info:
            await service.activate(make_user(), REFUNDED_KEY, now=NOW)
        assert exc_info.value.details["sale_id"] == "sale-1"
        assert store.get_by_id(linked.id) == linked

    @pytest.mark.asyncio
    async def test_unavailable_authority_is_distinct(self, service, store, linked):
        with pytest.raises(AuthorityUnavailableError):
            await service.activate(make_user(), UNREACHABLE_KEY, now=NOW)
        assert store.get_by_id(linked.id) == linked

    @pytest.mark.asyncio
    async def test_unlinked_caller_claims_shadow_first(self, service, store):
        shadow = store.insert(NewProfile(email="test@example.com"))

        await service.activate(make_user(), GOOD_KEY, now=NOW)

        profile = store.get_by_id(shadow.id)
        assert profile.auth_user_id == "test-user-123"
        assert profile.is_premium
        assert len(store.profiles) == 1

    @pytest.mark.asyncio
    async def test_no_profile_at_all(self, service, store):
        with pytest.raises(ProfileNotFoundError):
            await service.activate(make_user(), GOOD_KEY, now=NOW)
        assert store.profiles == []

    @pytest.mark.asyncio
    async def test_updates_by_identity_never_by_email(self, service, store):
        """Another identity's profile with the caller's email is never touched."""
        other = store.insert(NewProfile(auth_user_id="someone-else", email="test@example.com"))

        with pytest.raises(ProfileNotFoundError):
            await service.activate(make_user(), GOOD_KEY, now=NOW)
        assert store.get_by_id(other.id) == other
