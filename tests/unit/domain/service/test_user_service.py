"""Unit tests for UserService."""

from datetime import datetime, timezone

import pytest

from zkey.domain.error import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnverifiedAccountError,
)
from zkey.domain.value import OtpChannel
from zkey.util.password import hash_password
from tests.conftest import FakeClock, ServiceGraph, make_tenant, make_user


class TestEnsureAvailable:
    """Identifier uniqueness among active users of a tenant."""

    @pytest.mark.asyncio
    async def test_taken_email_conflicts(self, services: ServiceGraph):
        tenant = make_tenant()
        user = make_user(tenant)
        await services.seed(tenant, users=(user,))

        with pytest.raises(ConflictError, match="email is already registered"):
            await services.user_service.ensure_available(
                tenant.id, email=user.primary_email
            )

    @pytest.mark.asyncio
    async def test_same_email_in_other_tenant_is_available(self, services: ServiceGraph):
        tenant, other = make_tenant(), make_tenant()
        user = make_user(tenant)
        await services.seed(tenant, users=(user,))

        await services.user_service.ensure_available(other.id, email=user.primary_email)

    @pytest.mark.asyncio
    async def test_deleted_user_frees_identifier(self, services: ServiceGraph):
        tenant = make_tenant()
        user = make_user(
            tenant, phone_number="+34600000000", deleted_at=datetime.now(timezone.utc)
        )
        await services.seed(tenant, users=(user,))

        await services.user_service.ensure_available(
            tenant.id, phone_number="+34600000000"
        )

    @pytest.mark.asyncio
    async def test_taken_wallet_conflicts(self, services: ServiceGraph):
        tenant = make_tenant()
        user = make_user(tenant, wallet_address="GWALLET")
        await services.seed(tenant, users=(user,))

        with pytest.raises(ConflictError, match="wallet address"):
            await services.user_service.ensure_available(
                tenant.id, wallet_address="GWALLET"
            )


DELETED_AT = datetime(2026, 1, 1, tzinfo=timezone.utc)


class TestFindRestorable:
    """Choosing the deleted account a registration brings back."""

    @pytest.mark.asyncio
    async def test_deleted_email_match(self, services: ServiceGraph):
        tenant = make_tenant()
        deleted = make_user(tenant, deleted_at=DELETED_AT)
        await services.seed(tenant, users=(deleted,))

        found = await services.user_service.find_restorable(
            tenant.id, email=deleted.primary_email
        )

        assert found.id == deleted.id

    @pytest.mark.asyncio
    async def test_fresh_identifiers(self, services: ServiceGraph):
        tenant = make_tenant()
        await services.seed(tenant)

        assert (
            await services.user_service.find_restorable(
                tenant.id, email="new@example.com", phone_number="+34600000001"
            )
            is None
        )

    @pytest.mark.asyncio
    async def test_other_tenant_is_not_restored(self, services: ServiceGraph):
        tenant, other = make_tenant(), make_tenant()
        deleted = make_user(other, deleted_at=DELETED_AT)
        await services.seed(other, users=(deleted,))

        assert (
            await services.user_service.find_restorable(
                tenant.id, email=deleted.primary_email
            )
            is None
        )

    @pytest.mark.asyncio
    async def test_two_deleted_users_conflict(self, services: ServiceGraph):
        tenant = make_tenant()
        by_email = make_user(tenant, deleted_at=DELETED_AT)
        by_phone = make_user(
            tenant, phone_number="+34600000000", deleted_at=DELETED_AT
        )
        await services.seed(tenant, users=(by_email, by_phone))

        with pytest.raises(ConflictError, match="different deleted user"):
            await services.user_service.find_restorable(
                tenant.id,
                email=by_email.primary_email,
                phone_number="+34600000000",
            )

    @pytest.mark.asyncio
    async def test_wallet_owner_must_be_deleted_in_tenant(self, services: ServiceGraph):
        tenant = make_tenant()
        active = make_user(tenant)
        await services.seed(tenant, users=(active,))

        with pytest.raises(ConflictError, match="wallet address is already registered"):
            await services.user_service.find_restorable(
                tenant.id, email="new@example.com", wallet_owner_id=active.id
            )

    @pytest.mark.asyncio
    async def test_deleted_wallet_owner(self, services: ServiceGraph):
        tenant = make_tenant()
        owner = make_user(tenant, deleted_at=DELETED_AT)
        await services.seed(tenant, users=(owner,))

        found = await services.user_service.find_restorable(
            tenant.id, email=owner.primary_email, wallet_owner_id=owner.id
        )

        assert found.id == owner.id


class TestRestore:
    """Reviving soft-deleted users."""

    @pytest.mark.asyncio
    async def test_restore_user_replaces_details(self, services: ServiceGraph):
        tenant = make_tenant()
        deleted = make_user(tenant, phone_number="+34600000000", deleted_at=DELETED_AT)
        await services.seed(tenant, users=(deleted,))

        restored = await services.user_service.restore_user(
            deleted, email=deleted.primary_email, first_name="Grace", password="hopper123"
        )

        assert restored.id == deleted.id
        assert restored.is_active
        assert restored.first_name == "Grace"
        assert restored.phone_number is None
        assert restored.email_verified is False
        assert (await services.user_service.get_by_id(deleted.id)).is_active

    @pytest.mark.asyncio
    async def test_restore_for_channel_marks_channel(self, services: ServiceGraph):
        tenant = make_tenant()
        deleted = make_user(
            tenant,
            phone_number="+34600000000",
            email_verified=True,
            deleted_at=DELETED_AT,
        )
        await services.seed(tenant, users=(deleted,))

        restored = await services.user_service.restore_for_channel(
            "+34600000000", OtpChannel.PHONE, tenant.id
        )

        assert restored.id == deleted.id
        assert restored.is_active
        assert restored.phone_verified is True
        assert restored.email_verified is True

    @pytest.mark.asyncio
    async def test_restore_for_channel_without_match(self, services: ServiceGraph):
        assert (
            await services.user_service.restore_for_channel(
                "nobody@example.com", OtpChannel.EMAIL, None
            )
            is None
        )


class TestAuthenticate:
    """Tests for email/password authentication."""

    @pytest.mark.asyncio
    async def test_correct_password_authenticates(self, services: ServiceGraph):
        tenant = make_tenant()
        user = make_user(tenant, password_hash=hash_password("correct horse"))
        await services.seed(tenant, users=(user,))

        authenticated = await services.user_service.authenticate(
            user.primary_email, "correct horse", tenant.id
        )

        assert authenticated.id == user.id

    @pytest.mark.asyncio
    async def test_wrong_password_is_rejected(self, services: ServiceGraph):
        tenant = make_tenant()
        user = make_user(tenant, password_hash=hash_password("correct horse"))
        await services.seed(tenant, users=(user,))

        with pytest.raises(InvalidCredentialsError):
            await services.user_service.authenticate(
                user.primary_email, "battery staple", tenant.id
            )

    @pytest.mark.asyncio
    async def test_unknown_email_is_rejected_the_same_way(self, services: ServiceGraph):
        with pytest.raises(InvalidCredentialsError):
            await services.user_service.authenticate(
                "nobody@example.com", "whatever", make_tenant().id
            )

    @pytest.mark.asyncio
    async def test_unverified_account_is_refused(self, services: ServiceGraph):
        tenant = make_tenant()
        user = make_user(
            tenant, email_verified=False, password_hash=hash_password("correct horse")
        )
        await services.seed(tenant, users=(user,))

        with pytest.raises(UnverifiedAccountError):
            await services.user_service.authenticate(
                user.primary_email, "correct horse", tenant.id
            )

    @pytest.mark.asyncio
    async def test_verified_duplicate_is_preferred(
        self, services: ServiceGraph, clock: FakeClock
    ):
        """With two accounts on one email, the verified one signs in."""
        tenant = make_tenant()
        verified = make_user(
            tenant,
            primary_email="dup@example.com",
            password_hash=hash_password("correct horse"),
            created_at=clock.now,
        )
        clock.advance(minutes=1)
        pending = make_user(
            tenant,
            primary_email="dup@example.com",
            email_verified=False,
            password_hash=hash_password("correct horse"),
            created_at=clock.now,
        )
        await services.seed(tenant, users=(verified, pending))

        authenticated = await services.user_service.authenticate(
            "dup@example.com", "correct horse", tenant.id
        )

        assert authenticated.id == verified.id


class TestUpdateProfile:
    """Tests for profile updates."""

    @pytest.mark.asyncio
    async def test_phone_change_clears_verification(self, services: ServiceGraph):
        tenant = make_tenant()
        user = make_user(tenant, phone_number="+34600000001", phone_verified=True)
        await services.seed(tenant, users=(user,))

        updated = await services.user_service.update_profile(
            user.id, first_name="Grace", phone_number="+34600000002"
        )

        assert updated.first_name == "Grace"
        assert updated.last_name == user.last_name
        assert updated.phone_number == "+34600000002"
        assert updated.phone_verified is False

    @pytest.mark.asyncio
    async def test_phone_of_other_user_conflicts(self, services: ServiceGraph):
        tenant = make_tenant()
        user = make_user(tenant)
        other = make_user(tenant, phone_number="+34600000003")
        await services.seed(tenant, users=(user, other))

        with pytest.raises(ConflictError):
            await services.user_service.update_profile(
                user.id, phone_number="+34600000003"
            )

    @pytest.mark.asyncio
    async def test_empty_wallet_clears_it(self, services: ServiceGraph):
        tenant = make_tenant()
        user = make_user(tenant, wallet_address="GWALLET")
        await services.seed(tenant, users=(user,))

        updated = await services.user_service.update_profile(user.id, wallet_address="")

        assert updated.wallet_address is None

    @pytest.mark.asyncio
    async def test_unknown_user(self, services: ServiceGraph):
        with pytest.raises(NotFoundError):
            await services.user_service.update_profile(make_user().id, first_name="X")


class TestMarkChannelVerified:
    """Tests for marking a contact channel verified."""

    @pytest.mark.asyncio
    async def test_marks_phone(self, services: ServiceGraph):
        tenant = make_tenant()
        user = make_user(tenant, phone_number="+34600000004", email_verified=False)
        await services.seed(tenant, users=(user,))

        updated = await services.user_service.mark_channel_verified(
            user, OtpChannel.PHONE
        )

        assert updated.phone_verified is True
        assert updated.email_verified is False
        assert (await services.user_service.get_by_id(user.id)).phone_verified is True
