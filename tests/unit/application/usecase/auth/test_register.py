"""Unit tests for RegisterUseCase."""

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from dishka import AsyncContainer
from stellar_sdk import Keypair

from zkey.application.usecase.auth import RegisterUseCase
from zkey.application.usecase.auth.register import RegisterRequest
from zkey.domain.error import ConflictError, SignatureInvalidError, ValidationError
from zkey.domain.repository import (
    ApplicationRepository,
    TenantRepository,
    UserRepository,
)
from zkey.domain.service import (
    OAuthService,
    UserIdentityService,
    UserService,
    WalletService,
)
from zkey.domain.value import IdentityProvider
from zkey.util.password import verify_password
from tests.conftest import make_application, make_tenant, make_user, sign_nonce
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

DELETED_AT = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def tenant_and_app(unit_env: AsyncContainer):
    tenant = make_tenant()
    application = make_application(tenant)
    await (await unit_env.get(TenantRepository)).save(tenant)
    await (await unit_env.get(ApplicationRepository)).save(application)
    return tenant, application


class TestRegisterUseCase:
    """Tests for RegisterUseCase."""

    @pytest.mark.asyncio
    async def test_registers_with_tenant_id(self, unit_env: AsyncContainer, tenant_and_app):
        tenant, _ = tenant_and_app
        use_case = await unit_env.get(RegisterUseCase)
        user_service = await unit_env.get(UserService)

        response = await use_case.execute(
            RegisterRequest(
                email=" ada@example.com ",
                password="correct horse",
                firstName="Ada",
                tenantId=str(tenant.id),
            )
        )

        (user,) = await user_service.find_by_identifier("ada@example.com", tenant.id)
        assert response.user_id == str(user.id)
        assert user.first_name == "Ada"
        assert user.email_verified is False
        assert verify_password(user.password_hash, "correct horse")

    @pytest.mark.asyncio
    async def test_tenant_from_interaction(self, unit_env: AsyncContainer, tenant_and_app):
        tenant, application = tenant_and_app
        oauth_service = await unit_env.get(OAuthService)
        interaction, _ = await oauth_service.start_interaction(
            application.client_id, application.redirect_uris[0], "openid"
        )
        use_case = await unit_env.get(RegisterUseCase)
        user_service = await unit_env.get(UserService)

        await use_case.execute(
            RegisterRequest(phone="+34600000000", clientId=str(interaction.id))
        )

        (user,) = await user_service.find_by_identifier("+34600000000", tenant.id)
        assert user.tenant_id == tenant.id

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, unit_env: AsyncContainer, tenant_and_app):
        _, application = tenant_and_app
        use_case = await unit_env.get(RegisterUseCase)
        request = RegisterRequest(email="ada@example.com", clientId=application.client_id)
        await use_case.execute(request)

        with pytest.raises(ConflictError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_requires_tenant(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(RegisterUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(RegisterRequest(email="ada@example.com"))

    @pytest.mark.asyncio
    async def test_requires_email_or_phone(self, unit_env: AsyncContainer, tenant_and_app):
        tenant, _ = tenant_and_app
        use_case = await unit_env.get(RegisterUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(RegisterRequest(tenantId=str(tenant.id)))

    @pytest.mark.asyncio
    async def test_wallet_requires_signature(self, unit_env: AsyncContainer, tenant_and_app):
        tenant, _ = tenant_and_app
        use_case = await unit_env.get(RegisterUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                RegisterRequest(
                    email="ada@example.com",
                    walletAddress=Keypair.random().public_key,
                    tenantId=str(tenant.id),
                )
            )

    @pytest.mark.asyncio
    async def test_wallet_is_linked(self, unit_env: AsyncContainer, tenant_and_app):
        tenant, _ = tenant_and_app
        keypair = Keypair.random()
        wallet_service = await unit_env.get(WalletService)
        identity_service = await unit_env.get(UserIdentityService)
        nonce = await wallet_service.issue_nonce(keypair.public_key)
        use_case = await unit_env.get(RegisterUseCase)

        response = await use_case.execute(
            RegisterRequest(
                email="ada@example.com",
                walletAddress=keypair.public_key,
                signature=sign_nonce(keypair, nonce),
                tenantId=str(tenant.id),
            )
        )

        identity = await identity_service.get_identity_by_provider(
            IdentityProvider.STELLAR, keypair.public_key
        )
        assert str(identity.user_id) == response.user_id

    @pytest.mark.asyncio
    async def test_bad_wallet_signature_creates_nothing(
        self, unit_env: AsyncContainer, tenant_and_app
    ):
        tenant, _ = tenant_and_app
        keypair = Keypair.random()
        wallet_service = await unit_env.get(WalletService)
        user_service = await unit_env.get(UserService)
        await wallet_service.issue_nonce(keypair.public_key)
        use_case = await unit_env.get(RegisterUseCase)

        with pytest.raises(SignatureInvalidError):
            await use_case.execute(
                RegisterRequest(
                    email="ada@example.com",
                    walletAddress=keypair.public_key,
                    signature=sign_nonce(keypair, "other"),
                    tenantId=str(tenant.id),
                )
            )

        assert await user_service.find_by_identifier("ada@example.com", tenant.id) == []


class TestRegisterRestoresDeletedUser:
    """Registering over soft-deleted accounts."""

    @pytest.mark.asyncio
    async def test_deleted_user_comes_back(self, unit_env: AsyncContainer, tenant_and_app):
        tenant, _ = tenant_and_app
        deleted = make_user(tenant, first_name="Old", deleted_at=DELETED_AT)
        await (await unit_env.get(UserRepository)).save(deleted)
        use_case = await unit_env.get(RegisterUseCase)
        user_service = await unit_env.get(UserService)

        response = await use_case.execute(
            RegisterRequest(
                email=deleted.primary_email,
                firstName="Ada",
                password="correct horse",
                tenantId=str(tenant.id),
            )
        )

        assert response.user_id == str(deleted.id)
        (user,) = await user_service.find_by_identifier(deleted.primary_email, tenant.id)
        assert user.id == deleted.id
        assert user.deleted_at is None
        assert user.first_name == "Ada"
        assert verify_password(user.password_hash, "correct horse")

    @pytest.mark.asyncio
    async def test_different_deleted_users_conflict(
        self, unit_env: AsyncContainer, tenant_and_app
    ):
        tenant, _ = tenant_and_app
        users = await unit_env.get(UserRepository)
        by_email = make_user(tenant, deleted_at=DELETED_AT)
        by_phone = make_user(
            tenant, primary_email=None, phone_number="+34600000000", deleted_at=DELETED_AT
        )
        await users.save(by_email)
        await users.save(by_phone)
        use_case = await unit_env.get(RegisterUseCase)

        with pytest.raises(ConflictError, match="different deleted user"):
            await use_case.execute(
                RegisterRequest(
                    email=by_email.primary_email,
                    phone="+34600000000",
                    tenantId=str(tenant.id),
                )
            )

        assert (await users.find_by_id(by_email.id)).deleted_at == DELETED_AT
