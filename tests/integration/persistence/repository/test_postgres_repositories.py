"""Integration tests for the PostgreSQL repositories.

Run with ``pytest -m integration`` against a migrated database.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from dishka import AsyncContainer

from zkey.domain.model import Interaction, OidcLoginDetails, OtpDetails
from zkey.domain.repository import (
    ApplicationRepository,
    InteractionRepository,
    TenantRepository,
    UserRepository,
)
from zkey.domain.value import InteractionId, InteractionType, OtpChannel, UserId
from tests.conftest import make_application, make_tenant, make_user
from tests.harness import create_env_fixture

integration_env = create_env_fixture(unmock={"persistence"})

pytestmark = pytest.mark.integration


def _interaction(details, ttl_seconds: int = 300) -> Interaction:
    now = datetime.now(timezone.utc)
    return Interaction(
        id=InteractionId(uuid4()),
        details=details,
        expires_at=now + timedelta(seconds=ttl_seconds),
        created_at=now,
    )


class TestInteractionRepositoryIntegration:
    """Tests for PostgresInteractionRepository."""

    @pytest.mark.asyncio
    async def test_details_survive_round_trip(self, integration_env: AsyncContainer):
        repository = await integration_env.get(InteractionRepository)
        interaction = _interaction(
            OtpDetails(
                identifier="ada@example.com",
                method=OtpChannel.EMAIL,
                code="012345",
                client_id="shop",
            )
        )
        await repository.create(interaction)

        found = await repository.find_active_by_id(
            interaction.id, datetime.now(timezone.utc)
        )

        assert found.details == interaction.details
        assert found.type == InteractionType.OTP.value

    @pytest.mark.asyncio
    async def test_consume_returns_row_once(self, integration_env: AsyncContainer):
        repository = await integration_env.get(InteractionRepository)
        interaction = _interaction(
            OidcLoginDetails(
                client_id="shop", redirect_uri="https://shop.example/cb", scope="openid"
            )
        )
        await repository.create(interaction)
        now = datetime.now(timezone.utc)

        first = await repository.consume(interaction.id, now)
        second = await repository.consume(interaction.id, now)

        assert first.id == interaction.id
        assert second is None

    @pytest.mark.asyncio
    async def test_expired_rows_are_invisible(self, integration_env: AsyncContainer):
        repository = await integration_env.get(InteractionRepository)
        interaction = _interaction(
            OidcLoginDetails(
                client_id="shop", redirect_uri="https://shop.example/cb", scope="openid"
            ),
            ttl_seconds=-1,
        )
        await repository.create(interaction)
        now = datetime.now(timezone.utc)

        assert await repository.find_active_by_id(interaction.id, now) is None
        assert await repository.consume(interaction.id, now) is None

    @pytest.mark.asyncio
    async def test_update_details_attaches_code(self, integration_env: AsyncContainer):
        repository = await integration_env.get(InteractionRepository)
        details = OidcLoginDetails(
            client_id="shop", redirect_uri="https://shop.example/cb", scope="openid"
        )
        interaction = _interaction(details)
        await repository.create(interaction)
        user_id = UserId(uuid4())

        updated = await repository.update_details(
            interaction.id,
            details.model_copy(update={"code": "abc", "user_id": user_id}),
            datetime.now(timezone.utc),
        )

        assert updated.details.code == "abc"
        assert updated.details.user_id == user_id


class TestTenantAndUserRepositoryIntegration:
    """Tests for the tenant, application and user repositories."""

    @pytest.mark.asyncio
    async def test_users_scoped_by_tenant(self, integration_env: AsyncContainer):
        tenant_repository = await integration_env.get(TenantRepository)
        application_repository = await integration_env.get(ApplicationRepository)
        user_repository = await integration_env.get(UserRepository)
        tenant = make_tenant()
        application = make_application(tenant)
        user = make_user(tenant)
        await tenant_repository.save(tenant)
        await application_repository.save(application)
        await user_repository.save(user)

        found_application = await application_repository.find_by_client_id(
            application.client_id
        )
        in_tenant = await user_repository.find_active_by_email(
            user.primary_email, tenant.id
        )
        elsewhere = await user_repository.find_active_by_email(
            user.primary_email, make_tenant().id
        )

        assert found_application.redirect_uris == application.redirect_uris
        assert found_application.auth_methods == application.auth_methods
        assert (await tenant_repository.find_by_id(tenant.id)).integrations == (
            tenant.integrations
        )
        assert [u.id for u in in_tenant] == [user.id]
        assert elsewhere == []
