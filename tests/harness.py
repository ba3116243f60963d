"""Test harness for unit, integration and E2E tests.

Integration tests assume PostgreSQL is reachable at DATABASE__URL and the
schema is migrated (`python scripts/run_migrations.py`).
"""

from collections.abc import AsyncIterator, Iterator
from contextlib import contextmanager

import pytest_asyncio
from dishka import AsyncContainer
from fastapi.testclient import TestClient

from zkey.config import Settings
from zkey.domain.model import Application, Tenant, User
from zkey.domain.repository import (
    ApplicationRepository,
    TenantRepository,
    UserRepository,
)
from zkey.interface.api.app import create_app
from zkey.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Settings loaded from environment automatically

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_issue_nonce(unit_env):
            wallet_service = await unit_env.get(WalletService)
            nonce = await wallet_service.issue_nonce("GABC...")
    """

    @pytest_asyncio.fixture
    async def _test_environment() -> AsyncIterator[AsyncContainer]:
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


@contextmanager
def app_client(
    unmock: set[Component] | None = None,
) -> Iterator[tuple[TestClient, AsyncContainer]]:
    """Serve the app on a test container.

    Yields the client and the root container. ``client.portal.call`` runs
    coroutines on the app's event loop, for seeding and inspecting state.
    """
    container = build_test_container(unmock=unmock or set(), with_fastapi=True)
    app = create_app(container=container, settings=Settings())
    with TestClient(app) as client:
        yield client, container
        client.portal.call(container.close)


def resolve(client: TestClient, container: AsyncContainer, dependency_type):
    """Resolve an APP-scoped dependency on the app's event loop."""
    return client.portal.call(container.get, dependency_type)


def seed(
    client: TestClient,
    container: AsyncContainer,
    tenant: Tenant,
    *applications: Application,
    users: tuple[User, ...] = (),
) -> None:
    """Store a tenant with its applications and users."""
    client.portal.call(resolve(client, container, TenantRepository).save, tenant)
    application_repository = resolve(client, container, ApplicationRepository)
    for application in applications:
        client.portal.call(application_repository.save, application)
    user_repository = resolve(client, container, UserRepository)
    for user in users:
        client.portal.call(user_repository.save, user)
