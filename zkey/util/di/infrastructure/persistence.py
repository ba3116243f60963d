"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from zkey.config import Settings
from zkey.domain.repository import (
    ApplicationRepository,
    InteractionRepository,
    RefreshTokenRepository,
    TenantRepository,
    UserIdentityRepository,
    UserRepository,
)
from zkey.persistence.database import create_engine, create_session_factory
from zkey.persistence.repository import (
    PostgresApplicationRepository,
    PostgresInteractionRepository,
    PostgresRefreshTokenRepository,
    PostgresTenantRepository,
    PostgresUserIdentityRepository,
    PostgresUserRepository,
)
from zkey.util.di.base import ProviderBase
from zkey.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the engine, disposed when the container closes."""
        engine = create_engine(settings)
        if settings.environment != "test":
            instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Committed when the request container closes. Only exceptions that
        reach the container roll back: domain errors already became responses
        in the exception handlers, so services do their writes after their
        last check.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_tenant_repository(self, session: AsyncSession) -> TenantRepository:
        """Provide Tenant repository."""
        return PostgresTenantRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_application_repository(
        self, session: AsyncSession
    ) -> ApplicationRepository:
        """Provide Application repository."""
        return PostgresApplicationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_user_identity_repository(
        self, session: AsyncSession
    ) -> UserIdentityRepository:
        """Provide UserIdentity repository."""
        return PostgresUserIdentityRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_interaction_repository(
        self, session: AsyncSession
    ) -> InteractionRepository:
        """Provide Interaction repository."""
        return PostgresInteractionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_refresh_token_repository(
        self, session: AsyncSession
    ) -> RefreshTokenRepository:
        """Provide RefreshToken repository."""
        return PostgresRefreshTokenRepository(session)
