"""Async PostgreSQL engine and sessions."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from zkey.config import Settings

APPLICATION_NAME = "zkey-auth"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine.

    Connections report ``application_name`` so broker sessions are easy to
    spot in ``pg_stat_activity``.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Repositories issue Core statements and return domain models, nothing
    # is left attached to the session after commit.
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
