"""PostgreSQL repository implementations."""

from zkey.persistence.repository.interaction import PostgresInteractionRepository
from zkey.persistence.repository.refresh_token import PostgresRefreshTokenRepository
from zkey.persistence.repository.tenant import (
    PostgresApplicationRepository,
    PostgresTenantRepository,
)
from zkey.persistence.repository.user import PostgresUserRepository
from zkey.persistence.repository.user_identity import PostgresUserIdentityRepository

__all__ = [
    "PostgresApplicationRepository",
    "PostgresInteractionRepository",
    "PostgresRefreshTokenRepository",
    "PostgresTenantRepository",
    "PostgresUserIdentityRepository",
    "PostgresUserRepository",
]
