"""In-memory repository implementations for testing."""

from .interaction import InMemoryInteractionRepository
from .refresh_token import InMemoryRefreshTokenRepository
from .tenant import InMemoryApplicationRepository, InMemoryTenantRepository
from .user import InMemoryUserRepository
from .user_identity import InMemoryUserIdentityRepository

__all__ = [
    "InMemoryApplicationRepository",
    "InMemoryInteractionRepository",
    "InMemoryRefreshTokenRepository",
    "InMemoryTenantRepository",
    "InMemoryUserIdentityRepository",
    "InMemoryUserRepository",
]
