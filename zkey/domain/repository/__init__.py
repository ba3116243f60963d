"""Repository interfaces for ZKey domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from zkey.domain.repository.interaction import InteractionRepository
from zkey.domain.repository.refresh_token import RefreshTokenRepository
from zkey.domain.repository.tenant import ApplicationRepository, TenantRepository
from zkey.domain.repository.user import UserRepository
from zkey.domain.repository.user_identity import UserIdentityRepository

__all__ = [
    "ApplicationRepository",
    "InteractionRepository",
    "RefreshTokenRepository",
    "TenantRepository",
    "UserIdentityRepository",
    "UserRepository",
]
