"""User identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from zkey.domain.model.user_identity import UserIdentity
from zkey.domain.value import IdentityProvider, UserId


class UserIdentityRepository(ABC):
    """Repository for UserIdentity entities."""

    @abstractmethod
    async def save(self, identity: UserIdentity) -> UserIdentity:
        """Save user identity.

        Args:
            identity: UserIdentity to save

        Returns:
            Saved UserIdentity
        """
        pass

    @abstractmethod
    async def find_by_provider(
        self, provider: IdentityProvider, provider_id: str
    ) -> Optional[UserIdentity]:
        """Find identity by provider and provider-specific ID.

        Args:
            provider: Credential namespace
            provider_id: Identifier within the namespace (wallet address)

        Returns:
            UserIdentity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        """Find all identities linked to a user.

        Args:
            user_id: User ID

        Returns:
            List of identities (may be empty)
        """
        pass

    @abstractmethod
    async def delete_by_provider(
        self, provider: IdentityProvider, provider_id: str
    ) -> int:
        """Delete identities matching provider and provider ID.

        Returns:
            Number of identities deleted
        """
        pass
