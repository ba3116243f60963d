"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from zkey.domain.model.user import User
from zkey.domain.value import TenantId, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID, including soft-deleted users.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_by_email(
        self, email: str, tenant_id: Optional[TenantId]
    ) -> list[User]:
        """Find active users with the given primary email in a tenant.

        Args:
            email: Primary email address
            tenant_id: Tenant scope (None matches platform-level users)

        Returns:
            Matching users, most recently created first
        """
        pass

    @abstractmethod
    async def find_active_by_phone(
        self, phone_number: str, tenant_id: Optional[TenantId]
    ) -> list[User]:
        """Find active users with the given phone number in a tenant.

        Args:
            phone_number: Phone number
            tenant_id: Tenant scope (None matches platform-level users)

        Returns:
            Matching users, most recently created first
        """
        pass

    @abstractmethod
    async def find_active_by_wallet_address(self, address: str) -> Optional[User]:
        """Find the active user owning a wallet address.

        Args:
            address: Wallet public key

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_deleted(
        self,
        tenant_id: Optional[TenantId],
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        wallet_address: Optional[str] = None,
    ) -> list[User]:
        """Find soft-deleted users of a tenant holding any of the identifiers.

        Given identifiers are OR-combined; with none given nothing matches.

        Returns:
            Matching users, most recently created first
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        pass
