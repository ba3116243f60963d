"""User identity domain service."""

from uuid import uuid4

import logfire

from zkey.domain.model.user_identity import UserIdentity
from zkey.domain.repository import UserIdentityRepository
from zkey.domain.value import IdentityProvider, UserId, UserIdentityId


class UserIdentityService:
    """Domain service for user identity operations."""

    def __init__(self, user_identity_repository: UserIdentityRepository) -> None:
        """Initialize user identity service.

        Args:
            user_identity_repository: User identity repository
        """
        self.user_identity_repository = user_identity_repository

    async def get_identity_by_provider(
        self, provider: IdentityProvider, provider_id: str
    ) -> UserIdentity | None:
        """Get identity by provider and provider-specific ID.

        Args:
            provider: Credential namespace
            provider_id: Identifier within the namespace

        Returns:
            Identity if found, None otherwise
        """
        with logfire.span(
            "user_identity_service.get_identity_by_provider",
            provider=provider.value,
            provider_id=provider_id,
        ):
            identity = await self.user_identity_repository.find_by_provider(
                provider, provider_id
            )
            if identity:
                logfire.info(
                    "Identity found",
                    provider=provider.value,
                    user_id=str(identity.user_id),
                )
            else:
                logfire.info("Identity not found", provider=provider.value)
            return identity

    async def link(
        self, user_id: UserId, provider: IdentityProvider, provider_id: str
    ) -> UserIdentity:
        """Link an external identity to a user.

        Args:
            user_id: User ID
            provider: Credential namespace
            provider_id: Identifier within the namespace

        Returns:
            Saved identity
        """
        with logfire.span(
            "user_identity_service.link",
            user_id=str(user_id),
            provider=provider.value,
        ):
            identity = UserIdentity(
                id=UserIdentityId(uuid4()),
                user_id=user_id,
                provider=provider,
                provider_id=provider_id,
            )
            saved = await self.user_identity_repository.save(identity)
            logfire.info(
                "Identity linked",
                identity_id=str(saved.id),
                provider=provider.value,
                user_id=str(user_id),
            )
            return saved

    async def unlink_all(self, user_id: UserId, provider: IdentityProvider) -> int:
        """Remove every identity of one provider from a user.

        Returns:
            Number of identities removed
        """
        with logfire.span(
            "user_identity_service.unlink_all",
            user_id=str(user_id),
            provider=provider.value,
        ):
            removed = 0
            for identity in await self.user_identity_repository.find_all_by_user_id(
                user_id
            ):
                if identity.provider == provider:
                    removed += await self.user_identity_repository.delete_by_provider(
                        provider, identity.provider_id
                    )
            logfire.info(
                "Identities unlinked",
                user_id=str(user_id),
                provider=provider.value,
                count=removed,
            )
            return removed
