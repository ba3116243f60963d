"""In-memory user identity repository for testing."""

from typing import Optional

from zkey.domain.model.user_identity import UserIdentity
from zkey.domain.repository.user_identity import UserIdentityRepository
from zkey.domain.value import IdentityProvider, UserId


class InMemoryUserIdentityRepository(UserIdentityRepository):
    """In-memory implementation of UserIdentityRepository for testing."""

    def __init__(self) -> None:
        self._identities: list[UserIdentity] = []

    async def save(self, identity: UserIdentity) -> UserIdentity:
        """Save user identity, enforcing provider/provider_id uniqueness."""
        for existing in self._identities:
            if (
                existing.provider == identity.provider
                and existing.provider_id == identity.provider_id
                and existing.id != identity.id
            ):
                raise ValueError(
                    f"Identity already linked: {identity.provider.value}/{identity.provider_id}"
                )

        for i, existing in enumerate(self._identities):
            if existing.id == identity.id:
                self._identities[i] = identity
                return identity

        self._identities.append(identity)
        return identity

    async def find_by_provider(
        self, provider: IdentityProvider, provider_id: str
    ) -> Optional[UserIdentity]:
        for identity in self._identities:
            if identity.provider == provider and identity.provider_id == provider_id:
                return identity
        return None

    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        matches = [i for i in self._identities if i.user_id == user_id]
        matches.sort(key=lambda i: i.created_at)
        return matches

    async def delete_by_provider(
        self, provider: IdentityProvider, provider_id: str
    ) -> int:
        before = len(self._identities)
        self._identities = [
            i
            for i in self._identities
            if not (i.provider == provider and i.provider_id == provider_id)
        ]
        return before - len(self._identities)
