"""In-memory user repository for testing."""

from typing import Callable, Optional

from zkey.domain.model import User
from zkey.domain.repository import UserRepository
from zkey.domain.value import TenantId, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    def _find_active(self, predicate: Callable[[User], bool]) -> list[User]:
        matches = [u for u in self._users.values() if u.is_active and predicate(u)]
        matches.sort(key=lambda u: u.created_at, reverse=True)
        return matches

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def find_active_by_email(
        self, email: str, tenant_id: Optional[TenantId]
    ) -> list[User]:
        return self._find_active(
            lambda u: u.primary_email == email and u.tenant_id == tenant_id
        )

    async def find_active_by_phone(
        self, phone_number: str, tenant_id: Optional[TenantId]
    ) -> list[User]:
        return self._find_active(
            lambda u: u.phone_number == phone_number and u.tenant_id == tenant_id
        )

    async def find_active_by_wallet_address(self, address: str) -> Optional[User]:
        matches = self._find_active(lambda u: u.wallet_address == address)
        return matches[0] if matches else None

    async def find_deleted(
        self,
        tenant_id: Optional[TenantId],
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        wallet_address: Optional[str] = None,
    ) -> list[User]:
        wanted = [
            (field, value)
            for field, value in (
                ("primary_email", email),
                ("phone_number", phone_number),
                ("wallet_address", wallet_address),
            )
            if value
        ]
        matches = [
            u
            for u in self._users.values()
            if not u.is_active
            and u.tenant_id == tenant_id
            and any(getattr(u, field) == value for field, value in wanted)
        ]
        matches.sort(key=lambda u: u.created_at, reverse=True)
        return matches

    async def save(self, user: User) -> User:
        self._users[user.id] = user
        return user
