"""UserIdentity repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from zkey.domain.model.user_identity import UserIdentity
from zkey.domain.repository.user_identity import UserIdentityRepository
from zkey.domain.value import IdentityProvider, UserId
from zkey.persistence.mappers import row_to_user_identity, user_identity_to_dict
from zkey.persistence.tables import user_identities_table


class PostgresUserIdentityRepository(UserIdentityRepository):
    """PostgreSQL implementation of UserIdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, identity: UserIdentity) -> UserIdentity:
        """Insert a user identity.

        Identities are never updated in place; ``(provider, provider_id)``
        is unique and a duplicate raises ``IntegrityError``.
        """
        stmt = user_identities_table.insert().values(**user_identity_to_dict(identity))
        await self.session.execute(stmt)
        await self.session.flush()
        return identity

    async def find_by_provider(
        self, provider: IdentityProvider, provider_id: str
    ) -> Optional[UserIdentity]:
        stmt = select(user_identities_table).where(
            user_identities_table.c.provider == provider.value,
            user_identities_table.c.provider_id == provider_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_user_identity(dict(row))

    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        stmt = (
            select(user_identities_table)
            .where(user_identities_table.c.user_id == user_id)
            .order_by(user_identities_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()

        return [row_to_user_identity(dict(row)) for row in rows]

    async def delete_by_provider(
        self, provider: IdentityProvider, provider_id: str
    ) -> int:
        stmt = user_identities_table.delete().where(
            user_identities_table.c.provider == provider.value,
            user_identities_table.c.provider_id == provider_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
