"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from zkey.domain.model import User
from zkey.domain.repository import UserRepository
from zkey.domain.value import TenantId, UserId
from zkey.persistence.mappers import row_to_user, user_to_dict
from zkey.persistence.tables import users_table


def _tenant_clause(tenant_id: Optional[TenantId]):
    if tenant_id is None:
        return users_table.c.tenant_id.is_(None)
    return users_table.c.tenant_id == tenant_id


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_active_by_email(
        self, email: str, tenant_id: Optional[TenantId]
    ) -> list[User]:
        stmt = (
            select(users_table)
            .where(users_table.c.primary_email == email)
            .where(_tenant_clause(tenant_id))
            .where(users_table.c.deleted_at.is_(None))
            .order_by(users_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_active_by_phone(
        self, phone_number: str, tenant_id: Optional[TenantId]
    ) -> list[User]:
        stmt = (
            select(users_table)
            .where(users_table.c.phone_number == phone_number)
            .where(_tenant_clause(tenant_id))
            .where(users_table.c.deleted_at.is_(None))
            .order_by(users_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_active_by_wallet_address(self, address: str) -> Optional[User]:
        stmt = (
            select(users_table)
            .where(users_table.c.wallet_address == address)
            .where(users_table.c.deleted_at.is_(None))
            .order_by(users_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_deleted(
        self,
        tenant_id: Optional[TenantId],
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        wallet_address: Optional[str] = None,
    ) -> list[User]:
        matches = [
            column == value
            for column, value in (
                (users_table.c.primary_email, email),
                (users_table.c.phone_number, phone_number),
                (users_table.c.wallet_address, wallet_address),
            )
            if value
        ]
        if not matches:
            return []
        stmt = (
            select(users_table)
            .where(or_(*matches))
            .where(_tenant_clause(tenant_id))
            .where(users_table.c.deleted_at.is_not(None))
            .order_by(users_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = users_table.insert().values(**user_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return user
