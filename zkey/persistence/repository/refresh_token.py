"""PostgreSQL implementation of RefreshToken repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from zkey.domain.model.refresh_token import RefreshToken
from zkey.domain.repository.refresh_token import RefreshTokenRepository
from zkey.persistence.mappers import refresh_token_to_dict, row_to_refresh_token
from zkey.persistence.tables import refresh_tokens_table


class PostgresRefreshTokenRepository(RefreshTokenRepository):
    """PostgreSQL implementation of RefreshTokenRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, refresh_token: RefreshToken) -> RefreshToken:
        stmt = refresh_tokens_table.insert().values(
            **refresh_token_to_dict(refresh_token)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return refresh_token

    async def find_by_hash(self, token_hash: str) -> Optional[RefreshToken]:
        stmt = select(refresh_tokens_table).where(
            refresh_tokens_table.c.token_hash == token_hash
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_refresh_token(dict(row)) if row else None
