"""PostgreSQL implementation of Interaction repository.

Every read filters on ``expires_at > now``; expired rows stay in the table
until an external reaper removes them.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from zkey.domain.model.interaction import Interaction, InteractionDetails
from zkey.domain.repository.interaction import InteractionRepository
from zkey.domain.value import InteractionId, InteractionType
from zkey.persistence.mappers import interaction_to_dict, row_to_interaction
from zkey.persistence.tables import interactions_table


class PostgresInteractionRepository(InteractionRepository):
    """PostgreSQL implementation of InteractionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, interaction: Interaction) -> Interaction:
        stmt = interactions_table.insert().values(**interaction_to_dict(interaction))
        await self.session.execute(stmt)
        await self.session.flush()
        return interaction

    async def find_active_by_id(
        self, interaction_id: InteractionId, now: datetime
    ) -> Optional[Interaction]:
        stmt = select(interactions_table).where(
            interactions_table.c.id == interaction_id,
            interactions_table.c.expires_at > now,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_interaction(dict(row)) if row else None

    async def find_active_by_type(
        self, interaction_type: InteractionType, now: datetime
    ) -> list[Interaction]:
        stmt = (
            select(interactions_table)
            .where(
                interactions_table.c.type == interaction_type.value,
                interactions_table.c.expires_at > now,
            )
            .order_by(interactions_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_interaction(dict(row)) for row in result.mappings().all()]

    async def update_details(
        self, interaction_id: InteractionId, details: InteractionDetails, now: datetime
    ) -> Optional[Interaction]:
        stmt = (
            interactions_table.update()
            .where(
                interactions_table.c.id == interaction_id,
                interactions_table.c.type == details.type,
                interactions_table.c.expires_at > now,
            )
            .values(details=details.model_dump(mode="json"))
            .returning(*interactions_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_interaction(dict(row)) if row else None

    async def consume(
        self, interaction_id: InteractionId, now: datetime
    ) -> Optional[Interaction]:
        """Delete the row if still active, returning what was deleted.

        A single ``DELETE ... RETURNING`` statement: of two concurrent
        consumers, the second blocks on the row lock and then deletes
        nothing.
        """
        stmt = (
            interactions_table.delete()
            .where(
                interactions_table.c.id == interaction_id,
                interactions_table.c.expires_at > now,
            )
            .returning(*interactions_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_interaction(dict(row)) if row else None
