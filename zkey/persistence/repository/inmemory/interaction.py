"""In-memory interaction repository for testing."""

from datetime import datetime
from typing import Optional

from zkey.domain.model.interaction import Interaction, InteractionDetails
from zkey.domain.repository.interaction import InteractionRepository
from zkey.domain.value import InteractionId, InteractionType


class InMemoryInteractionRepository(InteractionRepository):
    """In-memory implementation of InteractionRepository for testing.

    Operations never await between their check and their write, so each one
    is atomic with respect to other coroutines on the same event loop.
    """

    def __init__(self) -> None:
        self._interactions: dict[InteractionId, Interaction] = {}

    async def create(self, interaction: Interaction) -> Interaction:
        self._interactions[interaction.id] = interaction
        return interaction

    async def find_active_by_id(
        self, interaction_id: InteractionId, now: datetime
    ) -> Optional[Interaction]:
        interaction = self._interactions.get(interaction_id)
        if interaction and interaction.is_active(now):
            return interaction
        return None

    async def find_active_by_type(
        self, interaction_type: InteractionType, now: datetime
    ) -> list[Interaction]:
        matches = [
            i
            for i in self._interactions.values()
            if i.type == interaction_type.value and i.is_active(now)
        ]
        matches.sort(key=lambda i: i.created_at, reverse=True)
        return matches

    async def update_details(
        self, interaction_id: InteractionId, details: InteractionDetails, now: datetime
    ) -> Optional[Interaction]:
        interaction = self._interactions.get(interaction_id)
        if (
            not interaction
            or not interaction.is_active(now)
            or interaction.type != details.type
        ):
            return None
        updated = interaction.model_copy(update={"details": details})
        self._interactions[interaction_id] = updated
        return updated

    async def consume(
        self, interaction_id: InteractionId, now: datetime
    ) -> Optional[Interaction]:
        interaction = self._interactions.get(interaction_id)
        if not interaction or not interaction.is_active(now):
            return None
        return self._interactions.pop(interaction_id)
