"""Interaction repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from zkey.domain.model.interaction import Interaction, InteractionDetails
from zkey.domain.value import InteractionId, InteractionType


class InteractionRepository(ABC):
    """Repository for ephemeral interaction records.

    Every read takes the current time and only returns rows whose
    ``expires_at`` lies after it. Expired rows are never purged here.
    """

    @abstractmethod
    async def create(self, interaction: Interaction) -> Interaction:
        """Persist a new interaction.

        Args:
            interaction: Interaction to insert

        Returns:
            The persisted interaction
        """
        pass

    @abstractmethod
    async def find_active_by_id(
        self, interaction_id: InteractionId, now: datetime
    ) -> Optional[Interaction]:
        """Find a non-expired interaction by ID.

        Args:
            interaction_id: Interaction ID
            now: Reference time for the expiry filter

        Returns:
            The interaction if found and active, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_by_type(
        self, interaction_type: InteractionType, now: datetime
    ) -> list[Interaction]:
        """List non-expired interactions of one type.

        Args:
            interaction_type: Details tag to filter on
            now: Reference time for the expiry filter

        Returns:
            Interactions, most recently created first
        """
        pass

    @abstractmethod
    async def update_details(
        self, interaction_id: InteractionId, details: InteractionDetails, now: datetime
    ) -> Optional[Interaction]:
        """Replace the details of a non-expired interaction.

        Args:
            interaction_id: Interaction ID
            details: New details payload (same type tag)
            now: Reference time for the expiry filter

        Returns:
            The updated interaction, None if it no longer exists or expired
        """
        pass

    @abstractmethod
    async def consume(
        self, interaction_id: InteractionId, now: datetime
    ) -> Optional[Interaction]:
        """Atomically delete a non-expired interaction and return it.

        Implementations must perform the expiry check and the delete as one
        operation so that two concurrent consumers cannot both succeed.

        Args:
            interaction_id: Interaction ID
            now: Reference time for the expiry filter

        Returns:
            The deleted interaction, None if it was already consumed or expired
        """
        pass
