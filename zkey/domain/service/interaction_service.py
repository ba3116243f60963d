"""Interaction domain service.

Manages the ephemeral, single-use, TTL-bound records every authentication
flow is built on.
"""

from datetime import timedelta
from typing import Any, Callable
from uuid import UUID, uuid4

import logfire

from zkey.domain.error import InteractionInvalidOrExpiredError
from zkey.domain.model.interaction import (
    Interaction,
    InteractionDetails,
    interaction_details_adapter,
)
from zkey.domain.repository import InteractionRepository
from zkey.domain.value import InteractionId, InteractionType

from .base import Clock, Service, utcnow


class InteractionService(Service):
    """Domain service for interaction lifecycle operations."""

    def __init__(
        self, interaction_repository: InteractionRepository, clock: Clock = utcnow
    ) -> None:
        """Initialize interaction service.

        Args:
            interaction_repository: Interaction repository
            clock: Source of the current time for expiry checks
        """
        self.interaction_repository = interaction_repository
        self.clock = clock

    async def create(
        self, details: InteractionDetails, ttl_seconds: int
    ) -> Interaction:
        """Create an interaction expiring ``ttl_seconds`` from now.

        Args:
            details: Type-tagged payload
            ttl_seconds: Lifetime in seconds

        Returns:
            The persisted interaction
        """
        with logfire.span(
            "interaction_service.create", type=details.type, ttl_seconds=ttl_seconds
        ):
            now = self.clock()
            interaction = Interaction(
                id=InteractionId(uuid4()),
                details=details,
                expires_at=now + timedelta(seconds=ttl_seconds),
                created_at=now,
            )
            created = await self.interaction_repository.create(interaction)
            logfire.info(
                "Interaction created",
                interaction_id=str(created.id),
                type=details.type,
            )
            return created

    async def find_active_by_id(
        self, interaction_id: InteractionId
    ) -> Interaction | None:
        """Get a non-expired interaction by ID.

        Args:
            interaction_id: Interaction ID

        Returns:
            Interaction if found and active, None otherwise
        """
        with logfire.span(
            "interaction_service.find_active_by_id",
            interaction_id=str(interaction_id),
        ):
            interaction = await self.interaction_repository.find_active_by_id(
                interaction_id, self.clock()
            )
            if not interaction:
                logfire.warn(
                    "Interaction not found or expired",
                    interaction_id=str(interaction_id),
                )
            return interaction

    async def find_active_by_reference(self, reference: str) -> Interaction | None:
        """Get a non-expired interaction from an untrusted string reference.

        Returns None for anything that is not a UUID, so callers can accept
        either an interaction ID or some other identifier in the same field.
        """
        try:
            interaction_id = InteractionId(UUID(reference))
        except (TypeError, ValueError):
            return None
        return await self.find_active_by_id(interaction_id)

    async def find_active_by_predicate(
        self,
        interaction_type: InteractionType,
        predicate: Callable[[Any], bool],
    ) -> Interaction | None:
        """Find the most recent active interaction whose details match.

        Scans every active interaction of the type, newest first.

        Args:
            interaction_type: Details tag to filter on
            predicate: Test applied to each candidate's details

        Returns:
            The newest matching interaction, None if nothing matches
        """
        with logfire.span(
            "interaction_service.find_active_by_predicate",
            type=interaction_type.value,
        ):
            candidates = await self.interaction_repository.find_active_by_type(
                interaction_type, self.clock()
            )
            for interaction in candidates:
                if predicate(interaction.details):
                    return interaction
            logfire.info(
                "No matching interaction",
                type=interaction_type.value,
                scanned=len(candidates),
            )
            return None

    async def mutate(
        self, interaction_id: InteractionId, patch: dict[str, Any]
    ) -> Interaction:
        """Apply a partial update to an active interaction's details.

        The patched payload is validated again, so it cannot change the
        type tag or break the payload schema.

        Args:
            interaction_id: Interaction ID
            patch: Fields to overwrite in ``details``

        Returns:
            The updated interaction

        Raises:
            InteractionInvalidOrExpiredError: If the interaction is gone or expired
        """
        with logfire.span(
            "interaction_service.mutate",
            interaction_id=str(interaction_id),
            fields=sorted(patch),
        ):
            interaction = await self.interaction_repository.find_active_by_id(
                interaction_id, self.clock()
            )
            if not interaction:
                raise InteractionInvalidOrExpiredError()

            merged = {**interaction.details.model_dump(), **patch}
            merged["type"] = interaction.details.type
            details = interaction_details_adapter.validate_python(merged)

            updated = await self.interaction_repository.update_details(
                interaction_id, details, self.clock()
            )
            if not updated:
                raise InteractionInvalidOrExpiredError()

            logfire.info("Interaction updated", interaction_id=str(interaction_id))
            return updated

    async def consume(self, interaction_id: InteractionId) -> Interaction | None:
        """Atomically delete an active interaction.

        Args:
            interaction_id: Interaction ID

        Returns:
            The consumed interaction, None if it was already consumed or expired
        """
        with logfire.span(
            "interaction_service.consume", interaction_id=str(interaction_id)
        ):
            consumed = await self.interaction_repository.consume(
                interaction_id, self.clock()
            )
            if consumed:
                logfire.info("Interaction consumed", interaction_id=str(interaction_id))
            else:
                logfire.warn(
                    "Interaction already consumed or expired",
                    interaction_id=str(interaction_id),
                )
            return consumed

    async def resolve_client_id(self, client_reference: str) -> str:
        """Resolve a value that is either an OAuth client ID or an interaction ID.

        Login surfaces started from an OAuth redirect only know the
        interaction ID; it carries the client ID in its details.

        Args:
            client_reference: Client ID or interaction ID

        Returns:
            The OAuth client ID
        """
        interaction = await self.find_active_by_reference(client_reference)
        client_id = getattr(interaction.details, "client_id", None) if interaction else None
        if client_id:
            logfire.info(
                "Client resolved from interaction",
                interaction_id=client_reference,
                client_id=client_id,
            )
            return client_id
        return client_reference
