"""Shared base for domain entities."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utc_now() -> datetime:
    """Timezone-aware default for entity timestamps."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Immutable entity. Changes go through ``model_copy(update=...)``."""

    model_config = ConfigDict(frozen=True)
