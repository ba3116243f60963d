"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable, compared by value.

    Stored as JSON columns, so unknown keys from older rows are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")
