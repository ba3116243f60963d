"""Base use case and shared request/response models."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from zkey.domain.service import TokenPair


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class CamelModel(BaseModel):
    """Model exchanged with the hosted login surface in camelCase.

    Accepts both camelCase and snake_case field names on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenPairResponse(CamelModel):
    """Access/refresh token pair."""

    access_token: str
    refresh_token: str

    @classmethod
    def from_pair(cls, pair: TokenPair) -> "TokenPairResponse":
        return cls(access_token=pair.access_token, refresh_token=pair.refresh_token)
