"""Refresh token repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from zkey.domain.model.refresh_token import RefreshToken


class RefreshTokenRepository(ABC):
    """Repository for refresh token records."""

    @abstractmethod
    async def save(self, refresh_token: RefreshToken) -> RefreshToken:
        """Persist a refresh token record."""
        pass

    @abstractmethod
    async def find_by_hash(self, token_hash: str) -> Optional[RefreshToken]:
        """Find a refresh token record by the hash of the raw token.

        Args:
            token_hash: Hex digest of the raw refresh token

        Returns:
            The record if found, None otherwise
        """
        pass
