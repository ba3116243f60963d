"""In-memory refresh token repository for testing."""

from typing import Optional

from zkey.domain.model.refresh_token import RefreshToken
from zkey.domain.repository.refresh_token import RefreshTokenRepository


class InMemoryRefreshTokenRepository(RefreshTokenRepository):
    """In-memory implementation of RefreshTokenRepository for testing."""

    def __init__(self) -> None:
        self._tokens: dict[str, RefreshToken] = {}

    async def save(self, refresh_token: RefreshToken) -> RefreshToken:
        if refresh_token.token_hash in self._tokens:
            raise ValueError("Duplicate refresh token hash")
        self._tokens[refresh_token.token_hash] = refresh_token
        return refresh_token

    async def find_by_hash(self, token_hash: str) -> Optional[RefreshToken]:
        return self._tokens.get(token_hash)
