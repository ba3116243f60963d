"""Wallet login use case."""

from pydantic import Field

from zkey.application.usecase.base import CamelModel, TokenPairResponse
from zkey.domain.service import WalletService


class WalletLoginRequest(CamelModel):
    """Wallet login request."""

    address: str = Field(min_length=1)
    signature: str = Field(min_length=1)


class WalletLoginUseCase:
    """Use case for logging in with a signed wallet challenge."""

    def __init__(self, wallet_service: WalletService) -> None:
        self.wallet_service = wallet_service

    async def execute(self, request: WalletLoginRequest) -> TokenPairResponse:
        """Raises ChallengeNotFoundError or SignatureInvalidError on failure."""
        tokens = await self.wallet_service.login(
            request.address.strip(), request.signature.strip()
        )
        return TokenPairResponse.from_pair(tokens)
