"""Wallet nonce use case."""

from zkey.application.usecase.base import CamelModel
from zkey.domain.service import WalletService


class NonceResponse(CamelModel):
    """Challenge nonce for the wallet to sign."""

    nonce: str


class GetNonceUseCase:
    """Use case for issuing a wallet challenge."""

    def __init__(self, wallet_service: WalletService) -> None:
        self.wallet_service = wallet_service

    async def execute(self, address: str) -> NonceResponse:
        nonce = await self.wallet_service.issue_nonce(address.strip())
        return NonceResponse(nonce=nonce)
