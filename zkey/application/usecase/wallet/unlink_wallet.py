"""Unlink wallet use case."""

from zkey.application.usecase.base import CamelModel
from zkey.domain.service import WalletService
from zkey.domain.value import UserId


class UnlinkWalletResponse(CamelModel):
    """Unlink acknowledgement."""

    success: bool = True


class UnlinkWalletUseCase:
    """Use case for detaching wallets from the authenticated user."""

    def __init__(self, wallet_service: WalletService) -> None:
        self.wallet_service = wallet_service

    async def execute(self, user_id: UserId) -> UnlinkWalletResponse:
        await self.wallet_service.unlink(user_id)
        return UnlinkWalletResponse()
