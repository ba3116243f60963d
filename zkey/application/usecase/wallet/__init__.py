"""Wallet challenge-response use cases."""

from .get_nonce import GetNonceUseCase
from .unlink_wallet import UnlinkWalletUseCase
from .wallet_login import WalletLoginUseCase

__all__ = ["GetNonceUseCase", "UnlinkWalletUseCase", "WalletLoginUseCase"]
