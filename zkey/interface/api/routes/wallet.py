"""Wallet challenge-response routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from zkey.application.usecase.base import TokenPairResponse
from zkey.application.usecase.wallet import (
    GetNonceUseCase,
    UnlinkWalletUseCase,
    WalletLoginUseCase,
)
from zkey.application.usecase.wallet.get_nonce import NonceResponse
from zkey.application.usecase.wallet.unlink_wallet import UnlinkWalletResponse
from zkey.application.usecase.wallet.wallet_login import WalletLoginRequest
from zkey.domain.service import TokenService
from zkey.interface.api.auth import bearer_scheme, require_user

router = APIRouter(prefix="/auth", tags=["wallet"], route_class=DishkaRoute)


@router.get("/nonce/{address}", response_model=NonceResponse)
async def get_nonce(
    address: str,
    get_nonce_use_case: FromDishka[GetNonceUseCase],
) -> NonceResponse:
    """Issue a challenge nonce for the wallet to sign.

    Example:
        GET /auth/nonce/GBRPYHIL2C...

        Response:
        {"nonce": "q8y3..."}
    """
    return await get_nonce_use_case.execute(address)


@router.post("/wallet/login", response_model=TokenPairResponse)
async def wallet_login(
    request: WalletLoginRequest,
    wallet_login_use_case: FromDishka[WalletLoginUseCase],
) -> TokenPairResponse:
    """Sign in with a signature over the latest nonce for the address."""
    return await wallet_login_use_case.execute(request)


@router.post("/wallet/unlink", response_model=UnlinkWalletResponse)
async def unlink_wallet(
    unlink_wallet_use_case: FromDishka[UnlinkWalletUseCase],
    token_service: FromDishka[TokenService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UnlinkWalletResponse:
    """Remove the wallet from the authenticated user's account."""
    user_id = require_user(credentials, token_service)
    return await unlink_wallet_use_case.execute(user_id)
