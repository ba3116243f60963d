"""One-time password routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from zkey.application.usecase.base import TokenPairResponse
from zkey.application.usecase.otp import RequestOtpUseCase, VerifyOtpUseCase
from zkey.application.usecase.otp.request_otp import (
    RequestOtpRequest,
    RequestOtpResponse,
)
from zkey.application.usecase.otp.verify_otp import VerifyOtpRequest

router = APIRouter(prefix="/auth/otp", tags=["otp"], route_class=DishkaRoute)


@router.post("/request", response_model=RequestOtpResponse)
async def request_otp(
    request: RequestOtpRequest,
    request_otp_use_case: FromDishka[RequestOtpUseCase],
) -> RequestOtpResponse:
    """Send a one-time code by email or SMS.

    Example:
        POST /auth/otp/request
        {"identifier": "alice@example.com", "type": "email", "clientId": "shop"}
    """
    return await request_otp_use_case.execute(request)


@router.post("/verify", response_model=TokenPairResponse)
async def verify_otp(
    request: VerifyOtpRequest,
    verify_otp_use_case: FromDishka[VerifyOtpUseCase],
) -> TokenPairResponse:
    """Exchange a one-time code for tokens. A code works once."""
    return await verify_otp_use_case.execute(request)
