"""Verify OTP use case."""

from pydantic import Field

from zkey.application.usecase.base import CamelModel, TokenPairResponse
from zkey.domain.service import OtpService


class VerifyOtpRequest(CamelModel):
    """OTP verification request."""

    identifier: str = Field(min_length=1)
    code: str = Field(min_length=1, max_length=16)


class VerifyOtpUseCase:
    """Use case for exchanging a one-time password for tokens."""

    def __init__(self, otp_service: OtpService) -> None:
        self.otp_service = otp_service

    async def execute(self, request: VerifyOtpRequest) -> TokenPairResponse:
        """Raises InvalidOrExpiredCodeError for any failed match."""
        tokens = await self.otp_service.verify_code(
            request.identifier.strip(), request.code.strip()
        )
        return TokenPairResponse.from_pair(tokens)
