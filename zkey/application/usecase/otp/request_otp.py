"""Request OTP use case."""

from pydantic import Field

from zkey.application.usecase.base import CamelModel
from zkey.domain.service import OtpService
from zkey.domain.value import OtpChannel


class RequestOtpRequest(CamelModel):
    """OTP request."""

    identifier: str = Field(min_length=1)
    type: OtpChannel
    client_id: str = Field(min_length=1)  # Client ID or interaction ID


class RequestOtpResponse(CamelModel):
    """OTP request acknowledgement."""

    success: bool = True


class RequestOtpUseCase:
    """Use case for sending a one-time password."""

    def __init__(self, otp_service: OtpService) -> None:
        self.otp_service = otp_service

    async def execute(self, request: RequestOtpRequest) -> RequestOtpResponse:
        """Issue and deliver a code.

        Succeeds even when the tenant has no gateway credentials configured.

        Raises:
            NotFoundError: If the application or user does not exist
        """
        await self.otp_service.request_code(
            request.identifier.strip(), request.type, request.client_id
        )
        return RequestOtpResponse()
