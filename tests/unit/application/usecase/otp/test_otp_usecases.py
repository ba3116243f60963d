"""Unit tests for the OTP use cases."""

import re

import pytest
from dishka import AsyncContainer

from zkey.application.usecase.otp import RequestOtpUseCase, VerifyOtpUseCase
from zkey.application.usecase.otp.request_otp import RequestOtpRequest
from zkey.application.usecase.otp.verify_otp import VerifyOtpRequest
from zkey.domain.error import InvalidOrExpiredCodeError
from zkey.domain.repository import (
    ApplicationRepository,
    TenantRepository,
    UserRepository,
)
from zkey.domain.service import EmailGateway, TokenService
from tests.conftest import make_application, make_tenant, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestOtpUseCases:
    """Tests for RequestOtpUseCase and VerifyOtpUseCase."""

    @pytest.mark.asyncio
    async def test_request_then_verify(self, unit_env: AsyncContainer):
        tenant = make_tenant()
        application = make_application(tenant)
        user = make_user(tenant)
        await (await unit_env.get(TenantRepository)).save(tenant)
        await (await unit_env.get(ApplicationRepository)).save(application)
        await (await unit_env.get(UserRepository)).save(user)
        request_otp = await unit_env.get(RequestOtpUseCase)
        verify_otp = await unit_env.get(VerifyOtpUseCase)
        email_gateway = await unit_env.get(EmailGateway)
        token_service = await unit_env.get(TokenService)

        response = await request_otp.execute(
            RequestOtpRequest(
                identifier=user.primary_email,
                type="email",
                clientId=application.client_id,
            )
        )
        assert response.model_dump(by_alias=True) == {"success": True}

        code = re.search(r"\d{6}", email_gateway.sent[-1].text).group(0)
        tokens = await verify_otp.execute(
            VerifyOtpRequest(identifier=user.primary_email, code=f" {code} ")
        )
        assert token_service.authenticate_access_token(tokens.access_token) == user.id

        with pytest.raises(InvalidOrExpiredCodeError):
            await verify_otp.execute(
                VerifyOtpRequest(identifier=user.primary_email, code=code)
            )

    def test_unknown_channel_is_rejected(self):
        with pytest.raises(ValueError):
            RequestOtpRequest(identifier="a@b.c", type="carrier-pigeon", clientId="c")
