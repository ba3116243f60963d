"""Unit tests for the LabsMobile SMS gateway."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from zkey.adapter.error import ProviderError
from zkey.adapter.labsmobile import LabsMobileSmsGateway
from zkey.domain.value import SmsCredentials

ENDPOINT = "https://api.labsmobile.com/json/send"


def _mock_client(
    mock_client_class, status_code: int = 200, body: dict | None = None
) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client_class.return_value.__aenter__.return_value = mock_client
    response = MagicMock()
    response.status_code = status_code
    response.text = "error body"
    response.json.return_value = body if body is not None else {"code": "0"}
    mock_client.post.return_value = response
    return mock_client


class TestLabsMobileSmsGateway:
    """Tests for LabsMobileSmsGateway."""

    @pytest.mark.asyncio
    async def test_posts_message_with_basic_auth(self):
        gateway = LabsMobileSmsGateway(ENDPOINT)
        credentials = SmsCredentials(user="acme", api_key="lm-key", sender_id="ACME")

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = _mock_client(mock_client_class)

            await gateway.send_sms(credentials, "+34600000000", "Your code is 123456")

        args, kwargs = mock_client.post.call_args
        assert args[0] == ENDPOINT
        assert kwargs["auth"] == ("acme", "lm-key")
        assert kwargs["json"] == {
            "message": "Your code is 123456",
            "recipient": [{"msisdn": "34600000000"}],
            "tpoa": "ACME",
        }

    @pytest.mark.asyncio
    async def test_credential_endpoint_wins(self):
        gateway = LabsMobileSmsGateway(ENDPOINT)
        credentials = SmsCredentials(
            user="acme", api_key="lm-key", endpoint="https://sms.acme.example/send"
        )

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = _mock_client(mock_client_class)

            await gateway.send_sms(credentials, "+34600000000", "hi")

        assert mock_client.post.call_args.args[0] == "https://sms.acme.example/send"
        assert "tpoa" not in mock_client.post.call_args.kwargs["json"]

    @pytest.mark.asyncio
    async def test_http_error_raises_provider_error(self):
        gateway = LabsMobileSmsGateway(ENDPOINT)

        with patch("httpx.AsyncClient") as mock_client_class:
            _mock_client(mock_client_class, status_code=500)

            with pytest.raises(ProviderError) as exc_info:
                await gateway.send_sms(
                    SmsCredentials(user="acme", api_key="lm-key"), "+346", "hi"
                )

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_rejection_code_raises_provider_error(self):
        """LabsMobile answers 200 with a non-zero code on rejection."""
        gateway = LabsMobileSmsGateway(ENDPOINT)

        with patch("httpx.AsyncClient") as mock_client_class:
            _mock_client(
                mock_client_class, body={"code": "35", "message": "Not enough credits"}
            )

            with pytest.raises(ProviderError, match="Not enough credits"):
                await gateway.send_sms(
                    SmsCredentials(user="acme", api_key="lm-key"), "+346", "hi"
                )
