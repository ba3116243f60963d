"""LabsMobile SMS client.

Sends SMS through the LabsMobile JSON API with HTTP basic authentication
(account user, API token).
"""

from dataclasses import dataclass

import httpx
import logfire

from zkey.adapter.error import ProviderError
from zkey.domain.service.notification_service import SmsGateway
from zkey.domain.value import SmsCredentials


class LabsMobileSmsGateway(SmsGateway):
    """SMS gateway backed by the LabsMobile HTTP API."""

    def __init__(self, endpoint: str, timeout: float = 30.0) -> None:
        """Initialize LabsMobile gateway.

        Args:
            endpoint: Default send endpoint, credentials may override it
            timeout: Request timeout in seconds
        """
        self.endpoint = endpoint
        self.timeout = timeout

    async def send_sms(self, credentials: SmsCredentials, to: str, text: str) -> None:
        """Send a text message.

        Raises:
            ProviderError: If LabsMobile rejects the message or is unreachable
        """
        payload: dict = {
            "message": text,
            "recipient": [{"msisdn": to.lstrip("+")}],
        }
        if credentials.sender_id:
            payload["tpoa"] = credentials.sender_id

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    credentials.endpoint or self.endpoint,
                    json=payload,
                    auth=(credentials.user, credentials.api_key),
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("LabsMobile HTTP error", error=str(e))
            raise ProviderError("labsmobile", f"HTTP error sending SMS: {e}")

        if response.status_code >= 400:
            logfire.error(
                "LabsMobile send failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(
                "labsmobile",
                f"Send failed: {response.status_code}",
                status_code=response.status_code,
            )

        # LabsMobile reports rejections with HTTP 200 and a non-zero code
        try:
            result = response.json()
        except ValueError:
            raise ProviderError("labsmobile", "Unreadable response")
        if str(result.get("code", "0")) != "0":
            logfire.error(
                "LabsMobile rejected message",
                code=result.get("code"),
                error=result.get("message"),
            )
            raise ProviderError("labsmobile", f"Rejected: {result.get('message')}")

        logfire.info("LabsMobile SMS accepted")


@dataclass(frozen=True)
class SentSms:
    """SMS captured by the mock gateway."""

    credentials: SmsCredentials
    to: str
    text: str


class MockSmsGateway(SmsGateway):
    """Mock SMS gateway for testing.

    Records messages instead of sending them.
    """

    def __init__(self) -> None:
        self.sent: list[SentSms] = []

    async def send_sms(self, credentials: SmsCredentials, to: str, text: str) -> None:
        self.sent.append(SentSms(credentials, to, text))
