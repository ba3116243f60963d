"""Brevo transactional email client.

Sends plain-text email through the Brevo SMTP API:
POST {base_url}/smtp/email with the account key in the ``api-key`` header.
"""

from dataclasses import dataclass

import httpx
import logfire

from zkey.adapter.error import ProviderError
from zkey.domain.service.notification_service import EmailGateway
from zkey.domain.value import EmailCredentials


class BrevoEmailGateway(EmailGateway):
    """Email gateway backed by the Brevo HTTP API."""

    def __init__(
        self,
        base_url: str,
        default_sender_name: str,
        timeout: float = 30.0,
    ) -> None:
        """Initialize Brevo gateway.

        Args:
            base_url: Brevo API base URL
            default_sender_name: Sender name used when credentials carry none
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.default_sender_name = default_sender_name
        self.timeout = timeout

    async def send_email(
        self, credentials: EmailCredentials, to: str, subject: str, text: str
    ) -> None:
        """Send a plain-text email.

        Raises:
            ProviderError: If Brevo rejects the request or is unreachable
        """
        payload = {
            "sender": {
                "name": credentials.sender_name or self.default_sender_name,
                "email": credentials.sender_email,
            },
            "to": [{"email": to}],
            "subject": subject,
            "textContent": text,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.base_url}/smtp/email",
                    json=payload,
                    headers={
                        "api-key": credentials.api_key,
                        "accept": "application/json",
                    },
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Brevo HTTP error", error=str(e))
            raise ProviderError("brevo", f"HTTP error sending email: {e}")

        if response.status_code >= 400:
            logfire.error(
                "Brevo send failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(
                "brevo",
                f"Send failed: {response.status_code}",
                status_code=response.status_code,
            )

        logfire.info("Brevo email accepted", status_code=response.status_code)


@dataclass(frozen=True)
class SentEmail:
    """Email captured by the mock gateway."""

    credentials: EmailCredentials
    to: str
    subject: str
    text: str


class MockEmailGateway(EmailGateway):
    """Mock email gateway for testing.

    Records messages instead of sending them.
    """

    def __init__(self) -> None:
        self.sent: list[SentEmail] = []

    async def send_email(
        self, credentials: EmailCredentials, to: str, subject: str, text: str
    ) -> None:
        self.sent.append(SentEmail(credentials, to, subject, text))
