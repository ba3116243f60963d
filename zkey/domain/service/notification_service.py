"""Notification dispatch domain service and gateway interfaces."""

from abc import ABC, abstractmethod

import logfire

from zkey.domain.value import EmailCredentials, SmsCredentials

from .base import Service


class EmailGateway(ABC):
    """Transactional email gateway interface."""

    @abstractmethod
    async def send_email(
        self, credentials: EmailCredentials, to: str, subject: str, text: str
    ) -> None:
        """Send a plain-text email.

        Args:
            credentials: Gateway credentials resolved for the sender
            to: Recipient address
            subject: Subject line
            text: Plain-text body
        """
        pass


class SmsGateway(ABC):
    """SMS gateway interface."""

    @abstractmethod
    async def send_sms(self, credentials: SmsCredentials, to: str, text: str) -> None:
        """Send a text message.

        Args:
            credentials: Gateway credentials resolved for the sender
            to: Recipient phone number
            text: Message body
        """
        pass


class NotificationService(Service):
    """Domain service dispatching messages through the configured gateways."""

    def __init__(self, email_gateway: EmailGateway, sms_gateway: SmsGateway) -> None:
        """Initialize notification service.

        Args:
            email_gateway: Email gateway
            sms_gateway: SMS gateway
        """
        self.email_gateway = email_gateway
        self.sms_gateway = sms_gateway

    async def send_email(
        self, credentials: EmailCredentials, to: str, subject: str, text: str
    ) -> None:
        """Send an email with the given credentials."""
        with logfire.span("notification_service.send_email", sender=credentials.sender_email):
            await self.email_gateway.send_email(credentials, to, subject, text)
            logfire.info("Email dispatched", sender=credentials.sender_email)

    async def send_sms(self, credentials: SmsCredentials, to: str, text: str) -> None:
        """Send an SMS with the given credentials."""
        with logfire.span("notification_service.send_sms", sms_user=credentials.user):
            await self.sms_gateway.send_sms(credentials, to, text)
            logfire.info("SMS dispatched", sms_user=credentials.user)
