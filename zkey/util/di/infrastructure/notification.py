"""Notification infrastructure providers."""

from dishka import Scope, provide

from zkey.adapter.brevo import BrevoEmailGateway
from zkey.adapter.labsmobile import LabsMobileSmsGateway
from zkey.config import NotificationSettings
from zkey.domain.service import EmailGateway, SmsGateway
from zkey.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notifications"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider (Brevo email, LabsMobile SMS).

    Gateways hold no credentials: those are resolved per tenant and
    application at send time.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_gateway(self, settings: NotificationSettings) -> EmailGateway:
        """Provide Brevo email gateway."""
        return BrevoEmailGateway(
            base_url=settings.brevo_base_url,
            default_sender_name=settings.default_sender_name,
            timeout=settings.timeout_seconds,
        )

    @provide(scope=Scope.APP)
    def get_sms_gateway(self, settings: NotificationSettings) -> SmsGateway:
        """Provide LabsMobile SMS gateway."""
        return LabsMobileSmsGateway(
            endpoint=settings.labsmobile_base_url,
            timeout=settings.timeout_seconds,
        )
