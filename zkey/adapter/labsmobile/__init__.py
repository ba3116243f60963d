"""LabsMobile SMS gateway."""

from .client import LabsMobileSmsGateway, MockSmsGateway, SentSms

__all__ = ["LabsMobileSmsGateway", "MockSmsGateway", "SentSms"]
