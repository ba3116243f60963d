"""Brevo transactional email gateway."""

from .client import BrevoEmailGateway, MockEmailGateway, SentEmail

__all__ = ["BrevoEmailGateway", "MockEmailGateway", "SentEmail"]
