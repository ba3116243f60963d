"""One-time password use cases."""

from .request_otp import RequestOtpUseCase
from .verify_otp import VerifyOtpUseCase

__all__ = ["RequestOtpUseCase", "VerifyOtpUseCase"]
