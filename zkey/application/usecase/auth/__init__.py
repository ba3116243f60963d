"""Account use cases: registration, password login and profile."""

from .login import LoginUseCase
from .profile import GetProfileUseCase, UpdateProfileUseCase
from .register import RegisterUseCase

__all__ = [
    "GetProfileUseCase",
    "LoginUseCase",
    "RegisterUseCase",
    "UpdateProfileUseCase",
]
