"""OAuth2/OIDC authorization-code use cases."""

from .authorize import AuthorizeUseCase
from .exchange_code import ExchangeCodeUseCase
from .get_interaction import GetInteractionUseCase
from .login_interaction import LoginInteractionUseCase

__all__ = [
    "AuthorizeUseCase",
    "ExchangeCodeUseCase",
    "GetInteractionUseCase",
    "LoginInteractionUseCase",
]
