"""Configuration providers.

Not mockable: tests override values through environment variables or by
building ``Settings`` themselves.
"""

from dishka import Scope, provide

from zkey.config import AuthSettings, InteractionSettings, NotificationSettings, Settings
from zkey.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Loads ``Settings`` once and exposes the groups services depend on."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_interaction_settings(self, settings: Settings) -> InteractionSettings:
        return settings.interactions

    @provide
    def provide_notification_settings(
        self, settings: Settings
    ) -> NotificationSettings:
        return settings.notifications
