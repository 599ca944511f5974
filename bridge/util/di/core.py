"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from bridge.config import Settings, TelegramSettings, WebEngageSettings
from bridge.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_telegram_settings(self, settings: Settings) -> TelegramSettings:
        """Provide Telegram settings."""
        return settings.telegram

    @provide(scope=Scope.APP)
    def provide_webengage_settings(self, settings: Settings) -> WebEngageSettings:
        """Provide WebEngage settings."""
        return settings.webengage
