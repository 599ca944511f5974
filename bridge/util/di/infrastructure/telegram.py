"""Telegram infrastructure providers."""

from dishka import Scope, provide

from bridge.adapter.telegram.client import (
    RealTelegramInviteIssuer,
    TelegramInviteIssuer,
)
from bridge.config import TelegramSettings
from bridge.util.di.base import ProviderBase


class TelegramProvider(ProviderBase):
    """Telegram component base."""

    __mock_component__ = "telegram"


class ProdTelegramProvider(TelegramProvider):
    """Production Telegram provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_telegram_invite_issuer(
        self, telegram_settings: TelegramSettings
    ) -> TelegramInviteIssuer:
        """Provide the Bot API invite issuer.

        Returns:
            Telegram invite issuer
        """
        return RealTelegramInviteIssuer(
            bot_token=telegram_settings.bot_token,
            api_base_url=telegram_settings.api_base_url,
            invite_expiry_hours=telegram_settings.invite_expiry_hours,
            name_max_length=telegram_settings.invite_name_max_length,
            timeout=telegram_settings.timeout_seconds,
        )
