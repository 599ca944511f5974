"""Telegram Bot API adapter."""

from .client import (
    MockTelegramInviteIssuer,
    RealTelegramInviteIssuer,
    TelegramInviteIssuer,
)
from .update import normalize_update

__all__ = [
    "TelegramInviteIssuer",
    "RealTelegramInviteIssuer",
    "MockTelegramInviteIssuer",
    "normalize_update",
]
