"""Canonical membership notification."""

from typing import Optional

from bridge.domain.model.common import DomainModel
from bridge.domain.value import ACTIVE_MEMBERSHIP_STATUSES, TelegramUserId, UpdateKind


class MembershipNotification(DomainModel):
    """A membership change, independent of how Telegram wrapped it."""

    channel_id: str
    status: str
    telegram_user_id: Optional[TelegramUserId] = None
    invite_link: Optional[str] = None
    update_kind: UpdateKind = UpdateKind.CHAT_MEMBER

    @property
    def is_active_membership(self) -> bool:
        """Whether the new status puts the user inside the chat."""
        return self.status in ACTIVE_MEMBERSHIP_STATUSES
