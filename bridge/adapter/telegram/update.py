"""Telegram webhook update parsing.

Membership changes arrive as a ChatMemberUpdated object, either under the
update's chat_member key (other users, needs allowed_updates=["chat_member"]),
under my_chat_member (the bot itself), or as the bare object when a relay
forwards it unwrapped. normalize_update() folds all three into one
MembershipNotification.
"""

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from bridge.domain.error import ValidationError
from bridge.domain.model.notification import MembershipNotification
from bridge.domain.value import TelegramUserId, UpdateKind


class TelegramUser(BaseModel):
    """Telegram User (only the fields the bridge reads)."""

    id: int
    is_bot: bool = False
    username: str | None = None


class TelegramChat(BaseModel):
    """Telegram Chat."""

    id: int
    type: str | None = None
    title: str | None = None


class ChatMember(BaseModel):
    """Telegram ChatMember, any variant."""

    status: str
    user: TelegramUser | None = None


class ChatInviteLink(BaseModel):
    """Telegram ChatInviteLink."""

    invite_link: str | None = None
    name: str | None = None
    member_limit: int | None = None


class ChatMemberUpdated(BaseModel):
    """Telegram ChatMemberUpdated."""

    chat: TelegramChat
    new_chat_member: ChatMember
    old_chat_member: ChatMember | None = None
    invite_link: ChatInviteLink | None = None
    date: int | None = None


class TelegramUpdate(BaseModel):
    """Telegram Update restricted to membership variants."""

    update_id: int | None = None
    chat_member: ChatMemberUpdated | None = None
    my_chat_member: ChatMemberUpdated | None = None


def _to_notification(
    updated: ChatMemberUpdated, kind: UpdateKind
) -> MembershipNotification:
    user = updated.new_chat_member.user
    return MembershipNotification(
        channel_id=str(updated.chat.id),
        status=updated.new_chat_member.status,
        telegram_user_id=TelegramUserId(str(user.id)) if user else None,
        invite_link=updated.invite_link.invite_link if updated.invite_link else None,
        update_kind=kind,
    )


def normalize_update(payload: Any) -> MembershipNotification | None:
    """Turn a webhook body into a MembershipNotification.

    Args:
        payload: Decoded JSON body

    Returns:
        The notification, or None if the update carries no membership change
        (messages, callback queries, ...)

    Raises:
        ValidationError: If a membership change is present but malformed
    """
    if not isinstance(payload, dict):
        raise ValidationError("Update body must be a JSON object")

    try:
        if payload.get("chat_member") is not None:
            update = TelegramUpdate.model_validate(payload)
            return _to_notification(update.chat_member, UpdateKind.CHAT_MEMBER)

        if payload.get("my_chat_member") is not None:
            update = TelegramUpdate.model_validate(payload)
            return _to_notification(update.my_chat_member, UpdateKind.MY_CHAT_MEMBER)

        if "new_chat_member" in payload and "chat" in payload:
            updated = ChatMemberUpdated.model_validate(payload)
            return _to_notification(updated, UpdateKind.BARE)
    except PydanticValidationError as e:
        raise ValidationError(f"Malformed membership update: {e.error_count()} errors")

    return None
