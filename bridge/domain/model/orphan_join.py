"""Orphan join entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bridge.domain.model.common import DomainModel, utcnow
from bridge.domain.value import LinkFingerprint, OrphanJoinId, TelegramUserId


class OrphanJoin(DomainModel):
    """A join whose invite link matched no issued invite.

    Append-only diagnostic record. Typical causes are links created by hand
    in the Telegram client, links issued before the lookup index existed, or
    a mangled update body.
    """

    id: OrphanJoinId
    invite_link: str
    link_fingerprint: LinkFingerprint
    telegram_user_id: Optional[TelegramUserId] = None
    channel_id: str
    received_at: datetime = Field(default_factory=utcnow)
