"""Invite request and lookup entities.

An invite request is created once per store transaction. The Telegram link
minted for it is indexed by fingerprint so that a later membership update,
which only carries the link, can be traced back to the transaction.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from bridge.domain.model.common import DomainModel, utcnow
from bridge.domain.value import (
    InviteLink,
    JoinState,
    LinkFingerprint,
    RequestId,
    SubjectId,
    TelegramUserId,
)


class InviteRequest(DomainModel):
    """Invite issued for one store transaction.

    Business rules:
    - One invite link per request id; repeat issuance reuses it
    - joined flips from False to True at most once and never back
    - joined implies joined_at and joined_by_user_id are set
    """

    request_id: RequestId
    subject_id: SubjectId
    invite_link: InviteLink
    link_fingerprint: LinkFingerprint
    joined: bool = False
    joined_by_user_id: Optional[TelegramUserId] = None
    created_at: datetime = Field(default_factory=utcnow)
    joined_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_join_fields(self) -> "InviteRequest":
        """A joined request must say who joined and when."""
        if self.joined and (self.joined_at is None or self.joined_by_user_id is None):
            raise ValueError("Joined invite requests need joined_at and joined_by_user_id")
        return self

    @property
    def state(self) -> JoinState:
        """Current lifecycle state."""
        return JoinState.JOINED if self.joined else JoinState.ISSUED


class InviteLookup(DomainModel):
    """Reverse index entry from link fingerprint to request.

    Written together with its InviteRequest and never modified.
    """

    link_fingerprint: LinkFingerprint
    request_id: RequestId
    subject_id: SubjectId
    invite_link: InviteLink
    created_at: datetime = Field(default_factory=utcnow)
