"""Domain value objects for the join bridge.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from bridge.domain.value.common import RootValueObject


class JoinState(str, Enum):
    """Lifecycle of an invite request. JOINED is terminal."""

    ISSUED = "issued"
    JOINED = "joined"


class MembershipStatus(str, Enum):
    """Telegram ChatMember status values."""

    CREATOR = "creator"
    ADMINISTRATOR = "administrator"
    MEMBER = "member"
    RESTRICTED = "restricted"
    LEFT = "left"
    KICKED = "kicked"


# Statuses that mean the user is now inside the channel
ACTIVE_MEMBERSHIP_STATUSES = frozenset(
    {
        MembershipStatus.MEMBER.value,
        MembershipStatus.ADMINISTRATOR.value,
        MembershipStatus.CREATOR.value,
    }
)


class UpdateKind(str, Enum):
    """Where a membership change was found in the webhook body."""

    CHAT_MEMBER = "chat_member"
    MY_CHAT_MEMBER = "my_chat_member"
    BARE = "bare"


class MatchOutcome(str, Enum):
    """Result of handling one membership notification."""

    IGNORED = "ignored"
    ORPHAN = "orphan"
    JOINED = "joined"
    DUPLICATE = "duplicate"
    ERROR = "error"


class InviteLink(RootValueObject[str]):
    """Single-use Telegram invite link, e.g. https://t.me/+AbCdEf123."""

    @field_validator("root")
    @classmethod
    def validate_link(cls, v: str) -> str:
        """Validate link is not empty."""
        if len(v) < 1 or len(v) > 2048:
            raise ValueError("Invite link must be 1-2048 characters")
        return v


class LinkFingerprint(RootValueObject[str]):
    """Hex SHA-256 digest of an invite link."""

    @field_validator("root")
    @classmethod
    def validate_digest(cls, v: str) -> str:
        """Validate digest is 64 lowercase hex characters."""
        if not re.fullmatch(r"[0-9a-f]{64}", v):
            raise ValueError("Fingerprint must be 64 lowercase hex characters")
        return v
