"""Domain value objects for the join bridge."""

from bridge.domain.value.identifiers import (
    OrphanJoinId,
    RequestId,
    SubjectId,
    TelegramUserId,
)
from bridge.domain.value.types import (
    ACTIVE_MEMBERSHIP_STATUSES,
    InviteLink,
    JoinState,
    LinkFingerprint,
    MatchOutcome,
    MembershipStatus,
    UpdateKind,
)

__all__ = [
    # Identifiers
    "RequestId",
    "SubjectId",
    "TelegramUserId",
    "OrphanJoinId",
    # Types
    "ACTIVE_MEMBERSHIP_STATUSES",
    "InviteLink",
    "JoinState",
    "LinkFingerprint",
    "MatchOutcome",
    "MembershipStatus",
    "UpdateKind",
]
