"""Domain model entities for the join bridge."""

from bridge.domain.model.invite_request import InviteLookup, InviteRequest
from bridge.domain.model.notification import MembershipNotification
from bridge.domain.model.orphan_join import OrphanJoin

__all__ = [
    "InviteRequest",
    "InviteLookup",
    "MembershipNotification",
    "OrphanJoin",
]
