"""Domain services."""

from .base import Service
from .event_emitter import EventDispatcher, EventEmitter
from .fingerprint import fingerprint_invite_link
from .invite_issuer import InviteLinkIssuer
from .invite_service import InviteService
from .join_matcher import JoinMatcher, MatchResult

__all__ = [
    "EventDispatcher",
    "EventEmitter",
    "InviteLinkIssuer",
    "InviteService",
    "JoinMatcher",
    "MatchResult",
    "Service",
    "fingerprint_invite_link",
]
