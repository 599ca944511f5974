"""In-memory repository implementations for testing."""

from .invite_request import InMemoryInviteRequestRepository
from .orphan_join import InMemoryOrphanJoinRepository

__all__ = [
    "InMemoryInviteRequestRepository",
    "InMemoryOrphanJoinRepository",
]
