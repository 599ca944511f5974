"""Repository interfaces for the join bridge.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from bridge.domain.repository.invite_request import InviteRequestRepository
from bridge.domain.repository.orphan_join import OrphanJoinRepository

__all__ = [
    "InviteRequestRepository",
    "OrphanJoinRepository",
]
