"""PostgreSQL repository implementations."""

from bridge.persistence.repository.invite_request import PostgresInviteRequestRepository
from bridge.persistence.repository.orphan_join import PostgresOrphanJoinRepository

__all__ = [
    "PostgresInviteRequestRepository",
    "PostgresOrphanJoinRepository",
]
