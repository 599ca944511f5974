"""In-memory orphan join repository for testing."""

from bridge.domain.model.orphan_join import OrphanJoin
from bridge.domain.repository.orphan_join import OrphanJoinRepository


class InMemoryOrphanJoinRepository(OrphanJoinRepository):
    """In-memory implementation of OrphanJoinRepository for testing."""

    def __init__(self) -> None:
        self._orphans: list[OrphanJoin] = []

    async def append(self, orphan: OrphanJoin) -> OrphanJoin:
        """Append an orphan join record."""
        self._orphans.append(orphan)
        return orphan

    async def list_recent(self, limit: int = 50) -> list[OrphanJoin]:
        """List the most recent orphan joins, newest first."""
        ordered = sorted(self._orphans, key=lambda o: o.received_at, reverse=True)
        return ordered[:limit]
