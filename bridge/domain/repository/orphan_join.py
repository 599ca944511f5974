"""Orphan join repository interface."""

from abc import ABC, abstractmethod

from bridge.domain.model.orphan_join import OrphanJoin


class OrphanJoinRepository(ABC):
    """Append-only log of joins that matched no invite."""

    @abstractmethod
    async def append(self, orphan: OrphanJoin) -> OrphanJoin:
        """Append an orphan join record.

        Args:
            orphan: Record to store

        Returns:
            The stored record
        """
        pass

    @abstractmethod
    async def list_recent(self, limit: int = 50) -> list[OrphanJoin]:
        """List the most recent orphan joins, newest first.

        Args:
            limit: Maximum number of results

        Returns:
            List of orphan joins
        """
        pass
