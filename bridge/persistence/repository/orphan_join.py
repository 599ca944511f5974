"""PostgreSQL implementation of OrphanJoin repository."""

import logfire
from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bridge.adapter.error import StoreError
from bridge.domain.model import OrphanJoin
from bridge.domain.repository import OrphanJoinRepository
from bridge.persistence.mappers import orphan_join_to_dict, row_to_orphan_join
from bridge.persistence.tables import orphan_joins_table


class PostgresOrphanJoinRepository(OrphanJoinRepository):
    """PostgreSQL implementation of OrphanJoinRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def append(self, orphan: OrphanJoin) -> OrphanJoin:
        """Insert an orphan join and commit.

        Args:
            orphan: Record to store

        Returns:
            The stored record
        """
        stmt = insert(orphan_joins_table).values(**orphan_join_to_dict(orphan))
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            logfire.error("Orphan join insert failed", error=str(e))
            await self.session.rollback()
            raise StoreError(f"append orphan join failed: {e}")
        return orphan

    async def list_recent(self, limit: int = 50) -> list[OrphanJoin]:
        """List the most recent orphan joins, newest first.

        Args:
            limit: Maximum number of results

        Returns:
            List of orphan joins
        """
        stmt = (
            select(orphan_joins_table)
            .order_by(orphan_joins_table.c.received_at.desc())
            .limit(limit)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError(f"list orphan joins failed: {e}")
        return [row_to_orphan_join(dict(row)) for row in result.mappings().all()]
