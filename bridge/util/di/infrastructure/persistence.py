"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from bridge.config import Settings
from bridge.domain.repository import InviteRequestRepository, OrphanJoinRepository
from bridge.persistence.database import create_engine, create_session_factory
from bridge.persistence.repository import (
    PostgresInviteRequestRepository,
    PostgresOrphanJoinRepository,
)
from bridge.util.di.base import ProviderBase
from bridge.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Repositories commit their own writes; anything left pending is
        committed when the request ends, or rolled back on error.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_invite_request_repository(
        self, session: AsyncSession
    ) -> InviteRequestRepository:
        """Provide InviteRequest repository."""
        return PostgresInviteRequestRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_orphan_join_repository(self, session: AsyncSession) -> OrphanJoinRepository:
        """Provide OrphanJoin repository."""
        return PostgresOrphanJoinRepository(session)
