"""PostgreSQL implementation of InviteRequest repository."""

from datetime import datetime
from typing import NoReturn, Optional

import logfire
from sqlalchemy import and_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bridge.adapter.error import StoreError
from bridge.domain.model import InviteLookup, InviteRequest
from bridge.domain.model.common import utcnow
from bridge.domain.repository import InviteRequestRepository
from bridge.domain.value import (
    InviteLink,
    LinkFingerprint,
    RequestId,
    SubjectId,
    TelegramUserId,
)
from bridge.persistence.mappers import (
    invite_lookup_to_dict,
    invite_request_to_dict,
    row_to_invite_lookup,
    row_to_invite_request,
)
from bridge.persistence.tables import invite_lookup_table, invite_requests_table


class PostgresInviteRequestRepository(InviteRequestRepository):
    """PostgreSQL implementation of InviteRequestRepository.

    Mutating methods commit before returning: a join event may only be sent
    once the transition that licenses it is durable.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def get_by_request_id(self, request_id: RequestId) -> Optional[InviteRequest]:
        """Find an invite request by request id.

        Rows without an invite link are treated as absent.

        Args:
            request_id: Request id to look up

        Returns:
            InviteRequest if found, None otherwise
        """
        stmt = select(invite_requests_table).where(
            and_(
                invite_requests_table.c.request_id == request_id,
                invite_requests_table.c.invite_link != "",
            )
        )
        try:
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            # Release the connection before the caller calls the provider
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("get_by_request_id", e)
        return row_to_invite_request(dict(row)) if row else None

    async def create_if_absent(
        self,
        request_id: RequestId,
        subject_id: SubjectId,
        invite_link: InviteLink,
        link_fingerprint: LinkFingerprint,
    ) -> tuple[InviteRequest, bool]:
        """Insert the request and its lookup row in one transaction.

        The insert takes over a pre-existing row only when that row has no
        invite link, resetting its join state; otherwise the stored request
        wins.

        Args:
            request_id: Store transaction id
            subject_id: End user id
            invite_link: Freshly minted invite link
            link_fingerprint: Fingerprint of invite_link

        Returns:
            Tuple of (stored request, was_already_present)
        """
        now = utcnow()
        candidate = InviteRequest(
            request_id=request_id,
            subject_id=subject_id,
            invite_link=invite_link,
            link_fingerprint=link_fingerprint,
            created_at=now,
        )
        lookup = InviteLookup(
            link_fingerprint=link_fingerprint,
            request_id=request_id,
            subject_id=subject_id,
            invite_link=invite_link,
            created_at=now,
        )

        stmt = insert(invite_requests_table).values(**invite_request_to_dict(candidate))
        stmt = stmt.on_conflict_do_update(
            index_elements=[invite_requests_table.c.request_id],
            set_={
                "subject_id": stmt.excluded.subject_id,
                "invite_link": stmt.excluded.invite_link,
                "link_fingerprint": stmt.excluded.link_fingerprint,
                "created_at": stmt.excluded.created_at,
                "joined": False,
                "joined_by_user_id": None,
                "joined_at": None,
            },
            where=invite_requests_table.c.invite_link == "",
        ).returning(*invite_requests_table.c)

        try:
            result = await self.session.execute(stmt)
            row = result.mappings().first()

            if row is None:
                # Conflict with a request that already has a link
                existing = await self.session.execute(
                    select(invite_requests_table).where(
                        invite_requests_table.c.request_id == request_id
                    )
                )
                existing_row = existing.mappings().one()
                await self.session.commit()
                return row_to_invite_request(dict(existing_row)), True

            await self.session.execute(
                insert(invite_lookup_table)
                .values(**invite_lookup_to_dict(lookup))
                .on_conflict_do_nothing(
                    index_elements=[invite_lookup_table.c.link_fingerprint]
                )
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("create_if_absent", e)

        return row_to_invite_request(dict(row)), False

    async def get_by_fingerprint(
        self, link_fingerprint: LinkFingerprint
    ) -> Optional[InviteLookup]:
        """Find the lookup entry for a fingerprint.

        Args:
            link_fingerprint: Fingerprint to look up

        Returns:
            InviteLookup if found, None otherwise
        """
        stmt = select(invite_lookup_table).where(
            invite_lookup_table.c.link_fingerprint == link_fingerprint.root
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self._fail("get_by_fingerprint", e)
        row = result.mappings().first()
        return row_to_invite_lookup(dict(row)) if row else None

    async def mark_joined_if_not_already(
        self,
        request_id: RequestId,
        joined_by_user_id: TelegramUserId,
        joined_at: datetime,
    ) -> bool:
        """Flip joined with a conditional UPDATE.

        The row lock taken by UPDATE serializes concurrent callers; the loser
        re-evaluates joined IS FALSE after the winner commits and matches
        nothing.

        Args:
            request_id: Store transaction id
            joined_by_user_id: Telegram user who joined
            joined_at: Join time

        Returns:
            True if this call performed the transition
        """
        stmt = (
            update(invite_requests_table)
            .where(
                and_(
                    invite_requests_table.c.request_id == request_id,
                    invite_requests_table.c.joined.is_(False),
                )
            )
            .values(
                joined=True,
                joined_by_user_id=joined_by_user_id,
                joined_at=joined_at,
            )
            .returning(invite_requests_table.c.request_id)
        )
        try:
            result = await self.session.execute(stmt)
            fired = result.first() is not None
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("mark_joined_if_not_already", e)
        return fired

    async def _fail(self, operation: str, error: SQLAlchemyError) -> NoReturn:
        """Roll back and raise StoreError."""
        logfire.error(
            "Invite store operation failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
        )
        await self.session.rollback()
        raise StoreError(f"{operation} failed: {error}")
