"""Join matching domain service.

Per request the state machine is ISSUED -> JOINED, with no way back. A
membership update is resolved through the fingerprint index and flips the
matched request with a single conditional write; only the caller whose write
wins emits the join event, so duplicate or racing deliveries of the same
update produce one event at most.
"""

from uuid import uuid4

import logfire

from bridge.domain.model.common import DomainModel, utcnow
from bridge.domain.model.notification import MembershipNotification
from bridge.domain.model.orphan_join import OrphanJoin
from bridge.domain.repository import InviteRequestRepository, OrphanJoinRepository
from bridge.domain.value import (
    MatchOutcome,
    OrphanJoinId,
    RequestId,
    TelegramUserId,
)
from bridge.util.logging import redact_link

from .base import Service
from .event_emitter import EventDispatcher
from .fingerprint import fingerprint_invite_link


class MatchResult(DomainModel):
    """What happened to one notification."""

    outcome: MatchOutcome
    request_id: RequestId | None = None
    reason: str | None = None


class JoinMatcher(Service):
    """Matches membership updates to issued invites."""

    def __init__(
        self,
        invite_request_repository: InviteRequestRepository,
        orphan_join_repository: OrphanJoinRepository,
        dispatcher: EventDispatcher,
        channel_id: str,
        join_event_name: str,
        fire_join_event: bool = True,
    ) -> None:
        """Initialize join matcher.

        Args:
            invite_request_repository: Invite request repository
            orphan_join_repository: Orphan join log
            dispatcher: Event dispatcher for the join event
            channel_id: The only channel whose joins are matched
            join_event_name: Name of the join event
            fire_join_event: Whether to emit the join event at all
        """
        self.invite_request_repository = invite_request_repository
        self.orphan_join_repository = orphan_join_repository
        self.dispatcher = dispatcher
        self.channel_id = channel_id
        self.join_event_name = join_event_name
        self.fire_join_event = fire_join_event

    def filter_reason(self, notification: MembershipNotification) -> str | None:
        """Explain why a notification is ignored, or None if it is relevant.

        Args:
            notification: Normalized membership update

        Returns:
            Reason string for ignored notifications, None otherwise
        """
        if notification.channel_id != self.channel_id:
            return "other_channel"
        if not notification.is_active_membership:
            return "inactive_status"
        if not notification.invite_link:
            return "no_invite_link"
        if not notification.telegram_user_id:
            return "no_user"
        return None

    async def handle(self, notification: MembershipNotification) -> MatchResult:
        """Process one membership update.

        Args:
            notification: Normalized membership update

        Returns:
            Match result

        Raises:
            StoreError: If a repository call fails
        """
        with logfire.span(
            "join_matcher.handle",
            channel_id=notification.channel_id,
            status=notification.status,
            update_kind=notification.update_kind.value,
        ):
            reason = self.filter_reason(notification)
            if reason:
                logfire.debug("Membership update ignored", reason=reason)
                return MatchResult(outcome=MatchOutcome.IGNORED, reason=reason)

            # Both checked by filter_reason
            invite_link = notification.invite_link or ""
            telegram_user_id = TelegramUserId(notification.telegram_user_id or "")

            fingerprint = fingerprint_invite_link(invite_link)
            lookup = await self.invite_request_repository.get_by_fingerprint(
                fingerprint
            )

            if lookup is None:
                await self.orphan_join_repository.append(
                    OrphanJoin(
                        id=OrphanJoinId(uuid4()),
                        invite_link=invite_link,
                        link_fingerprint=fingerprint,
                        telegram_user_id=telegram_user_id,
                        channel_id=notification.channel_id,
                        received_at=utcnow(),
                    )
                )
                logfire.warn(
                    "Orphan join detected",
                    invite_link=redact_link(invite_link),
                    telegram_user_id=telegram_user_id,
                )
                return MatchResult(outcome=MatchOutcome.ORPHAN)

            fired = await self.invite_request_repository.mark_joined_if_not_already(
                lookup.request_id, telegram_user_id, utcnow()
            )
            if not fired:
                logfire.info(
                    "Join already recorded",
                    request_id=lookup.request_id,
                    telegram_user_id=telegram_user_id,
                )
                return MatchResult(
                    outcome=MatchOutcome.DUPLICATE, request_id=lookup.request_id
                )

            logfire.info(
                "Join recorded",
                request_id=lookup.request_id,
                subject_id=lookup.subject_id,
                telegram_user_id=telegram_user_id,
            )

            if self.fire_join_event:
                await self.dispatcher.dispatch(
                    lookup.subject_id,
                    self.join_event_name,
                    {
                        "transactionId": lookup.request_id,
                        "telegramUserId": telegram_user_id,
                        "inviteLink": lookup.invite_link.root,
                    },
                )

            return MatchResult(outcome=MatchOutcome.JOINED, request_id=lookup.request_id)
