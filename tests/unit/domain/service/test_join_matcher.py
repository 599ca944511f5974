"""Unit tests for JoinMatcher."""

import asyncio

import pytest

from bridge.adapter.webengage.client import WebEngageEmitter
from bridge.domain.model import MembershipNotification
from bridge.domain.repository import InviteRequestRepository, OrphanJoinRepository
from bridge.domain.service import EventDispatcher, InviteService, JoinMatcher
from bridge.domain.value import MatchOutcome, RequestId, SubjectId, UpdateKind
from tests.payloads import TEST_CHANNEL_ID
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

JOIN_EVENT = "pass_paid_community_telegram_joined"


async def _issue(env, request_id: str = "txn-1", subject_id: str = "user-1") -> str:
    invite_service = await env.get(InviteService)
    invite_request, _ = await invite_service.issue_invite(
        RequestId(request_id), SubjectId(subject_id)
    )
    return invite_request.invite_link.root


def _notification(invite_link, /, **overrides) -> MembershipNotification:
    fields = {
        "channel_id": TEST_CHANNEL_ID,
        "status": "member",
        "telegram_user_id": "4242",
        "invite_link": invite_link,
        "update_kind": UpdateKind.CHAT_MEMBER,
    }
    fields.update(overrides)
    return MembershipNotification(**fields)


class TestJoinMatched:
    """Tests for joins through issued links."""

    @pytest.mark.asyncio
    async def test_first_join_marks_request_and_emits(self, unit_env):
        """A join through an issued link should flip joined and emit once."""
        # Arrange
        link = await _issue(unit_env)
        join_matcher = await unit_env.get(JoinMatcher)
        dispatcher = await unit_env.get(EventDispatcher)
        emitter = await unit_env.get(WebEngageEmitter)
        repo = await unit_env.get(InviteRequestRepository)

        # Act
        result = await join_matcher.handle(_notification(link))
        await dispatcher.drain()

        # Assert
        assert result.outcome == MatchOutcome.JOINED
        assert result.request_id == "txn-1"

        stored = await repo.get_by_request_id(RequestId("txn-1"))
        assert stored.joined is True
        assert stored.joined_by_user_id == "4242"
        assert stored.joined_at is not None

        events = emitter.named(JOIN_EVENT)
        assert events == [
            {
                "userId": "user-1",
                "eventName": JOIN_EVENT,
                "eventData": {
                    "transactionId": "txn-1",
                    "telegramUserId": "4242",
                    "inviteLink": link,
                },
            }
        ]

    @pytest.mark.asyncio
    async def test_duplicate_join_does_not_emit_again(self, unit_env):
        """A redelivered update should be a no-op."""
        # Arrange
        link = await _issue(unit_env)
        join_matcher = await unit_env.get(JoinMatcher)
        dispatcher = await unit_env.get(EventDispatcher)
        emitter = await unit_env.get(WebEngageEmitter)
        repo = await unit_env.get(InviteRequestRepository)
        await join_matcher.handle(_notification(link))
        joined_at = (await repo.get_by_request_id(RequestId("txn-1"))).joined_at

        # Act
        result = await join_matcher.handle(_notification(link))
        await dispatcher.drain()

        # Assert
        assert result.outcome == MatchOutcome.DUPLICATE
        assert result.request_id == "txn-1"
        assert len(emitter.named(JOIN_EVENT)) == 1
        assert (await repo.get_by_request_id(RequestId("txn-1"))).joined_at == joined_at

    @pytest.mark.asyncio
    async def test_second_user_on_same_link_keeps_first_joiner(self, unit_env):
        """joined_by_user_id should never be overwritten."""
        # Arrange
        link = await _issue(unit_env)
        join_matcher = await unit_env.get(JoinMatcher)
        repo = await unit_env.get(InviteRequestRepository)
        await join_matcher.handle(_notification(link, telegram_user_id="1"))

        # Act
        result = await join_matcher.handle(_notification(link, telegram_user_id="2"))

        # Assert
        assert result.outcome == MatchOutcome.DUPLICATE
        stored = await repo.get_by_request_id(RequestId("txn-1"))
        assert stored.joined_by_user_id == "1"

    @pytest.mark.asyncio
    async def test_concurrent_duplicates_emit_exactly_once(self, unit_env):
        """Racing deliveries of one join should produce one event."""
        # Arrange
        link = await _issue(unit_env)
        join_matcher = await unit_env.get(JoinMatcher)
        dispatcher = await unit_env.get(EventDispatcher)
        emitter = await unit_env.get(WebEngageEmitter)

        # Act
        results = await asyncio.gather(
            *(join_matcher.handle(_notification(link)) for _ in range(10))
        )
        await dispatcher.drain()

        # Assert
        outcomes = [r.outcome for r in results]
        assert outcomes.count(MatchOutcome.JOINED) == 1
        assert outcomes.count(MatchOutcome.DUPLICATE) == 9
        assert len(emitter.named(JOIN_EVENT)) == 1

    @pytest.mark.parametrize("status", ["member", "administrator", "creator"])
    @pytest.mark.asyncio
    async def test_all_active_statuses_match(self, unit_env, status):
        """Any active membership status should count as a join."""
        # Arrange
        link = await _issue(unit_env)
        join_matcher = await unit_env.get(JoinMatcher)

        # Act
        result = await join_matcher.handle(_notification(link, status=status))

        # Assert
        assert result.outcome == MatchOutcome.JOINED

    @pytest.mark.asyncio
    async def test_join_event_disabled(self, unit_env):
        """With the join event off the request is still marked joined."""
        # Arrange
        link = await _issue(unit_env)
        join_matcher = await unit_env.get(JoinMatcher)
        join_matcher.fire_join_event = False
        dispatcher = await unit_env.get(EventDispatcher)
        emitter = await unit_env.get(WebEngageEmitter)
        repo = await unit_env.get(InviteRequestRepository)

        # Act
        result = await join_matcher.handle(_notification(link))
        await dispatcher.drain()

        # Assert
        assert result.outcome == MatchOutcome.JOINED
        assert emitter.named(JOIN_EVENT) == []
        assert (await repo.get_by_request_id(RequestId("txn-1"))).joined is True

    @pytest.mark.asyncio
    async def test_emitter_failure_still_records_join(self, unit_env):
        """A failed emission should not undo the join."""
        # Arrange
        link = await _issue(unit_env)
        join_matcher = await unit_env.get(JoinMatcher)
        dispatcher = await unit_env.get(EventDispatcher)
        emitter = await unit_env.get(WebEngageEmitter)
        repo = await unit_env.get(InviteRequestRepository)
        emitter.fail = True

        # Act
        result = await join_matcher.handle(_notification(link))
        await dispatcher.drain()

        # Assert
        assert result.outcome == MatchOutcome.JOINED
        assert (await repo.get_by_request_id(RequestId("txn-1"))).joined is True

        # A redelivery does not retry the event
        emitter.fail = False
        again = await join_matcher.handle(_notification(link))
        await dispatcher.drain()
        assert again.outcome == MatchOutcome.DUPLICATE
        assert emitter.named(JOIN_EVENT) == []


class TestOrphanJoins:
    """Tests for joins through unknown links."""

    @pytest.mark.asyncio
    async def test_unknown_link_is_recorded_as_orphan(self, unit_env):
        """A join through an unknown link should be logged, not emitted."""
        # Arrange
        join_matcher = await unit_env.get(JoinMatcher)
        dispatcher = await unit_env.get(EventDispatcher)
        emitter = await unit_env.get(WebEngageEmitter)
        orphan_repo = await unit_env.get(OrphanJoinRepository)

        # Act
        result = await join_matcher.handle(_notification("https://t.me/+unknown"))
        await dispatcher.drain()

        # Assert
        assert result.outcome == MatchOutcome.ORPHAN
        assert emitter.events == []

        orphans = await orphan_repo.list_recent()
        assert len(orphans) == 1
        assert orphans[0].invite_link == "https://t.me/+unknown"
        assert orphans[0].telegram_user_id == "4242"
        assert orphans[0].channel_id == TEST_CHANNEL_ID

    @pytest.mark.asyncio
    async def test_orphan_does_not_touch_requests(self, unit_env):
        """An orphan join should leave issued requests unjoined."""
        # Arrange
        await _issue(unit_env)
        join_matcher = await unit_env.get(JoinMatcher)
        repo = await unit_env.get(InviteRequestRepository)

        # Act
        await join_matcher.handle(_notification("https://t.me/+unknown"))

        # Assert
        assert (await repo.get_by_request_id(RequestId("txn-1"))).joined is False


class TestIgnoredUpdates:
    """Tests for updates that are not joins into the channel."""

    @pytest.mark.parametrize(
        ("overrides", "reason"),
        [
            ({"channel_id": "-1009999999999"}, "other_channel"),
            ({"status": "left"}, "inactive_status"),
            ({"status": "kicked"}, "inactive_status"),
            ({"invite_link": None}, "no_invite_link"),
            ({"telegram_user_id": None}, "no_user"),
        ],
    )
    @pytest.mark.asyncio
    async def test_ignored_without_side_effects(self, unit_env, overrides, reason):
        """Irrelevant updates should change nothing."""
        # Arrange
        link = await _issue(unit_env)
        join_matcher = await unit_env.get(JoinMatcher)
        dispatcher = await unit_env.get(EventDispatcher)
        emitter = await unit_env.get(WebEngageEmitter)
        repo = await unit_env.get(InviteRequestRepository)
        orphan_repo = await unit_env.get(OrphanJoinRepository)

        # Act
        result = await join_matcher.handle(_notification(link, **overrides))
        await dispatcher.drain()

        # Assert
        assert result.outcome == MatchOutcome.IGNORED
        assert result.reason == reason
        assert (await repo.get_by_request_id(RequestId("txn-1"))).joined is False
        assert await orphan_repo.list_recent() == []
        assert emitter.named(JOIN_EVENT) == []
