"""Unit tests for HandleMembershipUpdateUseCase."""

import pytest

from bridge.adapter.error import StoreError
from bridge.application.usecase.invite import CreateInviteUseCase
from bridge.application.usecase.invite.create_invite import CreateInviteRequest
from bridge.application.usecase.membership import HandleMembershipUpdateUseCase
from bridge.application.usecase.membership.handle_membership_update import (
    HandleMembershipUpdateRequest,
)
from bridge.domain.error import AuthError
from bridge.domain.repository import InviteRequestRepository
from bridge.domain.value import MatchOutcome
from tests.payloads import TEST_STORE_API_KEY, make_chat_member_update
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _issue(env) -> str:
    use_case = await env.get(CreateInviteUseCase)
    response = await use_case.execute(
        CreateInviteRequest.model_validate(
            {"api_key": TEST_STORE_API_KEY, "transactionId": "txn-1", "userId": "u-1"}
        )
    )
    return response.invite_link


class TestHandleMembershipUpdateUseCase:
    """Tests for HandleMembershipUpdateUseCase."""

    @pytest.mark.asyncio
    async def test_join_is_matched(self, unit_env):
        """A join through an issued link should be reported as joined."""
        # Arrange
        link = await _issue(unit_env)
        use_case = await unit_env.get(HandleMembershipUpdateUseCase)

        # Act
        response = await use_case.execute(
            HandleMembershipUpdateRequest(payload=make_chat_member_update(link))
        )

        # Assert
        assert response.ok is True
        assert response.outcome == MatchOutcome.JOINED
        assert response.request_id == "txn-1"

    @pytest.mark.asyncio
    async def test_non_membership_update_ignored(self, unit_env):
        """Updates without a membership change should be ignored."""
        use_case = await unit_env.get(HandleMembershipUpdateUseCase)

        response = await use_case.execute(
            HandleMembershipUpdateRequest(payload={"update_id": 1, "message": {}})
        )

        assert response.outcome == MatchOutcome.IGNORED

    @pytest.mark.parametrize("payload", [None, "garbage", [1, 2, 3]])
    @pytest.mark.asyncio
    async def test_malformed_payload_acknowledged(self, unit_env, payload):
        """Malformed bodies should be acknowledged with an error outcome."""
        use_case = await unit_env.get(HandleMembershipUpdateUseCase)

        response = await use_case.execute(
            HandleMembershipUpdateRequest(payload=payload)
        )

        assert response.ok is True
        assert response.outcome == MatchOutcome.ERROR

    @pytest.mark.asyncio
    async def test_store_failure_acknowledged(self, unit_env):
        """Store failures should be logged and acknowledged, not raised."""
        # Arrange
        link = await _issue(unit_env)
        use_case = await unit_env.get(HandleMembershipUpdateUseCase)
        repo = await unit_env.get(InviteRequestRepository)

        async def broken(*args, **kwargs):
            raise StoreError("connection reset")

        repo.mark_joined_if_not_already = broken

        # Act
        response = await use_case.execute(
            HandleMembershipUpdateRequest(payload=make_chat_member_update(link))
        )

        # Assert
        assert response.ok is True
        assert response.outcome == MatchOutcome.ERROR

    @pytest.mark.asyncio
    async def test_secret_checked_when_configured(self, unit_env, monkeypatch):
        """A configured webhook secret must match the header."""
        # Arrange
        monkeypatch.setenv("TELEGRAM__WEBHOOK_SECRET", "hook-secret")
        use_case = await unit_env.get(HandleMembershipUpdateUseCase)

        # Act & Assert
        with pytest.raises(AuthError):
            await use_case.execute(
                HandleMembershipUpdateRequest(payload={}, secret_token="wrong")
            )
        with pytest.raises(AuthError):
            await use_case.execute(HandleMembershipUpdateRequest(payload={}))

        response = await use_case.execute(
            HandleMembershipUpdateRequest(payload={}, secret_token="hook-secret")
        )
        assert response.outcome == MatchOutcome.IGNORED

    @pytest.mark.asyncio
    async def test_secret_not_required_when_unset(self, unit_env):
        """Without a configured secret any caller is accepted."""
        use_case = await unit_env.get(HandleMembershipUpdateUseCase)

        response = await use_case.execute(
            HandleMembershipUpdateRequest(payload={}, secret_token="anything")
        )

        assert response.outcome == MatchOutcome.IGNORED
