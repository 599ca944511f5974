"""Unit tests for invite request model and value objects."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from bridge.domain.model import InviteRequest, MembershipNotification
from bridge.domain.service import fingerprint_invite_link
from bridge.domain.value import (
    InviteLink,
    JoinState,
    LinkFingerprint,
    RequestId,
    SubjectId,
    TelegramUserId,
)


def _invite_request(**overrides) -> InviteRequest:
    link = "https://t.me/+AbCdEf123"
    fields = {
        "request_id": RequestId("txn-1"),
        "subject_id": SubjectId("user-1"),
        "invite_link": InviteLink(link),
        "link_fingerprint": fingerprint_invite_link(link),
    }
    fields.update(overrides)
    return InviteRequest(**fields)


class TestInviteRequest:
    """Tests for InviteRequest."""

    def test_new_request_is_issued(self):
        """A fresh request should be in the issued state."""
        invite_request = _invite_request()

        assert invite_request.joined is False
        assert invite_request.state == JoinState.ISSUED
        assert invite_request.joined_at is None
        assert invite_request.joined_by_user_id is None

    def test_joined_request_requires_details(self):
        """joined=True without joined_at/joined_by_user_id should be rejected."""
        with pytest.raises(ValidationError):
            _invite_request(joined=True)

    def test_joined_request_with_details(self):
        """A joined request with details should be in the joined state."""
        invite_request = _invite_request(
            joined=True,
            joined_by_user_id=TelegramUserId("4242"),
            joined_at=datetime.now(timezone.utc),
        )

        assert invite_request.state == JoinState.JOINED

    def test_is_immutable(self):
        """Domain models should be frozen."""
        invite_request = _invite_request()

        with pytest.raises(ValidationError):
            invite_request.joined = True


class TestValueObjects:
    """Tests for link value objects."""

    def test_empty_invite_link_rejected(self):
        """Invite links must not be empty."""
        with pytest.raises(ValidationError):
            InviteLink("")

    def test_fingerprint_must_be_hex_digest(self):
        """Fingerprints must be 64 lowercase hex characters."""
        with pytest.raises(ValidationError):
            LinkFingerprint("not-a-digest")
        with pytest.raises(ValidationError):
            LinkFingerprint("A" * 64)

        assert LinkFingerprint("a" * 64).root == "a" * 64


class TestMembershipNotification:
    """Tests for MembershipNotification."""

    @pytest.mark.parametrize("status", ["member", "administrator", "creator"])
    def test_active_statuses(self, status):
        """Member, administrator and creator count as being in the channel."""
        notification = MembershipNotification(channel_id="-100", status=status)

        assert notification.is_active_membership is True

    @pytest.mark.parametrize("status", ["left", "kicked", "restricted"])
    def test_inactive_statuses(self, status):
        """Other statuses do not count as a join."""
        notification = MembershipNotification(channel_id="-100", status=status)

        assert notification.is_active_membership is False
