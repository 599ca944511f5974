"""Invite request repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from bridge.domain.model.invite_request import InviteLookup, InviteRequest
from bridge.domain.value import (
    InviteLink,
    LinkFingerprint,
    RequestId,
    SubjectId,
    TelegramUserId,
)


class InviteRequestRepository(ABC):
    """Repository for invite requests and their fingerprint lookup index.

    Both are written together, so a single repository owns them. Every
    mutating method is atomic on its own; implementations live in the
    persistence layer.
    """

    @abstractmethod
    async def get_by_request_id(self, request_id: RequestId) -> InviteRequest | None:
        """Find an invite request by its request id.

        Args:
            request_id: Store transaction id

        Returns:
            The invite request if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_if_absent(
        self,
        request_id: RequestId,
        subject_id: SubjectId,
        invite_link: InviteLink,
        link_fingerprint: LinkFingerprint,
    ) -> tuple[InviteRequest, bool]:
        """Store an invite request and its lookup entry as one unit.

        When a request with a non-empty invite link already exists for
        request_id nothing is written.

        Args:
            request_id: Store transaction id
            subject_id: End user id
            invite_link: Freshly minted invite link
            link_fingerprint: Fingerprint of invite_link

        Returns:
            Tuple of (stored request, was_already_present)
        """
        pass

    @abstractmethod
    async def get_by_fingerprint(
        self, link_fingerprint: LinkFingerprint
    ) -> InviteLookup | None:
        """Find the lookup entry for an invite link fingerprint.

        Critical path for join matching - must be a keyed read.

        Args:
            link_fingerprint: Fingerprint of the invite link

        Returns:
            The lookup entry if found, None otherwise
        """
        pass

    @abstractmethod
    async def mark_joined_if_not_already(
        self,
        request_id: RequestId,
        joined_by_user_id: TelegramUserId,
        joined_at: datetime,
    ) -> bool:
        """Atomically flip an invite request to joined.

        Must be linearizable per request id: of any number of concurrent
        calls for the same id, exactly one returns True.

        Args:
            request_id: Store transaction id
            joined_by_user_id: Telegram user who joined
            joined_at: Join time

        Returns:
            True if this call performed the transition, False if the request
            is unknown or was already joined
        """
        pass
