"""In-memory invite request repository for testing."""

import asyncio
from datetime import datetime
from typing import Optional

from bridge.domain.model.common import utcnow
from bridge.domain.model.invite_request import InviteLookup, InviteRequest
from bridge.domain.repository.invite_request import InviteRequestRepository
from bridge.domain.value import (
    InviteLink,
    LinkFingerprint,
    RequestId,
    SubjectId,
    TelegramUserId,
)


class InMemoryInviteRequestRepository(InviteRequestRepository):
    """In-memory implementation of InviteRequestRepository for testing.

    Writes hold a lock so that the check-and-set steps stay atomic even when
    a test interleaves many coroutines.
    """

    def __init__(self) -> None:
        self._requests: dict[RequestId, InviteRequest] = {}
        self._lookup: dict[str, InviteLookup] = {}
        self._lock = asyncio.Lock()

    async def get_by_request_id(self, request_id: RequestId) -> Optional[InviteRequest]:
        """Find an invite request by request id."""
        return self._requests.get(request_id)

    async def create_if_absent(
        self,
        request_id: RequestId,
        subject_id: SubjectId,
        invite_link: InviteLink,
        link_fingerprint: LinkFingerprint,
    ) -> tuple[InviteRequest, bool]:
        """Store the request and its lookup entry unless one exists."""
        async with self._lock:
            existing = self._requests.get(request_id)
            if existing is not None:
                return existing, True

            now = utcnow()
            invite_request = InviteRequest(
                request_id=request_id,
                subject_id=subject_id,
                invite_link=invite_link,
                link_fingerprint=link_fingerprint,
                created_at=now,
            )
            self._requests[request_id] = invite_request
            self._lookup.setdefault(
                link_fingerprint.root,
                InviteLookup(
                    link_fingerprint=link_fingerprint,
                    request_id=request_id,
                    subject_id=subject_id,
                    invite_link=invite_link,
                    created_at=now,
                ),
            )
            return invite_request, False

    async def get_by_fingerprint(
        self, link_fingerprint: LinkFingerprint
    ) -> Optional[InviteLookup]:
        """Find the lookup entry for a fingerprint."""
        return self._lookup.get(link_fingerprint.root)

    async def mark_joined_if_not_already(
        self,
        request_id: RequestId,
        joined_by_user_id: TelegramUserId,
        joined_at: datetime,
    ) -> bool:
        """Flip joined unless the request is unknown or already joined."""
        async with self._lock:
            current = self._requests.get(request_id)
            if current is None or current.joined:
                return False
            self._requests[request_id] = current.model_copy(
                update={
                    "joined": True,
                    "joined_by_user_id": joined_by_user_id,
                    "joined_at": joined_at,
                }
            )
            return True

    def lookup_count(self, request_id: RequestId) -> int:
        """Number of lookup entries pointing at a request."""
        return sum(1 for entry in self._lookup.values() if entry.request_id == request_id)
