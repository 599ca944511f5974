"""Invite domain service."""

import time

import logfire

from bridge.domain.model.invite_request import InviteRequest
from bridge.domain.repository import InviteRequestRepository
from bridge.domain.value import InviteLink, RequestId, SubjectId
from bridge.util.logging import redact_link

from .base import Service
from .fingerprint import fingerprint_invite_link
from .invite_issuer import InviteLinkIssuer


class InviteService(Service):
    """Domain service for idempotent invite issuance."""

    def __init__(
        self,
        invite_request_repository: InviteRequestRepository,
        invite_issuer: InviteLinkIssuer,
        channel_id: str,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_request_repository: Invite request repository
            invite_issuer: Invite link issuer
            channel_id: Channel that invites admit to
        """
        self.invite_request_repository = invite_request_repository
        self.invite_issuer = invite_issuer
        self.channel_id = channel_id

    async def issue_invite(
        self, request_id: RequestId, subject_id: SubjectId
    ) -> tuple[InviteRequest, bool]:
        """Return the invite for a request, minting one on first call.

        The existence check runs before the provider call so that retried
        requests do not burn single-use links. Two concurrent first calls can
        both mint; the store keeps one and both callers get that one.

        Args:
            request_id: Store transaction id
            subject_id: End user id

        Returns:
            Tuple of (invite request, reused)

        Raises:
            ProviderError: If the issuer fails
            StoreError: If the store fails
        """
        with logfire.span(
            "invite_service.issue_invite",
            request_id=request_id,
            subject_id=subject_id,
        ):
            existing = await self.invite_request_repository.get_by_request_id(
                request_id
            )
            if existing:
                logfire.info(
                    "Reusing invite",
                    request_id=request_id,
                    joined=existing.joined,
                )
                return existing, True

            name = self.build_invite_name(request_id, subject_id)
            link = await self.invite_issuer.create_invite_link(self.channel_id, name)
            invite_link = InviteLink(link)

            stored, already_present = (
                await self.invite_request_repository.create_if_absent(
                    request_id=request_id,
                    subject_id=subject_id,
                    invite_link=invite_link,
                    link_fingerprint=fingerprint_invite_link(link),
                )
            )
            if already_present:
                logfire.warn(
                    "Concurrent issuance won by another request; minted link unused",
                    request_id=request_id,
                    unused_link=redact_link(link),
                )
                return stored, True

            logfire.info(
                "Invite created",
                request_id=request_id,
                invite_link=redact_link(link),
            )
            return stored, False

    @staticmethod
    def build_invite_name(request_id: str, subject_id: str) -> str:
        """Build the advisory label attached to the Telegram link.

        Args:
            request_id: Store transaction id
            subject_id: End user id

        Returns:
            Label of the form txn:<id>|uid:<id>|<epoch ms>
        """
        return f"txn:{request_id}|uid:{subject_id}|{int(time.time() * 1000)}"
