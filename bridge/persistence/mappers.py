"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from bridge.domain.model import InviteLookup, InviteRequest, OrphanJoin
from bridge.domain.value import (
    InviteLink,
    LinkFingerprint,
    OrphanJoinId,
    RequestId,
    SubjectId,
    TelegramUserId,
)


def row_to_invite_request(row: Dict[str, Any]) -> InviteRequest:
    """Convert database row to InviteRequest domain model.

    Args:
        row: Database row as dict

    Returns:
        InviteRequest domain model
    """
    return InviteRequest(
        request_id=RequestId(row["request_id"]),
        subject_id=SubjectId(row["subject_id"]),
        invite_link=InviteLink(root=row["invite_link"]),
        link_fingerprint=LinkFingerprint(root=row["link_fingerprint"]),
        joined=bool(row["joined"]),
        joined_by_user_id=TelegramUserId(row["joined_by_user_id"])
        if row.get("joined_by_user_id")
        else None,
        created_at=row["created_at"],
        joined_at=row.get("joined_at"),
    )


def invite_request_to_dict(invite_request: InviteRequest) -> Dict[str, Any]:
    """Convert InviteRequest domain model to database dict.

    Args:
        invite_request: InviteRequest domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "request_id": invite_request.request_id,
        "subject_id": invite_request.subject_id,
        "invite_link": invite_request.invite_link.root,
        "link_fingerprint": invite_request.link_fingerprint.root,
        "joined": invite_request.joined,
        "joined_by_user_id": invite_request.joined_by_user_id,
        "created_at": invite_request.created_at,
        "joined_at": invite_request.joined_at,
    }


def row_to_invite_lookup(row: Dict[str, Any]) -> InviteLookup:
    """Convert database row to InviteLookup domain model.

    Args:
        row: Database row as dict

    Returns:
        InviteLookup domain model
    """
    return InviteLookup(
        link_fingerprint=LinkFingerprint(root=row["link_fingerprint"]),
        request_id=RequestId(row["request_id"]),
        subject_id=SubjectId(row["subject_id"]),
        invite_link=InviteLink(root=row["invite_link"]),
        created_at=row["created_at"],
    )


def invite_lookup_to_dict(lookup: InviteLookup) -> Dict[str, Any]:
    """Convert InviteLookup domain model to database dict."""
    return {
        "link_fingerprint": lookup.link_fingerprint.root,
        "request_id": lookup.request_id,
        "subject_id": lookup.subject_id,
        "invite_link": lookup.invite_link.root,
        "created_at": lookup.created_at,
    }


def row_to_orphan_join(row: Dict[str, Any]) -> OrphanJoin:
    """Convert database row to OrphanJoin domain model.

    Args:
        row: Database row as dict

    Returns:
        OrphanJoin domain model
    """
    return OrphanJoin(
        id=OrphanJoinId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        invite_link=row["invite_link"],
        link_fingerprint=LinkFingerprint(root=row["link_fingerprint"]),
        telegram_user_id=TelegramUserId(row["telegram_user_id"])
        if row.get("telegram_user_id")
        else None,
        channel_id=row["channel_id"],
        received_at=row["received_at"],
    )


def orphan_join_to_dict(orphan: OrphanJoin) -> Dict[str, Any]:
    """Convert OrphanJoin domain model to database dict."""
    return {
        "id": orphan.id,
        "invite_link": orphan.invite_link,
        "link_fingerprint": orphan.link_fingerprint.root,
        "telegram_user_id": orphan.telegram_user_id,
        "channel_id": orphan.channel_id,
        "received_at": orphan.received_at,
    }
