"""Invite use cases."""

from bridge.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
)
from bridge.application.usecase.invite.list_orphan_joins import (
    ListOrphanJoinsRequest,
    ListOrphanJoinsResponse,
    ListOrphanJoinsUseCase,
)

__all__ = [
    "CreateInviteRequest",
    "CreateInviteResponse",
    "CreateInviteUseCase",
    "ListOrphanJoinsRequest",
    "ListOrphanJoinsResponse",
    "ListOrphanJoinsUseCase",
]
