"""Membership use cases."""

from bridge.application.usecase.membership.handle_membership_update import (
    HandleMembershipUpdateRequest,
    HandleMembershipUpdateResponse,
    HandleMembershipUpdateUseCase,
)

__all__ = [
    "HandleMembershipUpdateRequest",
    "HandleMembershipUpdateResponse",
    "HandleMembershipUpdateUseCase",
]
