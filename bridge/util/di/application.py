"""Application layer DI providers."""

from dishka import Scope, provide

from bridge.application.usecase.invite import (
    CreateInviteUseCase,
    ListOrphanJoinsUseCase,
)
from bridge.application.usecase.membership import HandleMembershipUpdateUseCase
from bridge.config import Settings
from bridge.domain.repository import OrphanJoinRepository
from bridge.domain.service import EventDispatcher, InviteService, JoinMatcher
from bridge.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Invite use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invite_use_case(
        self,
        invite_service: InviteService,
        dispatcher: EventDispatcher,
        settings: Settings,
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(
            invite_service=invite_service,
            dispatcher=dispatcher,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_orphan_joins_use_case(
        self, orphan_join_repository: OrphanJoinRepository, settings: Settings
    ) -> ListOrphanJoinsUseCase:
        """Provide list orphan joins use case."""
        return ListOrphanJoinsUseCase(
            orphan_join_repository=orphan_join_repository, settings=settings
        )

    # Membership use cases
    @provide(scope=Scope.REQUEST)
    def get_handle_membership_update_use_case(
        self, join_matcher: JoinMatcher, settings: Settings
    ) -> HandleMembershipUpdateUseCase:
        """Provide handle membership update use case."""
        return HandleMembershipUpdateUseCase(
            join_matcher=join_matcher, settings=settings
        )
