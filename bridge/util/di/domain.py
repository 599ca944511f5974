"""Domain layer DI providers."""

from dishka import Scope, provide

from bridge.adapter.telegram.client import TelegramInviteIssuer
from bridge.adapter.webengage.client import WebEngageEmitter
from bridge.config import TelegramSettings, WebEngageSettings
from bridge.domain.repository import InviteRequestRepository, OrphanJoinRepository
from bridge.domain.service import EventDispatcher, InviteService, JoinMatcher
from bridge.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    The event dispatcher is APP-scoped: it owns background emissions that
    outlive the request that started them.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_event_dispatcher(
        self, emitter: WebEngageEmitter, webengage_settings: WebEngageSettings
    ) -> EventDispatcher:
        """Provide the event dispatcher."""
        return EventDispatcher(
            emitter=emitter,
            await_delivery=webengage_settings.await_delivery,
        )

    @provide
    def get_invite_service(
        self,
        invite_request_repository: InviteRequestRepository,
        invite_issuer: TelegramInviteIssuer,
        telegram_settings: TelegramSettings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_request_repository=invite_request_repository,
            invite_issuer=invite_issuer,
            channel_id=telegram_settings.channel_id,
        )

    @provide
    def get_join_matcher(
        self,
        invite_request_repository: InviteRequestRepository,
        orphan_join_repository: OrphanJoinRepository,
        dispatcher: EventDispatcher,
        telegram_settings: TelegramSettings,
        webengage_settings: WebEngageSettings,
    ) -> JoinMatcher:
        """Provide join matcher domain service."""
        return JoinMatcher(
            invite_request_repository=invite_request_repository,
            orphan_join_repository=orphan_join_repository,
            dispatcher=dispatcher,
            channel_id=telegram_settings.channel_id,
            join_event_name=webengage_settings.join_event_name,
            fire_join_event=webengage_settings.fire_join_event,
        )
