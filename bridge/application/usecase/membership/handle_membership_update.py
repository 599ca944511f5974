"""Handle membership update use case."""

from typing import Any

import logfire
from pydantic import BaseModel

from bridge.adapter.telegram.update import normalize_update
from bridge.application.usecase.base import BaseUseCase
from bridge.application.usecase.security import require_secret
from bridge.config import Settings
from bridge.domain.service import JoinMatcher
from bridge.domain.value import MatchOutcome


class HandleMembershipUpdateRequest(BaseModel):
    """A raw Telegram webhook delivery."""

    payload: Any = None
    secret_token: str | None = None


class HandleMembershipUpdateResponse(BaseModel):
    """Acknowledgement returned to Telegram."""

    ok: bool = True
    outcome: MatchOutcome
    request_id: str | None = None


class HandleMembershipUpdateUseCase(BaseUseCase):
    """Use case for Telegram chat_member updates.

    Telegram redelivers any update that does not get a 2xx, so once the
    caller is authenticated every failure is logged and acknowledged.
    """

    def __init__(self, join_matcher: JoinMatcher, settings: Settings) -> None:
        """Initialize use case.

        Args:
            join_matcher: Join matcher domain service
            settings: Application settings
        """
        self.join_matcher = join_matcher
        self.settings = settings

    async def execute(
        self, request: HandleMembershipUpdateRequest
    ) -> HandleMembershipUpdateResponse:
        """Match an update against issued invites.

        Args:
            request: Webhook delivery

        Returns:
            Acknowledgement with the match outcome

        Raises:
            AuthError: If a webhook secret is configured and does not match
        """
        webhook_secret = self.settings.telegram.webhook_secret
        if webhook_secret:
            require_secret(request.secret_token, webhook_secret)

        with logfire.span("handle_membership_update"):
            try:
                notification = normalize_update(request.payload)
                if notification is None:
                    logfire.debug("Update without membership change ignored")
                    return HandleMembershipUpdateResponse(outcome=MatchOutcome.IGNORED)

                result = await self.join_matcher.handle(notification)
                return HandleMembershipUpdateResponse(
                    outcome=result.outcome, request_id=result.request_id
                )
            except Exception as e:
                logfire.error(
                    "Webhook processing failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return HandleMembershipUpdateResponse(outcome=MatchOutcome.ERROR)
