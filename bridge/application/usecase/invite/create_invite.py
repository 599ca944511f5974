"""Create invite use case."""

import logfire
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from bridge.application.usecase.base import BaseUseCase
from bridge.application.usecase.security import require_secret
from bridge.config import Settings
from bridge.domain.error import ValidationError
from bridge.domain.service import EventDispatcher, InviteService
from bridge.domain.value import RequestId, SubjectId


class CreateInviteRequest(BaseModel):
    """Request to create (or fetch) the invite for a store transaction.

    Accepts the store's field names (transactionId, userId) as well as the
    generic requestId/subjectId.
    """

    request_id: str = Field(
        default="", validation_alias=AliasChoices("transactionId", "requestId", "request_id")
    )
    subject_id: str = Field(
        default="", validation_alias=AliasChoices("userId", "subjectId", "subject_id")
    )
    api_key: str | None = None

    @field_validator("request_id", "subject_id", mode="before")
    @classmethod
    def coerce_to_str(cls, v: object) -> str:
        """Stringify and trim, treating null as empty."""
        if v is None:
            return ""
        return str(v).strip()


class CreateInviteResponse(BaseModel):
    """Response with the invite link for the transaction."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    invite_link: str = Field(alias="inviteLink")
    reused: bool


class CreateInviteUseCase(BaseUseCase):
    """Use case for idempotent invite creation."""

    def __init__(
        self,
        invite_service: InviteService,
        dispatcher: EventDispatcher,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
            dispatcher: Event dispatcher for the issuance event
            settings: Application settings
        """
        self.invite_service = invite_service
        self.dispatcher = dispatcher
        self.settings = settings

    async def execute(self, request: CreateInviteRequest) -> CreateInviteResponse:
        """Execute create invite use case.

        Args:
            request: Create invite request

        Returns:
            Response with the invite link and whether it was reused

        Raises:
            AuthError: If the api key is wrong
            ValidationError: If request or subject id is missing
            ProviderError: If Telegram fails
            StoreError: If the store fails
        """
        require_secret(request.api_key, self.settings.auth.store_api_key)

        if not request.request_id or not request.subject_id:
            raise ValidationError("Missing userId or transactionId")

        request_id = RequestId(request.request_id)
        subject_id = SubjectId(request.subject_id)

        with logfire.span(
            "create_invite", request_id=request_id, subject_id=subject_id
        ):
            invite_request, reused = await self.invite_service.issue_invite(
                request_id, subject_id
            )

            if not reused and self.settings.webengage.fire_invite_event:
                await self.dispatcher.dispatch(
                    subject_id,
                    self.settings.webengage.invite_event_name,
                    {
                        "transactionId": request_id,
                        "inviteLink": invite_request.invite_link.root,
                    },
                )

            return CreateInviteResponse(
                invite_link=invite_request.invite_link.root,
                reused=reused,
            )
