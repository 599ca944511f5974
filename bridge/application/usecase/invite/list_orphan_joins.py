"""List orphan joins use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from bridge.application.usecase.base import BaseUseCase
from bridge.application.usecase.security import require_secret
from bridge.config import Settings
from bridge.domain.repository import OrphanJoinRepository


class OrphanJoinItem(BaseModel):
    """Orphan join in response."""

    id: str
    invite_link: str
    telegram_user_id: str | None
    channel_id: str
    received_at: datetime


class ListOrphanJoinsRequest(BaseModel):
    """List orphan joins request."""

    api_key: str | None = None
    limit: int = Field(default=50, ge=1, le=500)


class ListOrphanJoinsResponse(BaseModel):
    """List orphan joins response."""

    orphans: list[OrphanJoinItem]
    total: int


class ListOrphanJoinsUseCase(BaseUseCase):
    """Use case for inspecting joins that matched no invite."""

    def __init__(
        self, orphan_join_repository: OrphanJoinRepository, settings: Settings
    ) -> None:
        self.orphan_join_repository = orphan_join_repository
        self.settings = settings

    async def execute(self, request: ListOrphanJoinsRequest) -> ListOrphanJoinsResponse:
        """List the most recent orphan joins.

        Raises:
            AuthError: If the api key is wrong
        """
        require_secret(request.api_key, self.settings.auth.store_api_key)

        orphans = await self.orphan_join_repository.list_recent(request.limit)
        items = [
            OrphanJoinItem(
                id=str(orphan.id),
                invite_link=orphan.invite_link,
                telegram_user_id=orphan.telegram_user_id,
                channel_id=orphan.channel_id,
                received_at=orphan.received_at,
            )
            for orphan in orphans
        ]
        return ListOrphanJoinsResponse(orphans=items, total=len(items))
