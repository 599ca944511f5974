"""Invite routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Query, Request, status
import logfire

from bridge.adapter.error import ProviderError, StoreError
from bridge.application.usecase.invite import (
    CreateInviteUseCase,
    ListOrphanJoinsUseCase,
)
from bridge.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
)
from bridge.application.usecase.invite.list_orphan_joins import (
    ListOrphanJoinsRequest,
    ListOrphanJoinsResponse,
)
from bridge.domain.error import AuthError, ValidationError
from bridge.interface.api.routes.body import read_json_body
from bridge.interface.error import MalformedBodyError

router = APIRouter(tags=["invites"], route_class=DishkaRoute)


@router.post(
    "/create-invite",
    response_model=CreateInviteResponse,
    response_model_by_alias=True,
)
async def create_invite(
    request: Request,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
    x_api_key: str | None = Header(default=None),
) -> CreateInviteResponse:
    """Create or reuse the invite link for a store transaction.

    Args:
        request: Raw request (body is read leniently)
        create_invite_use_case: Create invite use case from DI
        x_api_key: Shared secret of the store backend

    Returns:
        Response with the invite link and reuse flag

    Raises:
        HTTPException: 401 on bad key, 400 on bad input, 502 if Telegram
            fails, 500 if the store fails
    """
    try:
        body: Any = await read_json_body(request)
    except MalformedBodyError:
        body = None
    if not isinstance(body, dict):
        body = {}

    try:
        use_case_request = CreateInviteRequest.model_validate(
            {**body, "api_key": x_api_key}
        )
        return await create_invite_use_case.execute(use_case_request)

    except AuthError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except ProviderError as e:
        logfire.error("Invite creation failed at Telegram", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to create invite link",
        )
    except StoreError as e:
        logfire.error("Invite creation failed at the store", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error",
        )


@router.get("/orphan-joins", response_model=ListOrphanJoinsResponse)
async def list_orphan_joins(
    list_orphan_joins_use_case: FromDishka[ListOrphanJoinsUseCase],
    x_api_key: str | None = Header(default=None),
    limit: int = Query(default=50, ge=1, le=500),
) -> ListOrphanJoinsResponse:
    """List joins that matched no issued invite.

    Raises:
        HTTPException: 401 on bad key, 500 if the store fails
    """
    try:
        return await list_orphan_joins_use_case.execute(
            ListOrphanJoinsRequest(api_key=x_api_key, limit=limit)
        )
    except AuthError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error",
        )
