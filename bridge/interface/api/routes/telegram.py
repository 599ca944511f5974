"""Telegram webhook routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Request, status
from fastapi.responses import PlainTextResponse
import logfire

from bridge.application.usecase.membership import HandleMembershipUpdateUseCase
from bridge.application.usecase.membership.handle_membership_update import (
    HandleMembershipUpdateRequest,
    HandleMembershipUpdateResponse,
)
from bridge.domain.error import AuthError
from bridge.interface.api.routes.body import read_json_body
from bridge.interface.error import MalformedBodyError

router = APIRouter(prefix="/telegram-webhook", tags=["telegram"], route_class=DishkaRoute)


@router.get("", response_class=PlainTextResponse)
async def webhook_alive() -> str:
    """Liveness check for the webhook URL."""
    return "telegram webhook alive"


@router.post("", response_model=HandleMembershipUpdateResponse)
async def telegram_webhook(
    request: Request,
    handle_update_use_case: FromDishka[HandleMembershipUpdateUseCase],
    x_telegram_bot_api_secret_token: str | None = Header(default=None),
) -> HandleMembershipUpdateResponse:
    """Receive a Telegram update.

    Always acknowledges with 200 once authenticated, so Telegram does not
    redeliver updates that failed internally.

    Raises:
        HTTPException: 401 if the webhook secret does not match
    """
    payload: Any
    try:
        payload = await read_json_body(request)
    except MalformedBodyError as e:
        logfire.warn("Webhook body is not valid JSON", error=str(e))
        payload = None

    try:
        return await handle_update_use_case.execute(
            HandleMembershipUpdateRequest(
                payload=payload,
                secret_token=x_telegram_bot_api_secret_token,
            )
        )
    except AuthError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
