"""Telegram Bot API invite link client."""

from datetime import datetime, timedelta, timezone

import httpx
import logfire
from pydantic import ValidationError

from bridge.adapter.error import ProviderError
from bridge.domain.service.invite_issuer import InviteLinkIssuer
from bridge.domain.value import InviteLink
from bridge.util.logging import redact_link


def _is_valid_link(invite_link: object) -> bool:
    """Whether a Bot API result holds a usable invite link."""
    if not isinstance(invite_link, str):
        return False
    try:
        InviteLink(invite_link)
    except ValidationError:
        return False
    return True


class TelegramInviteIssuer(InviteLinkIssuer):
    """Base class for Telegram invite issuers.

    Provides type distinction for dependency injection.
    """

    pass


class RealTelegramInviteIssuer(TelegramInviteIssuer):
    """Creates invite links through the Bot API createChatInviteLink method.

    The bot must be an administrator of the channel with the
    can_invite_users right.
    """

    def __init__(
        self,
        bot_token: str,
        api_base_url: str = "https://api.telegram.org",
        invite_expiry_hours: int | None = 48,
        name_max_length: int = 32,
        timeout: float = 30.0,
    ) -> None:
        """Initialize Telegram invite issuer.

        Args:
            bot_token: Bot token from @BotFather
            api_base_url: Bot API base URL
            invite_expiry_hours: Link lifetime in hours, None for no expiry
            name_max_length: Longest link name Telegram accepts
            timeout: Request timeout in seconds
        """
        self.bot_token = bot_token
        self.api_base_url = api_base_url.rstrip("/")
        self.invite_expiry_hours = invite_expiry_hours
        self.name_max_length = name_max_length
        self.timeout = timeout

    @property
    def method_url(self) -> str:
        """URL of the createChatInviteLink method."""
        return f"{self.api_base_url}/bot{self.bot_token}/createChatInviteLink"

    def build_payload(self, channel_id: str, name: str) -> dict:
        """Build the createChatInviteLink request body.

        Args:
            channel_id: Target chat id
            name: Link name, truncated to the provider limit

        Returns:
            JSON body
        """
        payload: dict = {
            "chat_id": channel_id,
            "member_limit": 1,
            "name": name[: self.name_max_length],
        }
        if self.invite_expiry_hours:
            expire_at = datetime.now(timezone.utc) + timedelta(
                hours=self.invite_expiry_hours
            )
            payload["expire_date"] = int(expire_at.timestamp())
        return payload

    async def create_invite_link(self, channel_id: str, name: str) -> str:
        """Create a single-use invite link.

        Args:
            channel_id: Target chat id
            name: Advisory link name

        Returns:
            The invite link

        Raises:
            ProviderError: If the call fails or the response has no link
        """
        payload = self.build_payload(channel_id, name)

        with logfire.span("telegram.create_invite_link", chat_id=channel_id):
            try:
                async with httpx.AsyncClient() as client:
                    response = await client.post(
                        self.method_url,
                        json=payload,
                        timeout=self.timeout,
                    )
            except httpx.HTTPError as e:
                logfire.error("Telegram invite HTTP error", error=str(e))
                raise ProviderError(f"HTTP error creating Telegram invite: {e}")

            try:
                data = response.json()
            except ValueError:
                data = {}

            invite_link = None
            if isinstance(data, dict) and isinstance(data.get("result"), dict):
                invite_link = data["result"].get("invite_link")
            if not _is_valid_link(invite_link):
                invite_link = None

            if (
                response.status_code != 200
                or not isinstance(data, dict)
                or not data.get("ok")
                or not invite_link
            ):
                description = (
                    data.get("description") if isinstance(data, dict) else None
                )
                logfire.error(
                    "Telegram API error",
                    status_code=response.status_code,
                    description=description,
                )
                raise ProviderError(
                    f"Failed to create Telegram invite: {description or response.status_code}"
                )

            logfire.info("Telegram invite created", invite_link=redact_link(invite_link))
            return invite_link


class MockTelegramInviteIssuer(TelegramInviteIssuer):
    """Mock Telegram issuer for testing.

    Mints deterministic links without calling Telegram. Set fail_with to make
    the next calls raise.
    """

    def __init__(self) -> None:
        """Initialize mock issuer."""
        self.calls: list[tuple[str, str]] = []
        self.fail_with: Exception | None = None

    async def create_invite_link(self, channel_id: str, name: str) -> str:
        """Return the next mock link.

        Args:
            channel_id: Target chat id
            name: Link name

        Returns:
            Mock invite link

        Raises:
            Exception: Whatever fail_with holds, if set
        """
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append((channel_id, name))
        return f"https://t.me/+mock-{len(self.calls)}"
