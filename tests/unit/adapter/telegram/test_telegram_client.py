"""Unit tests for the Telegram invite issuer."""

import time
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from bridge.adapter.error import ProviderError
from bridge.adapter.telegram.client import RealTelegramInviteIssuer


def _response(status_code: int, body) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    return response


class TestRealTelegramInviteIssuer:
    """Tests for RealTelegramInviteIssuer."""

    @pytest.fixture
    def issuer(self):
        """Create issuer with test configuration."""
        return RealTelegramInviteIssuer(bot_token="123456:ABC", timeout=5.0)

    def test_method_url(self, issuer):
        """URL should embed the bot token."""
        assert (
            issuer.method_url
            == "https://api.telegram.org/bot123456:ABC/createChatInviteLink"
        )

    def test_payload_is_single_use_and_expiring(self, issuer):
        """Payload should limit the link to one member and set an expiry."""
        before = int(time.time())

        payload = issuer.build_payload("-100123", "txn:1|uid:2|1700000000000")

        assert payload["chat_id"] == "-100123"
        assert payload["member_limit"] == 1
        assert before + 48 * 3600 <= payload["expire_date"] <= int(time.time()) + 48 * 3600

    def test_payload_name_truncated(self, issuer):
        """Names longer than Telegram accepts should be cut."""
        payload = issuer.build_payload("-100123", "x" * 100)

        assert payload["name"] == "x" * 32

    def test_no_expiry_when_disabled(self):
        """invite_expiry_hours=None should omit expire_date."""
        issuer = RealTelegramInviteIssuer(bot_token="t", invite_expiry_hours=None)

        assert "expire_date" not in issuer.build_payload("-100123", "n")

    @pytest.mark.asyncio
    async def test_create_invite_link_success(self, issuer):
        """Should return the invite_link from the result."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_post = AsyncMock(
                return_value=_response(
                    200,
                    {"ok": True, "result": {"invite_link": "https://t.me/+AbC"}},
                )
            )
            mock_client.return_value.__aenter__.return_value.post = mock_post

            link = await issuer.create_invite_link("-100123", "name")

        assert link == "https://t.me/+AbC"
        call = mock_post.call_args
        assert call.args[0] == issuer.method_url
        assert call.kwargs["json"]["chat_id"] == "-100123"
        assert call.kwargs["timeout"] == 5.0

    @pytest.mark.asyncio
    async def test_api_error_raises_provider_error(self, issuer):
        """A Bot API error should raise ProviderError with its description."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=_response(
                    400, {"ok": False, "description": "Bad Request: chat not found"}
                )
            )

            with pytest.raises(ProviderError, match="chat not found"):
                await issuer.create_invite_link("-100123", "name")

    @pytest.mark.asyncio
    async def test_missing_link_raises_provider_error(self, issuer):
        """ok=true without an invite_link is still a failure."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=_response(200, {"ok": True, "result": {}})
            )

            with pytest.raises(ProviderError):
                await issuer.create_invite_link("-100123", "name")

    @pytest.mark.asyncio
    async def test_non_json_response_raises_provider_error(self, issuer):
        """An unparseable body should raise ProviderError."""
        response = MagicMock()
        response.status_code = 502
        response.json.side_effect = ValueError("not json")
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=response
            )

            with pytest.raises(ProviderError, match="502"):
                await issuer.create_invite_link("-100123", "name")

    @pytest.mark.asyncio
    async def test_transport_error_raises_provider_error(self, issuer):
        """Timeouts and connection errors should raise ProviderError."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                side_effect=httpx.ConnectTimeout("timed out")
            )

            with pytest.raises(ProviderError):
                await issuer.create_invite_link("-100123", "name")

    @pytest.mark.parametrize(
        "invite_link",
        [12345, {"url": "https://t.me/+AbC"}, ["https://t.me/+AbC"], "x" * 2049],
    )
    @pytest.mark.asyncio
    async def test_malformed_link_raises_provider_error(self, issuer, invite_link):
        """A link that is not a usable string should raise ProviderError."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=_response(
                    200, {"ok": True, "result": {"invite_link": invite_link}}
                )
            )

            with pytest.raises(ProviderError):
                await issuer.create_invite_link("-100123", "name")
