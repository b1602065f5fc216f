"""Testes do cliente da Discord REST API com transporte mockado."""

from __future__ import annotations

import json

import httpx
import pytest

from api.connectors.discord import (
    DiscordApiClient,
    HttpClient,
    HttpClientConfig,
    authorization_value,
)
from utils.errors import DiscordApiError

API = "https://discord.com/api/v10"


def _member(index: int) -> dict[str, object]:
    return {"user": {"id": str(100000000000000000 + index), "username": f"user{index}"}}


class _Sleeps:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def _client(handler, *, max_retries: int = 3, sleeps: _Sleeps | None = None) -> DiscordApiClient:
    http = HttpClient(
        HttpClientConfig(max_retries=max_retries),
        transport=httpx.MockTransport(handler),
        sleep=sleeps or _Sleeps(),
    )
    return DiscordApiClient(bot_token="abc.def.ghi", api_endpoint=API, http_client=http)


def test_authorization_value_adds_prefix_once() -> None:
    assert authorization_value("token") == "Bot token"
    assert authorization_value("Bot token") == "Bot token"


class TestListGuildMembers:
    """Paginação por cursor `after`."""

    @pytest.mark.asyncio
    async def test_paginates_until_short_page(self) -> None:
        requests: list[httpx.Request] = []
        pages = [[_member(i) for i in range(1000)], [_member(1000 + i) for i in range(5)]]

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=pages[len(requests) - 1])

        members = await _client(handler).list_guild_members("333333333333333333")

        assert len(members) == 1005
        assert requests[0].url.params["limit"] == "1000"
        assert "after" not in requests[0].url.params
        assert requests[1].url.params["after"] == str(100000000000000000 + 999)
        assert requests[0].headers["Authorization"] == "Bot abc.def.ghi"
        assert requests[0].url.path == "/api/v10/guilds/333333333333333333/members"

    @pytest.mark.asyncio
    async def test_non_list_response_raises(self) -> None:
        client = _client(lambda request: httpx.Response(200, json={"message": "nope"}))
        with pytest.raises(DiscordApiError, match="Expected array of members"):
            await client.list_guild_members("1")

    @pytest.mark.asyncio
    async def test_client_error_raises_with_status(self) -> None:
        client = _client(
            lambda request: httpx.Response(403, json={"message": "Missing Access", "code": 50001})
        )
        with pytest.raises(DiscordApiError) as exc_info:
            await client.list_guild_members("1")

        assert exc_info.value.status_code == 403
        assert exc_info.value.upstream_message == "Missing Access"


class TestRetries:
    """429 e 5xx."""

    @pytest.mark.asyncio
    async def test_rate_limit_honours_retry_after(self) -> None:
        sleeps = _Sleeps()
        responses = [
            httpx.Response(429, json={"retry_after": 1.5, "global": True}),
            httpx.Response(200, json=[]),
        ]

        client = _client(lambda request: responses.pop(0), sleeps=sleeps)
        members = await client.list_guild_members("1")

        assert members == []
        assert sleeps.calls == [1.5]

    @pytest.mark.asyncio
    async def test_server_errors_retried_with_backoff(self) -> None:
        sleeps = _Sleeps()
        responses = [httpx.Response(502), httpx.Response(503), httpx.Response(200, json=[])]

        await _client(lambda request: responses.pop(0), sleeps=sleeps).list_guild_members("1")

        assert sleeps.calls == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_retries_exhausted_raise(self) -> None:
        client = _client(lambda request: httpx.Response(500), max_retries=1)
        with pytest.raises(DiscordApiError) as exc_info:
            await client.list_guild_members("1")

        assert exc_info.value.status_code == 500
        assert exc_info.value.is_retryable is True


@pytest.mark.asyncio
async def test_send_channel_message_posts_content() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"id": "m1"})

    result = await _client(handler).send_channel_message("444", "hello")

    assert result == {"id": "m1"}
    assert captured[0].method == "POST"
    assert captured[0].url.path == "/api/v10/channels/444/messages"
    assert json.loads(captured[0].content) == {"content": "hello"}
