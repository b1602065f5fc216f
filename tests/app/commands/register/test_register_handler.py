"""Testes do handler /register."""

from __future__ import annotations

import pytest

from app.commands.register import RegisterCommandConfig, RegisterHandler
from tests.fakes.fake_discord import FakeDiscordClient
from tests.fakes.fake_scheduler import RecordingScheduler
from tests.fakes.interactions import build_command_interaction, build_context
from utils.errors import DiscordApiError

TEST_CHANNEL = "500000000000000001"
REQUEST_CHANNEL = "500000000000000002"
RESPONSE_CHANNEL = "500000000000000003"
USER_ID = "600000000000000001"
VALID_URL = "https://rocketleague.tracker.network/rocket-league/profile/epic/Player1/overview"


def _config(*, is_development: bool = False, response_channel: str = RESPONSE_CHANNEL):
    return RegisterCommandConfig(
        is_development=is_development,
        test_channel_id=TEST_CHANNEL,
        request_channel_id=REQUEST_CHANNEL,
        response_channel_id=response_channel,
    )


def _interaction(*urls: str, channel_id: str = REQUEST_CHANNEL) -> dict:
    options = [
        {"name": f"tracker{index}", "type": 3, "value": url}
        for index, url in enumerate(urls, 1)
    ]
    return build_command_interaction(
        "register", user_id=USER_ID, channel_id=channel_id, options=options
    )


@pytest.fixture
def scheduler():
    recording = RecordingScheduler()
    yield recording
    recording.close()


class TestChannelRestriction:
    @pytest.mark.asyncio
    async def test_production_requires_request_channel(self, scheduler) -> None:
        handler = RegisterHandler(
            config=_config(), discord_client=FakeDiscordClient(), scheduler=scheduler
        )
        interaction = _interaction(VALID_URL, channel_id=TEST_CHANNEL)
        body = await handler.handle(interaction, build_context())
        assert body["data"]["content"] == (
            "This command can only be used in the designated register channel."
        )

    @pytest.mark.asyncio
    async def test_development_requires_test_channel(self, scheduler) -> None:
        handler = RegisterHandler(
            config=_config(is_development=True),
            discord_client=FakeDiscordClient(),
            scheduler=scheduler,
        )
        body = await handler.handle(_interaction(VALID_URL), build_context())
        assert body["data"]["content"] == "This command can only be used in the test channel."

    @pytest.mark.asyncio
    async def test_unconfigured_channel(self, scheduler) -> None:
        config = RegisterCommandConfig(
            is_development=False,
            test_channel_id=TEST_CHANNEL,
            request_channel_id="",
            response_channel_id=RESPONSE_CHANNEL,
        )
        handler = RegisterHandler(
            config=config, discord_client=FakeDiscordClient(), scheduler=scheduler
        )
        body = await handler.handle(_interaction(VALID_URL), build_context())
        assert body["data"]["content"] == (
            "Channel restriction not configured. "
            "Missing REGISTER_COMMAND_REQUEST_CHANNEL_ID environment variable."
        )


class TestRegistration:
    @pytest.mark.asyncio
    async def test_no_urls(self, scheduler) -> None:
        handler = RegisterHandler(
            config=_config(), discord_client=FakeDiscordClient(), scheduler=scheduler
        )
        body = await handler.handle(_interaction(), build_context())
        assert body["data"]["content"] == "❌ Please provide at least one tracker URL."

    @pytest.mark.asyncio
    async def test_all_invalid_urls_listed(self, scheduler) -> None:
        handler = RegisterHandler(
            config=_config(), discord_client=FakeDiscordClient(), scheduler=scheduler
        )
        body = await handler.handle(_interaction("https://example.com/x"), build_context())

        content = body["data"]["content"]
        assert content.startswith("Invalid tracker URLs:\n❌ https://example.com/x")
        assert body["data"]["flags"] == 64
        assert scheduler.calls == []

    @pytest.mark.asyncio
    async def test_valid_registration_routed_in_background(self, scheduler) -> None:
        discord = FakeDiscordClient()
        handler = RegisterHandler(config=_config(), discord_client=discord, scheduler=scheduler)

        body = await handler.handle(
            _interaction(VALID_URL, "https://example.com/x"), build_context("req-5")
        )

        assert body["data"]["content"] == "✅ Registration received!"
        assert scheduler.calls[0].correlation_id == "req-5"

        results = await scheduler.run_all()

        assert results == [True]
        channel_id, message = discord.sent_messages[0]
        assert channel_id == RESPONSE_CHANNEL
        assert f"<@{USER_ID}> has registered the following trackers:" in message
        assert f"• {VALID_URL}" in message
        assert "⚠️ Some URLs were invalid:" in message

    @pytest.mark.asyncio
    async def test_routing_failure_is_logged(self, scheduler) -> None:
        discord = FakeDiscordClient(error=DiscordApiError("Missing Access", 403))
        handler = RegisterHandler(config=_config(), discord_client=discord, scheduler=scheduler)

        assert await handler.route_registration("msg", "req-1") is False

    @pytest.mark.asyncio
    async def test_missing_response_channel(self, scheduler) -> None:
        handler = RegisterHandler(
            config=_config(response_channel=""),
            discord_client=FakeDiscordClient(),
            scheduler=scheduler,
        )
        assert await handler.route_registration("msg", "req-1") is False
