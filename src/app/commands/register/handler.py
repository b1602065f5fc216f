"""Handler do comando /register (URLs do Rocket League Tracker).

Responde na hora com confirmação efêmera; a mensagem com os perfis é
enviada ao canal de respostas em background.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.commands.base import CommandHandler
from app.commands.register.tracker_urls import TrackerProfile, validate_tracker_url
from app.commands.responses import ephemeral_response, error_response
from app.domain.interaction import extract_option_values, extract_user_id

if TYPE_CHECKING:
    from app.domain.security import SecurityContext
    from app.protocols.discord_client import DiscordApiClientProtocol
    from app.protocols.task_scheduler import TaskSchedulerProtocol

logger = logging.getLogger(__name__)

COMMAND_NAME = "register"
TRACKER_OPTION_PREFIX = "tracker"


@dataclass(frozen=True, slots=True)
class RegisterCommandConfig:
    """Canais usados pelo /register.

    Em development o comando só é aceito no canal de testes; nos demais
    ambientes, no canal de pedidos de cadastro.
    """

    is_development: bool
    test_channel_id: str
    request_channel_id: str
    response_channel_id: str

    @property
    def expected_channel(self) -> tuple[str, str]:
        """(channel_id esperado, variável de ambiente correspondente)."""
        if self.is_development:
            return self.test_channel_id, "TEST_CHANNEL_ID"
        return self.request_channel_id, "REGISTER_COMMAND_REQUEST_CHANNEL_ID"


def channel_restriction_error(
    interaction: dict[str, Any],
    config: RegisterCommandConfig,
) -> str | None:
    expected_channel, variable = config.expected_channel
    if not expected_channel:
        return f"Channel restriction not configured. Missing {variable} environment variable."
    channel_id = interaction.get("channel_id")
    if not channel_id:
        return "Unable to determine channel. Please try again."
    if str(channel_id) != expected_channel:
        place = "test" if config.is_development else "designated register"
        return f"This command can only be used in the {place} channel."
    return None


def tracker_urls_from(interaction: dict[str, Any]) -> list[str]:
    """Valores não vazios das opções tracker1..trackerN, na ordem recebida."""
    return [
        str(value).strip()
        for name, value in extract_option_values(interaction).items()
        if name.startswith(TRACKER_OPTION_PREFIX) and value and str(value).strip()
    ]


def build_registration_message(
    user_id: str,
    profiles: list[TrackerProfile],
    errors: list[str],
) -> str:
    lines = [
        f"<@{user_id}> has registered the following trackers:",
        "",
        "**User ID:**",
        "```",
        user_id,
        "```",
        *(f"• {profile.url}" for profile in profiles),
    ]
    if errors:
        lines.extend(["", "⚠️ Some URLs were invalid:", *errors])
    lines.append("*React under this post to take this one.*")
    return "\n".join(lines)


class RegisterHandler(CommandHandler):
    """Valida URLs de tracker e encaminha o cadastro ao canal de respostas."""

    name = COMMAND_NAME

    def __init__(
        self,
        *,
        config: RegisterCommandConfig,
        discord_client: DiscordApiClientProtocol,
        scheduler: TaskSchedulerProtocol,
    ) -> None:
        self._config = config
        self._discord = discord_client
        self._scheduler = scheduler

    async def handle(
        self,
        interaction: dict[str, Any],
        context: SecurityContext,
    ) -> dict[str, Any]:
        restriction = channel_restriction_error(interaction, self._config)
        if restriction:
            return ephemeral_response(restriction)

        user_id = extract_user_id(interaction)
        if user_id is None:
            return error_response("Could not identify user. Please try again.")

        urls = tracker_urls_from(interaction)
        if not urls:
            return error_response("Please provide at least one tracker URL.")

        profiles: list[TrackerProfile] = []
        errors: list[str] = []
        for url in urls:
            result = validate_tracker_url(url)
            if result.profile is not None:
                profiles.append(result.profile)
            else:
                errors.append(f"❌ {url}: {result.error}")

        if not profiles:
            return ephemeral_response("Invalid tracker URLs:\n" + "\n".join(errors))

        message = build_registration_message(user_id, profiles, errors)
        self._scheduler.schedule(
            self.route_registration(message, context.request_id),
            correlation_id=context.request_id,
            name="register_response",
        )
        return ephemeral_response("✅ Registration received!")

    async def route_registration(self, message: str, request_id: str) -> bool:
        """Envia o cadastro ao canal de respostas; falhas são apenas registradas."""
        channel_id = self._config.response_channel_id
        if not channel_id:
            logger.error(
                "register_response_channel_missing",
                extra={"request_id": request_id},
            )
            return False
        try:
            await self._discord.send_channel_message(channel_id, message)
        except Exception as exc:
            logger.error(
                "register_response_failed",
                extra={
                    "request_id": request_id,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return False
        logger.info("register_response_sent", extra={"request_id": request_id})
        return True
