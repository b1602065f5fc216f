"""Cliente da Discord REST API (v10) usado pelos comandos."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.protocols.discord_client import DiscordApiClientProtocol
from utils.errors import DiscordApiError

from .http_base import HttpClient, HttpClientConfig, HttpError

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

MEMBERS_PAGE_LIMIT = 1000
DEFAULT_MAX_PAGES = 200


def authorization_value(bot_token: str) -> str:
    """Header Authorization; aceita token com ou sem prefixo "Bot "."""
    return bot_token if bot_token.startswith("Bot ") else f"Bot {bot_token}"


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase


class DiscordApiClient(DiscordApiClientProtocol):
    """Implementação do protocolo sobre HttpClient.

    Args:
        bot_token: Token do bot (com ou sem prefixo "Bot ").
        api_endpoint: URL base com versão (ex: https://discord.com/api/v10).
        http_client: Cliente HTTP (injetável em testes).
        max_pages: Limite de páginas na listagem de membros.
    """

    def __init__(
        self,
        *,
        bot_token: str,
        api_endpoint: str,
        http_client: HttpClient | None = None,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        self._api_endpoint = api_endpoint.rstrip("/")
        self._http = http_client or HttpClient(HttpClientConfig())
        self._headers = {
            "Authorization": authorization_value(bot_token),
            "Content-Type": "application/json",
        }
        self._max_pages = max_pages

    async def list_guild_members(self, guild_id: str) -> list[dict[str, Any]]:
        """Lista membros usando o cursor `after` até a última página."""
        members: list[dict[str, Any]] = []
        after: str | None = None
        for page in range(self._max_pages):
            params: dict[str, Any] = {"limit": MEMBERS_PAGE_LIMIT}
            if after is not None:
                params["after"] = after
            batch = await self._get(f"/guilds/{guild_id}/members", params=params)
            if not isinstance(batch, list):
                raise DiscordApiError("Invalid response format: Expected array of members")
            members.extend(item for item in batch if isinstance(item, dict))
            logger.debug(
                "discord_members_page_fetched",
                extra={"page": page, "page_size": len(batch), "total": len(members)},
            )
            if len(batch) < MEMBERS_PAGE_LIMIT:
                return members
            after = _last_user_id(batch)
            if after is None:
                return members
        logger.warning(
            "discord_members_page_limit_reached",
            extra={"max_pages": self._max_pages, "total": len(members)},
        )
        return members

    async def send_channel_message(self, channel_id: str, content: str) -> dict[str, Any]:
        result = await self._post(f"/channels/{channel_id}/messages", {"content": content})
        return result if isinstance(result, dict) else {}

    async def _get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        try:
            response = await self._http.get(
                f"{self._api_endpoint}{path}",
                params=params,
                headers=self._headers,
            )
        except HttpError as exc:
            raise DiscordApiError(str(exc), exc.status_code, exc.is_retryable) from exc
        return self._parse(response)

    async def _post(self, path: str, payload: dict[str, Any]) -> Any:
        try:
            response = await self._http.post(
                f"{self._api_endpoint}{path}",
                json=payload,
                headers=self._headers,
            )
        except HttpError as exc:
            raise DiscordApiError(str(exc), exc.status_code, exc.is_retryable) from exc
        return self._parse(response)

    @staticmethod
    def _parse(response: httpx.Response) -> Any:
        if not response.is_success:
            raise DiscordApiError(_error_message(response), response.status_code)
        if not response.content:
            return None
        return response.json()


def _last_user_id(batch: list[Any]) -> str | None:
    last = batch[-1] if batch else None
    if isinstance(last, dict) and isinstance(last.get("user"), dict):
        user_id = last["user"].get("id")
        return str(user_id) if user_id else None
    return None
