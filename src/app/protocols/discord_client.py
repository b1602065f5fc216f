"""Protocolo do cliente REST do Discord usado pelo app."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class DiscordApiClientProtocol(ABC):
    """Contrato mínimo para chamadas à Discord REST API.

    Erros de API devem ser levantados como DiscordApiError.
    """

    @abstractmethod
    async def list_guild_members(self, guild_id: str) -> list[dict[str, Any]]:
        """Lista todos os membros do servidor (paginação interna)."""

    @abstractmethod
    async def send_channel_message(self, channel_id: str, content: str) -> dict[str, Any]:
        """Envia mensagem de texto para um canal."""
