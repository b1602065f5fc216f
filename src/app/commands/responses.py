"""Construção do envelope de resposta de interações.

Formato: {"type": <int>, "data": {"content": str, "flags": int}}.
A resposta de PONG não carrega `data`.
"""

from __future__ import annotations

from typing import Any

from app.domain.interaction import EPHEMERAL_FLAG, InteractionResponseType

ERROR_PREFIX = "❌"


def pong_response() -> dict[str, Any]:
    return {"type": int(InteractionResponseType.PONG)}


def message_response(content: str, *, ephemeral: bool = False) -> dict[str, Any]:
    data: dict[str, Any] = {"content": content}
    if ephemeral:
        data["flags"] = EPHEMERAL_FLAG
    return {
        "type": int(InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE),
        "data": data,
    }


def ephemeral_response(content: str) -> dict[str, Any]:
    """Mensagem visível apenas para quem executou o comando."""
    return message_response(content, ephemeral=True)


def error_response(message: str) -> dict[str, Any]:
    """Erro efêmero com prefixo ❌."""
    return ephemeral_response(f"{ERROR_PREFIX} {message}")
