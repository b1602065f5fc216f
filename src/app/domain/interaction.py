"""Tipos e helpers para payloads de interação do Discord.

Interações chegam como JSON cru (dict); os helpers aqui extraem os
campos usados pelo roteamento e pela auditoria sem assumir formato.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

# Bit de flag que torna a resposta visível apenas ao autor
EPHEMERAL_FLAG = 1 << 6


class InteractionType(IntEnum):
    """Tipos de interação recebidos pelo webhook."""

    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class InteractionResponseType(IntEnum):
    """Tipos de resposta aceitos pelo Discord."""

    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5


def extract_user_id(interaction: dict[str, Any]) -> str | None:
    """Resolve o autor a partir de `member.user` (guild) ou `user` (DM)."""
    member = interaction.get("member")
    if isinstance(member, dict):
        user = member.get("user")
        if isinstance(user, dict) and user.get("id"):
            return str(user["id"])
    user = interaction.get("user")
    if isinstance(user, dict) and user.get("id"):
        return str(user["id"])
    return None


def extract_command_name(interaction: dict[str, Any]) -> str | None:
    data = interaction.get("data")
    if isinstance(data, dict) and isinstance(data.get("name"), str):
        return data["name"]
    return None


def extract_option_values(interaction: dict[str, Any]) -> dict[str, Any]:
    """Mapeia nome -> valor das opções de primeiro nível do comando."""
    data = interaction.get("data")
    if not isinstance(data, dict):
        return {}
    options = data.get("options") or []
    values: dict[str, Any] = {}
    for option in options:
        if isinstance(option, dict) and isinstance(option.get("name"), str):
            values[option["name"]] = option.get("value")
    return values


def optional_str(interaction: dict[str, Any], field: str) -> str | None:
    value = interaction.get(field)
    return str(value) if value else None
