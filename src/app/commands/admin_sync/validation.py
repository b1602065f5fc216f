"""Pipeline de validação de comandos administrativos.

Três estágios independentes, compostos com fail-fast:
1. estrutura da interação
2. usuário e configuração de ambiente
3. canal e permissão

Cada estágio devolve Ok | Err; ninguém levanta exceção para falhas esperadas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.interaction import extract_user_id
from app.domain.result import Err, Ok

if TYPE_CHECKING:
    from app.domain.result import Result

ERROR_INVALID_FORMAT = "Invalid interaction format"
ERROR_USER_UNAVAILABLE = "User information not available"
ERROR_MISSING_CONFIG = "Missing required environment configuration"
ERROR_GUILD_ONLY = "This command can only be used in a Discord server"
ERROR_WRONG_CHANNEL = "This command can only be used in the designated admin channel"
ERROR_FORBIDDEN = "Insufficient permissions for this admin command"

_IDENTITY_FIELDS = ("id", "type", "token", "version")


@dataclass(frozen=True, slots=True)
class AdminCommandConfig:
    """Configuração exigida por comandos privilegiados."""

    sheet_id: str
    admin_channel_id: str
    privileged_user_id: str

    @property
    def is_complete(self) -> bool:
        return bool(self.sheet_id and self.admin_channel_id and self.privileged_user_id)


@dataclass(frozen=True, slots=True)
class AdminAuthorization:
    """Dados do chamador autorizado."""

    user_id: str
    guild_id: str
    channel_id: str


def validate_interaction_structure(interaction: Any) -> Result[dict[str, Any]]:
    """Exige campos de identidade (id, type, token, version) e bloco `data`."""
    if not isinstance(interaction, dict):
        return Err(ERROR_INVALID_FORMAT)
    for field_name in _IDENTITY_FIELDS:
        value = interaction.get(field_name)
        if value is None or value == "":
            return Err(ERROR_INVALID_FORMAT)
    if not isinstance(interaction.get("data"), dict):
        return Err(ERROR_INVALID_FORMAT)
    return Ok(interaction)


def validate_user_and_environment(
    interaction: dict[str, Any],
    config: AdminCommandConfig,
) -> Result[str]:
    """Resolve o user id (guild ou DM) e confere a configuração privilegiada."""
    user_id = extract_user_id(interaction)
    if user_id is None:
        return Err(ERROR_USER_UNAVAILABLE)
    if not config.is_complete:
        return Err(ERROR_MISSING_CONFIG)
    return Ok(user_id)


def validate_channel_permissions(
    interaction: dict[str, Any],
    user_id: str,
    config: AdminCommandConfig,
) -> Result[AdminAuthorization]:
    """Canal deve ser o admin configurado e usuário o privilegiado."""
    guild_id = str(interaction.get("guild_id") or "")
    if not guild_id:
        return Err(ERROR_GUILD_ONLY)
    channel_id = str(interaction.get("channel_id") or "")
    if channel_id != config.admin_channel_id:
        return Err(ERROR_WRONG_CHANNEL)
    if user_id != config.privileged_user_id:
        return Err(ERROR_FORBIDDEN)
    return Ok(AdminAuthorization(user_id=user_id, guild_id=guild_id, channel_id=channel_id))


def run_admin_validation(
    interaction: Any,
    config: AdminCommandConfig,
) -> Result[AdminAuthorization]:
    """Executa os três estágios em ordem; o primeiro Err encerra."""
    structure = validate_interaction_structure(interaction)
    if isinstance(structure, Err):
        return structure
    user = validate_user_and_environment(structure.value, config)
    if isinstance(user, Err):
        return user
    return validate_channel_permissions(structure.value, user.value, config)
