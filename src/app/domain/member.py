"""Modelos de membros do Discord e da linha gravada na planilha."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class DiscordUser(BaseModel):
    """Usuário como retornado pela Discord API (campos usados)."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Snowflake do usuário.")
    username: str = Field(..., description="Nome de usuário único.")
    global_name: str | None = Field(default=None, description="Nome de exibição global.")
    bot: bool = Field(default=False, description="Indica conta de bot.")


class GuildMember(BaseModel):
    """Membro de servidor como retornado por /guilds/{id}/members."""

    model_config = ConfigDict(extra="ignore")

    user: DiscordUser
    nick: str | None = Field(default=None, description="Apelido no servidor.")
    roles: list[str] = Field(default_factory=list, description="Cargos do membro.")
    joined_at: str = Field(..., description="Entrada no servidor (ISO-8601).")

    @property
    def display_name(self) -> str:
        """Prioridade: apelido > nome global > username."""
        return self.nick or self.user.global_name or self.user.username


@dataclass(frozen=True, slots=True)
class MemberRow:
    """Linha da aba Users (colunas A..G)."""

    discord_id: str
    display_name: str
    username: str
    joined_at: str
    is_banned: bool
    is_active: bool
    last_updated: str

    def as_row(self) -> list[str]:
        """Valores na ordem das colunas da planilha."""
        return [
            self.discord_id,
            self.display_name,
            self.username,
            self.joined_at,
            "TRUE" if self.is_banned else "FALSE",
            "TRUE" if self.is_active else "FALSE",
            self.last_updated,
        ]
