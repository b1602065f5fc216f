"""Settings específicas de Discord.

Configurações do bot Discord: credenciais da aplicação, canais
restritos dos comandos e parâmetros do cliente REST.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes da Discord API
DISCORD_API_VERSION: str = "v10"
DISCORD_API_BASE_URL: str = "https://discord.com/api"


@dataclass(frozen=True)
class DiscordSettings:
    """Configurações do bot Discord.

    Attributes:
        bot_token: Token do bot Discord
        application_id: ID da aplicação Discord
        public_key: Chave pública Ed25519 (hex) para verificação de interações
        admin_channel_id: Canal onde comandos administrativos são aceitos
        privileged_user_id: Único usuário autorizado a comandos administrativos
        register_request_channel_id: Canal onde /register é aceito em produção
        register_response_channel_id: Canal que recebe os cadastros do /register
        api_version: Versão da API
        api_base_url: URL base da API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de erro
    """

    # Credenciais
    bot_token: str = ""
    application_id: str = ""
    public_key: str = ""

    # Comandos restritos
    admin_channel_id: str = ""
    privileged_user_id: str = ""
    register_request_channel_id: str = ""
    register_response_channel_id: str = ""

    # API
    api_version: str = DISCORD_API_VERSION
    api_base_url: str = DISCORD_API_BASE_URL

    # Timeouts e retries
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url}/{self.api_version}"

    @property
    def missing_secrets(self) -> list[str]:
        """Nomes das variáveis obrigatórias ausentes (usado no health check)."""
        required = {
            "DISCORD_TOKEN": self.bot_token,
            "DISCORD_PUBLIC_KEY": self.public_key,
            "DISCORD_APPLICATION_ID": self.application_id,
        }
        return [name for name, value in required.items() if not value]

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Discord."""
        errors: list[str] = [f"{name} não configurado" for name in self.missing_secrets]
        if self.public_key:
            try:
                bytes.fromhex(self.public_key)
            except ValueError:
                errors.append("DISCORD_PUBLIC_KEY deve ser hexadecimal")
        if self.request_timeout_seconds <= 0:
            errors.append("DISCORD_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        if self.max_retries < 0:
            errors.append("DISCORD_MAX_RETRIES deve ser >= 0")
        return errors


def _load_from_env() -> DiscordSettings:
    """Carrega DiscordSettings de variáveis de ambiente."""
    return DiscordSettings(
        bot_token=os.getenv("DISCORD_TOKEN", ""),
        application_id=os.getenv("DISCORD_APPLICATION_ID", ""),
        public_key=os.getenv("DISCORD_PUBLIC_KEY", ""),
        admin_channel_id=os.getenv("TEST_CHANNEL_ID", ""),
        privileged_user_id=os.getenv("PRIVILEGED_USER_ID", ""),
        register_request_channel_id=os.getenv("REGISTER_COMMAND_REQUEST_CHANNEL_ID", ""),
        register_response_channel_id=os.getenv("REGISTER_COMMAND_RESPONSE_CHANNEL_ID", ""),
        api_version=os.getenv("DISCORD_API_VERSION", DISCORD_API_VERSION),
        api_base_url=os.getenv("DISCORD_API_BASE_URL", DISCORD_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("DISCORD_REQUEST_TIMEOUT_SECONDS", "30")),
        max_retries=int(os.getenv("DISCORD_MAX_RETRIES", "3")),
    )


@lru_cache(maxsize=1)
def get_discord_settings() -> DiscordSettings:
    """Retorna instância cacheada de DiscordSettings."""
    return _load_from_env()
