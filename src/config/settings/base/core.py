"""Settings base do Beluga Bot.

Ambiente de execução, nível de log e metadados de deploy exibidos
no health check.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "test", "staging", "production"]

ENVIRONMENTS: tuple[str, ...] = ("development", "test", "staging", "production")
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "dev": "development",
    "local": "development",
    "testing": "test",
    "stage": "staging",
    "prod": "production",
}


@dataclass(frozen=True)
class BaseSettings:
    """Configurações comuns do processo.

    Attributes:
        environment: development | test | staging | production
        log_level: Nível do root logger
        deployment_source: Origem do deploy (ex: github-actions)
        port: Porta HTTP usada pelo entrypoint de desenvolvimento
    """

    environment: Environment = "development"
    log_level: str = "INFO"
    deployment_source: str = "unknown"
    port: int = 8080

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Lista de erros de configuração (vazia = OK)."""
        errors: list[str] = []
        if self.environment not in ENVIRONMENTS:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")
        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")
        if not 0 < self.port < 65536:
            errors.append(f"PORT fora do intervalo: {self.port}")
        return errors


def _parse_environment(raw: str) -> Environment:
    value = raw.strip().lower()
    if value in ENVIRONMENTS:
        return value  # type: ignore[return-value]
    # Valor vazio ou desconhecido cai em development
    return _ENVIRONMENT_ALIASES.get(value, "development")


def _load_base_from_env() -> BaseSettings:
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "")),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        deployment_source=os.getenv("DEPLOYMENT_SOURCE", "unknown"),
        port=int(os.getenv("PORT", "8080")),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
