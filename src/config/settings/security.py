"""Settings de segurança das interações.

Limites aplicados pelo pipeline de verificação de requests
(rate limit, payload, janela de timestamp, timeout) e pelo
agendador de tarefas em background.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class SecuritySettings:
    """Configurações do pipeline de segurança.

    Attributes:
        rate_limit_requests: Requests permitidos por cliente na janela
        rate_limit_window_seconds: Duração da janela fixa
        max_payload_bytes: Tamanho máximo do body (inclusive)
        max_timestamp_skew_seconds: Desvio máximo do header de timestamp
        request_timeout_seconds: Timeout de operações externas no caminho síncrono
        cleanup_probability: Probabilidade de varredura do rate limiter por request
        max_background_tasks: Concorrência máxima de tarefas em background
        shutdown_drain_seconds: Espera por tarefas pendentes no shutdown
        trust_proxy_headers: Usa CF-Connecting-IP/X-Forwarded-For como IP do cliente.
            Só é seguro atrás de um proxy que sobrescreve esses headers.
    """

    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 60
    max_payload_bytes: int = 1024 * 1024  # 1 MiB
    max_timestamp_skew_seconds: int = 300
    request_timeout_seconds: float = 10.0
    cleanup_probability: float = 0.01
    max_background_tasks: int = 100
    shutdown_drain_seconds: float = 30.0
    trust_proxy_headers: bool = True

    @property
    def rate_limit_window_ms(self) -> int:
        """Janela do rate limit em milissegundos."""
        return self.rate_limit_window_seconds * 1000

    def validate(self) -> list[str]:
        """Valida limites de segurança."""
        errors: list[str] = []
        if self.rate_limit_requests <= 0:
            errors.append("RATE_LIMIT_REQUESTS deve ser > 0")
        if self.rate_limit_window_seconds <= 0:
            errors.append("RATE_LIMIT_WINDOW_SECONDS deve ser > 0")
        if self.max_payload_bytes <= 0:
            errors.append("MAX_PAYLOAD_BYTES deve ser > 0")
        if self.max_timestamp_skew_seconds <= 0:
            errors.append("MAX_TIMESTAMP_SKEW_SECONDS deve ser > 0")
        if self.request_timeout_seconds <= 0:
            errors.append("REQUEST_TIMEOUT_SECONDS deve ser > 0")
        if not 0.0 <= self.cleanup_probability <= 1.0:
            errors.append("RATE_LIMIT_CLEANUP_PROBABILITY deve estar entre 0 e 1")
        if self.max_background_tasks <= 0:
            errors.append("MAX_BACKGROUND_TASKS deve ser > 0")
        return errors


def _env_flag(name: str, *, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _load_from_env() -> SecuritySettings:
    """Carrega SecuritySettings de variáveis de ambiente."""
    return SecuritySettings(
        rate_limit_requests=int(os.getenv("RATE_LIMIT_REQUESTS", "100")),
        rate_limit_window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60")),
        max_payload_bytes=int(os.getenv("MAX_PAYLOAD_BYTES", str(1024 * 1024))),
        max_timestamp_skew_seconds=int(os.getenv("MAX_TIMESTAMP_SKEW_SECONDS", "300")),
        request_timeout_seconds=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10")),
        cleanup_probability=float(os.getenv("RATE_LIMIT_CLEANUP_PROBABILITY", "0.01")),
        max_background_tasks=int(os.getenv("MAX_BACKGROUND_TASKS", "100")),
        shutdown_drain_seconds=float(os.getenv("SHUTDOWN_DRAIN_SECONDS", "30")),
        trust_proxy_headers=_env_flag("TRUST_PROXY_HEADERS", default=True),
    )


@lru_cache(maxsize=1)
def get_security_settings() -> SecuritySettings:
    """Retorna instância cacheada de SecuritySettings."""
    return _load_from_env()
