"""Modelos de domínio do pipeline de segurança de requests."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SecurityContext:
    """Contexto imutável criado uma vez por request na borda HTTP.

    Attributes:
        client_ip: IP do cliente (CF-Connecting-IP, X-Forwarded-For ou "unknown")
        user_agent: User-Agent informado (ou "unknown")
        timestamp: Momento de chegada em epoch ms
        request_id: UUID v4 da requisição (também usado como correlation_id)
    """

    client_ip: str
    user_agent: str
    timestamp: int
    request_id: str


@dataclass(frozen=True, slots=True)
class RateLimitEntry:
    """Contador de janela fixa para um cliente.

    Attributes:
        count: Requests consumidos na janela atual
        reset_time: Fim da janela em epoch ms
    """

    count: int
    reset_time: int

    def is_expired(self, now_ms: int) -> bool:
        """Janela expira estritamente após reset_time."""
        return now_ms > self.reset_time


@dataclass(frozen=True, slots=True)
class HeaderValidationResult:
    """Resultado das checagens estruturais de headers."""

    is_valid: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class SecurityValidationResult:
    """Decisão única do orquestrador de segurança.

    `context` é sempre o mesmo objeto recebido pelo orquestrador.
    """

    is_valid: bool
    context: SecurityContext
    error: str | None = None
