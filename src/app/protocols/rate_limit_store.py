"""Protocolo de store para contadores de rate limit.

Interface leve (ABC) dependida pelo RateLimiter. Produção usa uma
instância por processo; testes injetam stores isolados.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from app.domain.security import RateLimitEntry


class RateLimitStoreProtocol(ABC):
    """Contrato síncrono para o mapa cliente -> RateLimitEntry.

    Métodos síncronos: check-and-increment não cede o event loop,
    o que o torna atômico dentro de um processo.
    """

    @abstractmethod
    def get(self, client_key: str) -> RateLimitEntry | None:
        """Retorna a entrada do cliente (ou None)."""

    @abstractmethod
    def set(self, client_key: str, entry: RateLimitEntry) -> None:
        """Grava/substitui a entrada do cliente."""

    @abstractmethod
    def delete(self, client_key: str) -> bool:
        """Remove a entrada; retorna True se existia."""

    @abstractmethod
    def items(self) -> Iterator[tuple[str, RateLimitEntry]]:
        """Itera sobre (client_key, entry) vivos no store."""

    @abstractmethod
    def clear(self) -> None:
        """Remove todas as entradas."""
