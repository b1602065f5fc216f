"""Contrato de handlers de comando de aplicação."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.domain.security import SecurityContext


class CommandHandler(ABC):
    """Handler de um slash command, registrado pelo `name`.

    Falhas esperadas devem virar resposta efêmera; exceções que escaparem
    são convertidas pelo dispatcher em mensagem genérica.
    """

    name: str

    @abstractmethod
    async def handle(
        self,
        interaction: dict[str, Any],
        context: SecurityContext,
    ) -> dict[str, Any]:
        """Processa a interação e devolve o envelope de resposta."""
