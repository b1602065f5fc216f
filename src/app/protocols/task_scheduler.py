"""Protocolo de agendamento de trabalho desacoplado do request."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Coroutine


class TaskSchedulerProtocol(ABC):
    """Executa coroutines após a resposta, sem deixar o processo morrer antes.

    Implementações devem manter referência forte às tasks e registrar
    falhas em log; nenhuma exceção volta para quem agendou.
    """

    @abstractmethod
    def schedule(
        self,
        coroutine: Coroutine[Any, Any, Any],
        *,
        correlation_id: str,
        name: str = "background_task",
    ) -> None:
        """Agenda a coroutine para execução em background."""
