"""Roteamento de interações verificadas para handlers de comando.

- PING: PONG imediato
- APPLICATION_COMMAND: handler por `data.name`; nome desconhecido gera
  resposta efêmera e exceções do handler viram mensagem genérica
- Demais tipos: rejeitados na camada HTTP (400)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.commands.responses import error_response, pong_response
from app.domain.interaction import InteractionType, extract_command_name
from app.observability import record_latency

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.audit import AuditLogger
    from app.commands.base import CommandHandler
    from app.domain.security import SecurityContext

logger = logging.getLogger(__name__)

UNKNOWN_COMMAND_MESSAGE = "Unknown command. Please try again."
COMMAND_FAILED_MESSAGE = "An error occurred while processing your command."
BAD_REQUEST_MESSAGE = "Bad request"


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Resultado do despacho.

    `body` é o envelope JSON; quando None a camada HTTP responde `text`.
    """

    status_code: int
    body: dict[str, Any] | None = None
    text: str | None = None


class InteractionDispatcher:
    """Despacha interações por tipo e nome de comando."""

    def __init__(
        self,
        handlers: Iterable[CommandHandler],
        *,
        audit: AuditLogger,
    ) -> None:
        self._handlers = {handler.name: handler for handler in handlers}
        self._audit = audit

    @property
    def command_names(self) -> list[str]:
        return sorted(self._handlers)

    async def dispatch(
        self,
        interaction: dict[str, Any],
        context: SecurityContext,
    ) -> DispatchResult:
        interaction_type = interaction.get("type")

        if interaction_type == InteractionType.PING:
            return DispatchResult(status_code=200, body=pong_response())

        if interaction_type == InteractionType.APPLICATION_COMMAND:
            body = await self._run_command(interaction, context)
            return DispatchResult(status_code=200, body=body)

        logger.info(
            "interaction_type_unsupported",
            extra={"request_id": context.request_id, "interaction_type": interaction_type},
        )
        return DispatchResult(status_code=400, text=BAD_REQUEST_MESSAGE)

    async def _run_command(
        self,
        interaction: dict[str, Any],
        context: SecurityContext,
    ) -> dict[str, Any]:
        command_name = extract_command_name(interaction)
        handler = self._handlers.get(command_name or "")
        if handler is None:
            logger.info(
                "command_unknown",
                extra={"request_id": context.request_id, "command_name": command_name},
            )
            return error_response(UNKNOWN_COMMAND_MESSAGE)

        started_at = time.perf_counter()
        try:
            body = await handler.handle(interaction, context)
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - started_at) * 1000
            logger.exception(
                "command_handler_failed",
                extra={"request_id": context.request_id, "command_name": command_name},
            )
            self._audit.command_execution(
                context,
                interaction=interaction,
                success=False,
                response_time_ms=elapsed_ms,
                error=str(exc) or type(exc).__name__,
            )
            return error_response(COMMAND_FAILED_MESSAGE)

        elapsed_ms = (time.perf_counter() - started_at) * 1000
        record_latency("dispatcher", command_name or "unknown", elapsed_ms, context.request_id)
        self._audit.command_execution(
            context,
            interaction=interaction,
            success=True,
            response_time_ms=elapsed_ms,
        )
        return body
