"""Agendador de tarefas em background sobre asyncio.

Tasks ficam referenciadas até terminar, com limite de concorrência via
semáforo. Falhas são registradas em log e nunca voltam para quem agendou.
No shutdown, `drain` aguarda as pendentes antes de o processo sair.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

from app.observability import correlation_scope
from app.protocols.task_scheduler import TaskSchedulerProtocol

if TYPE_CHECKING:
    from collections.abc import Coroutine

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 100


class AsyncioTaskScheduler(TaskSchedulerProtocol):
    """Executa coroutines como tasks asyncio rastreadas.

    Args:
        max_concurrency: Máximo de tasks executando ao mesmo tempo.
    """

    def __init__(self, max_concurrency: int = DEFAULT_MAX_CONCURRENCY) -> None:
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._active_tasks: set[asyncio.Task[Any]] = set()

    @property
    def active_count(self) -> int:
        return len(self._active_tasks)

    def schedule(
        self,
        coroutine: Coroutine[Any, Any, Any],
        *,
        correlation_id: str,
        name: str = "background_task",
    ) -> None:
        """Agenda task assíncrona com limite de concorrência."""
        task = asyncio.create_task(
            self._run_with_limit(coroutine, correlation_id),
            name=f"{name}:{correlation_id}",
        )
        self._active_tasks.add(task)
        task.add_done_callback(self._on_task_done)
        logger.info(
            "background_task_scheduled",
            extra={
                "task_name": name,
                "correlation_id": correlation_id,
                "active_tasks": len(self._active_tasks),
            },
        )

    async def _run_with_limit(
        self,
        coroutine: Coroutine[Any, Any, Any],
        correlation_id: str,
    ) -> None:
        with correlation_scope(correlation_id):
            async with self._semaphore:
                await coroutine

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._active_tasks.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "background_task_failed",
                    extra={
                        "task_name": task.get_name(),
                        "error_type": type(exc).__name__,
                        "active_tasks": len(self._active_tasks),
                    },
                )

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda tasks pendentes durante shutdown do processo."""
        if not self._active_tasks:
            return

        pending_now = list(self._active_tasks)
        logger.info(
            "background_tasks_shutdown_wait",
            extra={
                "pending_tasks": len(pending_now),
                "timeout_seconds": timeout_seconds,
            },
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "background_tasks_shutdown_cancelled",
            extra={"cancelled_tasks": len(pending)},
        )
