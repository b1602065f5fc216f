"""Execução de tarefas em background."""

from .asyncio_scheduler import AsyncioTaskScheduler

__all__ = ["AsyncioTaskScheduler"]
