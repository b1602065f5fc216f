"""Comandos de aplicação: roteamento, respostas e handlers."""

from app.commands.base import CommandHandler
from app.commands.dispatcher import DispatchResult, InteractionDispatcher

__all__ = [
    "CommandHandler",
    "DispatchResult",
    "InteractionDispatcher",
]
