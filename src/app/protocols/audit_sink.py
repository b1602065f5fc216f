"""Protocolo de destino para registros de auditoria."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.audit import AuditLogEntry


class AuditSinkProtocol(ABC):
    """Recebe registros de auditoria já montados (write-once)."""

    @abstractmethod
    def write(self, entry: AuditLogEntry) -> None:
        """Persiste/emite o registro. Não deve levantar exceção."""
