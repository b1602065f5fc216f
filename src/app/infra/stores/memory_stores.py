"""Stores em memória do processo.

O MemoryRateLimitStore é o store de produção do rate limiter: cada
instância do serviço mantém seus próprios contadores (sem persistência
entre reinícios e sem compartilhamento entre réplicas).
MemoryAuditSink é apenas para dev/test.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.protocols.audit_sink import AuditSinkProtocol
from app.protocols.rate_limit_store import RateLimitStoreProtocol

if TYPE_CHECKING:
    from collections.abc import Iterator

    from app.domain.audit import AuditEventType, AuditLogEntry
    from app.domain.security import RateLimitEntry


class MemoryRateLimitStore(RateLimitStoreProtocol):
    """Mapa cliente -> RateLimitEntry em memória."""

    def __init__(self) -> None:
        self._entries: dict[str, RateLimitEntry] = {}

    def get(self, client_key: str) -> RateLimitEntry | None:
        return self._entries.get(client_key)

    def set(self, client_key: str, entry: RateLimitEntry) -> None:
        self._entries[client_key] = entry

    def delete(self, client_key: str) -> bool:
        return self._entries.pop(client_key, None) is not None

    def items(self) -> Iterator[tuple[str, RateLimitEntry]]:
        # Cópia: permite delete durante a iteração da varredura
        return iter(list(self._entries.items()))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class MemoryAuditSink(AuditSinkProtocol):
    """Sink de auditoria em memória (apenas dev/test)."""

    def __init__(self) -> None:
        self.entries: list[AuditLogEntry] = []

    def write(self, entry: AuditLogEntry) -> None:
        self.entries.append(entry)

    def of_type(self, event_type: AuditEventType) -> list[AuditLogEntry]:
        """Filtra registros pelo tipo de evento."""
        return [entry for entry in self.entries if entry.event_type == event_type]
