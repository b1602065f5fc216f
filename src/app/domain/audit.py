"""Modelos de domínio da trilha de auditoria."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any


class AuditEventType(StrEnum):
    """Tipos de evento auditados no ciclo de vida do request."""

    REQUEST_RECEIVED = "request_received"
    REQUEST_VERIFIED = "request_verified"
    REQUEST_REJECTED = "request_rejected"
    COMMAND_EXECUTED = "command_executed"
    COMMAND_FAILED = "command_failed"
    SECURITY_VIOLATION = "security_violation"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    HEALTH_CHECK = "health_check"
    ERROR_OCCURRED = "error_occurred"


@dataclass(frozen=True, slots=True)
class AuditLogEntry:
    """Registro de auditoria (escrito uma vez no sink)."""

    timestamp: str
    request_id: str
    event_type: AuditEventType
    client_ip: str
    user_agent: str
    success: bool = True
    user_id: str | None = None
    guild_id: str | None = None
    channel_id: str | None = None
    command_name: str | None = None
    error: str | None = None
    response_time_ms: float | None = None
    metadata: dict[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        """Serializa omitindo campos opcionais ausentes."""
        payload = asdict(self)
        payload["event_type"] = str(self.event_type)
        return {key: value for key, value in payload.items() if value is not None}
