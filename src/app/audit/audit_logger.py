"""Montagem e emissão de registros de auditoria.

Cada evento do ciclo de vida (recebido, verificado, rejeitado, comando
executado/falho, violação, erro) vira um AuditLogEntry com os dados do
SecurityContext e, quando houver, da interação.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.audit import AuditEventType, AuditLogEntry
from app.domain.interaction import extract_command_name, extract_user_id, optional_str
from utils.timestamps import utc_now_iso

if TYPE_CHECKING:
    from app.domain.security import SecurityContext
    from app.protocols.audit_sink import AuditSinkProtocol

logger = logging.getLogger(__name__)


class AuditLogger:
    """Fachada de auditoria sobre um AuditSinkProtocol."""

    def __init__(self, sink: AuditSinkProtocol) -> None:
        self._sink = sink

    def log(
        self,
        event_type: AuditEventType,
        context: SecurityContext,
        *,
        interaction: dict[str, Any] | None = None,
        success: bool = True,
        error: str | None = None,
        response_time_ms: float | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> AuditLogEntry:
        """Monta o registro e entrega ao sink.

        Falha do sink é registrada e engolida: auditoria nunca derruba o request.
        """
        payload = interaction or {}
        entry = AuditLogEntry(
            timestamp=utc_now_iso(),
            request_id=context.request_id,
            event_type=event_type,
            client_ip=context.client_ip,
            user_agent=context.user_agent,
            success=success,
            user_id=extract_user_id(payload),
            guild_id=optional_str(payload, "guild_id"),
            channel_id=optional_str(payload, "channel_id"),
            command_name=extract_command_name(payload),
            error=error,
            response_time_ms=round(response_time_ms, 2) if response_time_ms is not None else None,
            metadata=metadata,
        )
        try:
            self._sink.write(entry)
        except Exception:
            logger.exception(
                "audit_write_failed",
                extra={"request_id": context.request_id, "event_type": str(event_type)},
            )
        return entry

    def request_received(self, context: SecurityContext, *, method: str, path: str) -> None:
        self.log(
            AuditEventType.REQUEST_RECEIVED,
            context,
            metadata={"method": method, "path": path},
        )

    def request_verified(self, context: SecurityContext) -> None:
        self.log(AuditEventType.REQUEST_VERIFIED, context)

    def request_rejected(self, context: SecurityContext, *, reason: str) -> None:
        self.log(AuditEventType.REQUEST_REJECTED, context, success=False, error=reason)

    def command_execution(
        self,
        context: SecurityContext,
        *,
        interaction: dict[str, Any],
        success: bool,
        response_time_ms: float,
        error: str | None = None,
    ) -> None:
        event_type = AuditEventType.COMMAND_EXECUTED if success else AuditEventType.COMMAND_FAILED
        self.log(
            event_type,
            context,
            interaction=interaction,
            success=success,
            response_time_ms=response_time_ms,
            error=error,
        )

    def security_violation(
        self,
        context: SecurityContext,
        *,
        violation_type: str,
        details: str,
    ) -> None:
        self.log(
            AuditEventType.SECURITY_VIOLATION,
            context,
            success=False,
            error=f"{violation_type}: {details}",
            metadata={"violation_type": violation_type},
        )

    def rate_limit_exceeded(self, context: SecurityContext) -> None:
        self.log(
            AuditEventType.RATE_LIMIT_EXCEEDED,
            context,
            success=False,
            error="Rate limit exceeded",
        )

    def health_check(self, context: SecurityContext, *, healthy: bool) -> None:
        self.log(AuditEventType.HEALTH_CHECK, context, success=healthy)

    def error_occurred(
        self,
        context: SecurityContext,
        *,
        error: str,
        interaction: dict[str, Any] | None = None,
    ) -> None:
        self.log(
            AuditEventType.ERROR_OCCURRED,
            context,
            interaction=interaction,
            success=False,
            error=error,
        )
