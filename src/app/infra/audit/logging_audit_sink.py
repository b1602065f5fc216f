"""Sink de auditoria que emite registros como logs estruturados."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.audit_sink import AuditSinkProtocol

if TYPE_CHECKING:
    from app.domain.audit import AuditLogEntry

logger = logging.getLogger("beluga.audit")

_FAILURE_LEVEL_EVENTS = frozenset({"security_violation", "error_occurred"})


class LoggingAuditSink(AuditSinkProtocol):
    """Escreve cada AuditLogEntry como um log JSON `audit_event`.

    Eventos de violação/erro saem em WARNING; os demais em INFO.
    """

    def write(self, entry: AuditLogEntry) -> None:
        payload = entry.as_dict()
        level = logging.WARNING if payload["event_type"] in _FAILURE_LEVEL_EVENTS else logging.INFO
        logger.log(
            level,
            "audit_event",
            extra={
                "audit": payload,
                "correlation_id": entry.request_id,
            },
        )
