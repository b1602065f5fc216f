"""Testes do AuditLogger."""

from __future__ import annotations

from app.audit import AuditLogger
from app.domain.audit import AuditEventType
from app.infra.stores import MemoryAuditSink
from app.protocols.audit_sink import AuditSinkProtocol
from tests.fakes.interactions import build_command_interaction, build_context


class BrokenSink(AuditSinkProtocol):
    def write(self, entry) -> None:
        raise OSError("disk full")


class TestAuditLogger:
    """Montagem dos registros."""

    def test_command_execution_captures_interaction_fields(self) -> None:
        sink = MemoryAuditSink()
        interaction = build_command_interaction("register", channel_id="42")

        AuditLogger(sink).command_execution(
            build_context("req-a"),
            interaction=interaction,
            success=True,
            response_time_ms=12.3456,
        )

        entry = sink.entries[0]
        assert entry.event_type == AuditEventType.COMMAND_EXECUTED
        assert entry.request_id == "req-a"
        assert entry.command_name == "register"
        assert entry.channel_id == "42"
        assert entry.response_time_ms == 12.35
        assert entry.client_ip == "203.0.113.7"

    def test_security_violation_format(self) -> None:
        sink = MemoryAuditSink()

        AuditLogger(sink).security_violation(
            build_context(),
            violation_type="REQUEST_VALIDATION",
            details="Invalid Discord signature",
        )

        entry = sink.entries[0]
        assert entry.success is False
        assert entry.error == "REQUEST_VALIDATION: Invalid Discord signature"
        assert entry.metadata == {"violation_type": "REQUEST_VALIDATION"}

    def test_as_dict_omits_missing_fields(self) -> None:
        sink = MemoryAuditSink()
        AuditLogger(sink).request_verified(build_context())

        payload = sink.entries[0].as_dict()

        assert payload["event_type"] == "request_verified"
        assert "user_id" not in payload
        assert "error" not in payload

    def test_sink_failure_does_not_propagate(self) -> None:
        entry = AuditLogger(BrokenSink()).log(AuditEventType.HEALTH_CHECK, build_context())
        assert entry.event_type == AuditEventType.HEALTH_CHECK
