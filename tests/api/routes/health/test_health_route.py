"""Testes do endpoint de health check."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.routes.health import router as health_router
from app.app import create_app
from app.audit import AuditLogger
from app.domain.audit import AuditEventType
from app.infra.stores import MemoryAuditSink


@pytest.fixture
def sink(monkeypatch: pytest.MonkeyPatch) -> MemoryAuditSink:
    sink = MemoryAuditSink()
    audit = AuditLogger(sink)
    monkeypatch.setattr(health_router, "_get_audit_logger", lambda: audit)
    return sink


def _set_secrets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DISCORD_TOKEN", "token")
    monkeypatch.setenv("DISCORD_PUBLIC_KEY", "ab" * 32)
    monkeypatch.setenv("DISCORD_APPLICATION_ID", "1234")


def test_health_returns_200_when_secrets_present(monkeypatch, sink) -> None:
    _set_secrets(monkeypatch)
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("DEPLOYMENT_SOURCE", "github-actions")

    response = TestClient(create_app()).get("/")
    payload = response.json()

    assert response.status_code == 200
    assert payload["status"] == "healthy"
    assert payload["message"] == "Beluga Discord Bot is running!"
    assert payload["timestamp"].endswith("Z")
    assert payload["checks"] == {
        "secrets": "pass",
        "environment": "production",
        "deploymentSource": "github-actions",
    }
    assert sink.entries[0].event_type == AuditEventType.HEALTH_CHECK
    assert sink.entries[0].success is True


def test_health_returns_503_when_secret_missing(monkeypatch, sink) -> None:
    _set_secrets(monkeypatch)
    monkeypatch.delenv("DISCORD_TOKEN")

    response = TestClient(create_app()).get("/")
    payload = response.json()

    assert response.status_code == 503
    assert payload["status"] == "unhealthy"
    assert payload["message"] == "Beluga Discord Bot has issues"
    assert payload["checks"]["secrets"] == "fail"
    assert sink.entries[0].success is False
