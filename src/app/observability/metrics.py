"""Métricas emitidas como logs estruturados.

Não há backend de métricas: cada ponto é um log `metric_latency` ou
`metric_counter` com `component`, `metric` e `value`, agregável na
plataforma de logs. O correlation_id, quando informado, sobrescreve o
do contexto (a sincronização em background roda fora do request).

Uso:
    record_latency("dispatcher", "register", elapsed_ms, context.request_id)
    record_counter("rate_limiter", "sweep_removed", removed)
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def _emit(
    event: str,
    component: str,
    metric: str,
    value: float,
    correlation_id: str | None,
) -> None:
    extra: dict[str, Any] = {"component": component, "metric": metric, "value": value}
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info(event, extra=extra)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Latência (ms, duas casas) de uma operação do componente."""
    _emit("metric_latency", component, operation, round(latency_ms, 2), correlation_id)


def record_counter(
    component: str,
    name: str,
    value: int = 1,
    correlation_id: str | None = None,
) -> None:
    _emit("metric_counter", component, name, value, correlation_id)
