"""Formatter JSON dos logs do bot.

Saída de um record:
    {"timestamp": "2026-02-02T10:30:00.123Z", "level": "INFO",
     "logger": "app.commands.dispatcher", "message": "interaction_dispatched",
     "correlation_id": "5f0c...", "service": "beluga_bot", ...extras}

O timestamp usa o mesmo formato ISO-8601 UTC com milissegundos dos
registros de auditoria, para que os dois fluxos possam ser cruzados.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from pythonjsonlogger.json import JsonFormatter

from utils.timestamps import format_iso_timestamp

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "asctime": "timestamp",
    "levelname": "level",
    "name": "logger",
}


class IsoJsonFormatter(JsonFormatter):
    """JsonFormatter com `asctime` em ISO-8601 UTC (sufixo Z)."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        return format_iso_timestamp(datetime.fromtimestamp(record.created, UTC))


def create_json_formatter() -> IsoJsonFormatter:
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return IsoJsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
