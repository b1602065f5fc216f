"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="beluga_bot")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("sync_completed", extra={"rows_written": 42})

Campos em todo log: timestamp, level, logger, message, correlation_id, service.

Campos `extra` com nomes sensíveis (token, secret, key, auth...) são removidos.
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import (
    SENSITIVE_FIELD_MARKERS,
    CorrelationIdFilter,
    SensitiveFieldFilter,
)
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    IsoJsonFormatter,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "SENSITIVE_FIELD_MARKERS",
    "CorrelationIdFilter",
    "IsoJsonFormatter",
    "SensitiveFieldFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
]
