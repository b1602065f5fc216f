"""Configuração centralizada de logging.

Um único handler JSON no root logger. Cada record recebe
`correlation_id` (request_id da interação) e `service`; campos
sensíveis passados em `extra` são removidos antes da serialização.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="beluga_bot")

    logger = get_logger(__name__)
    logger.info("interaction_dispatched", extra={"latency_ms": 42})
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SensitiveFieldFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "beluga_bot"

# Bibliotecas de IO logam cada request em INFO; só avisos interessam
NOISY_LOGGERS: dict[str, str] = {
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "googleapiclient.discovery_cache": "ERROR",
    "google.auth.transport.requests": "WARNING",
}


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    logger_levels: Mapping[str, str] | None = None,
) -> logging.Handler:
    """Instala o handler JSON no root logger e retorna o handler.

    Chamadas repetidas substituem a configuração anterior.

    Args:
        level: Nível do root logger (case-insensitive).
        service_name: Valor do campo `service`.
        correlation_id_getter: Fonte do correlation_id corrente (ContextVar).
        logger_levels: Níveis por logger; default silencia clientes HTTP.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SensitiveFieldFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    for name, logger_level in (logger_levels or NOISY_LOGGERS).items():
        logging.getLogger(name).setLevel(logger_level.upper())

    return handler


def get_logger(name: str) -> logging.Logger:
    """Atalho para `logging.getLogger`; o contexto vem dos filters do handler."""
    return logging.getLogger(name)
