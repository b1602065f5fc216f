"""Filters de logging para injeção de contexto e remoção de segredos.

Filters são responsáveis por adicionar campos contextuais
aos logs sem que o chamador precise informá-los manualmente,
e por impedir que campos sensíveis passados via `extra` cheguem
ao output.

Campos injetados:
- correlation_id: ID de rastreamento da requisição (request_id)
- service: Nome do serviço (ex: beluga_bot)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

# Substrings que marcam um campo `extra` como sensível (case-insensitive)
SENSITIVE_FIELD_MARKERS: tuple[str, ...] = (
    "token",
    "password",
    "secret",
    "key",
    "auth",
    "authorization",
)

# Atributos nativos do LogRecord nunca são removidos
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Importante: nunca adicionar payloads brutos ou PII nos logs.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Remove campos `extra` cujo nome indica credencial ou segredo.

    O record nunca é descartado: apenas os atributos sensíveis somem.

    Args:
        markers: Substrings que marcam um campo como sensível.
        allowed_fields: Campos preservados mesmo contendo um marker.
    """

    def __init__(
        self,
        markers: Iterable[str] = SENSITIVE_FIELD_MARKERS,
        allowed_fields: Iterable[str] = (),
    ) -> None:
        super().__init__()
        self._markers = tuple(marker.lower() for marker in markers)
        self._allowed = frozenset(allowed_fields)

    def is_sensitive(self, field_name: str) -> bool:
        """Indica se o nome do campo contém algum marker sensível."""
        if field_name in self._allowed or field_name in _STANDARD_RECORD_ATTRS:
            return False
        lowered = field_name.lower()
        return any(marker in lowered for marker in self._markers)

    def filter(self, record: logging.LogRecord) -> bool:
        for field_name in [name for name in vars(record) if self.is_sensitive(name)]:
            delattr(record, field_name)
        return True
