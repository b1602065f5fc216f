"""Checagens estruturais dos headers de uma interação.

Executadas antes de qualquer operação criptográfica, em ordem,
parando na primeira falha.
"""

from __future__ import annotations

import re
import time
from typing import TYPE_CHECKING

from app.domain.security import HeaderValidationResult

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "x-signature-ed25519"
TIMESTAMP_HEADER = "x-signature-timestamp"
EXPECTED_CONTENT_TYPE = "application/json"
DEFAULT_MAX_TIMESTAMP_SKEW_SECONDS = 300

ERROR_MISSING_SIGNATURE = "Missing signature header"
ERROR_MISSING_TIMESTAMP = "Missing timestamp header"
ERROR_INVALID_CONTENT_TYPE = "Invalid Content-Type"
ERROR_TIMESTAMP_SKEW = "Request timestamp too old or too far in future"

# Só dígitos ASCII; 15 dígitos cobrem qualquer epoch em segundos realista
_TIMESTAMP_PATTERN = re.compile(r"[0-9]{1,15}")


def _lower_keys(headers: Mapping[str, str]) -> dict[str, str]:
    return {name.lower(): value for name, value in headers.items()}


def media_type(content_type: str) -> str:
    """Extrai o media type (sem parâmetros) em minúsculas."""
    return content_type.split(";", 1)[0].strip().lower()


def validate_headers(
    headers: Mapping[str, str],
    *,
    now_seconds: float | None = None,
    max_skew_seconds: int = DEFAULT_MAX_TIMESTAMP_SKEW_SECONDS,
) -> HeaderValidationResult:
    """Valida presença de assinatura/timestamp, Content-Type e janela de tempo.

    Args:
        headers: Headers do request (qualquer capitalização).
        now_seconds: Relógio atual em epoch segundos (padrão: time.time()).
        max_skew_seconds: Desvio máximo permitido do timestamp.

    Returns:
        HeaderValidationResult com o primeiro erro encontrado.
    """
    normalized = _lower_keys(headers)

    if not normalized.get(SIGNATURE_HEADER):
        return HeaderValidationResult(is_valid=False, error=ERROR_MISSING_SIGNATURE)

    timestamp = normalized.get(TIMESTAMP_HEADER)
    if not timestamp:
        return HeaderValidationResult(is_valid=False, error=ERROR_MISSING_TIMESTAMP)

    if media_type(normalized.get("content-type", "")) != EXPECTED_CONTENT_TYPE:
        return HeaderValidationResult(is_valid=False, error=ERROR_INVALID_CONTENT_TYPE)

    # Timestamp não numérico é tratado como fora da janela
    candidate = timestamp.strip()
    if not _TIMESTAMP_PATTERN.fullmatch(candidate):
        return HeaderValidationResult(is_valid=False, error=ERROR_TIMESTAMP_SKEW)

    now = time.time() if now_seconds is None else now_seconds
    if abs(int(now) - int(candidate)) > max_skew_seconds:
        return HeaderValidationResult(is_valid=False, error=ERROR_TIMESTAMP_SKEW)

    return HeaderValidationResult(is_valid=True)
