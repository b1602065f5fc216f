"""Orquestrador de segurança das interações recebidas.

Sequência (cada passo interrompe na primeira falha):
1. Headers estruturais (assinatura, timestamp, Content-Type, janela de tempo)
2. Rate limit por IP do cliente
3. Tamanho do payload
4. Assinatura Ed25519 de `timestamp + body`, limitada por timeout

Qualquer exceção inesperada vira "Verification error: <mensagem>".
Toda verificação, aceita ou rejeitada, termina com a varredura
probabilística do rate limiter, para que requests inválidos com IPs
rotativos não acumulem entradas.
O SecurityContext recebido é devolvido sem alteração em todos os casos.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.domain.security import SecurityValidationResult
from app.security.headers import (
    DEFAULT_MAX_TIMESTAMP_SKEW_SECONDS,
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    validate_headers,
)
from app.security.rate_limiter import DEFAULT_CLEANUP_PROBABILITY
from app.security.timeouts import DEFAULT_TIMEOUT_SECONDS, with_timeout

if TYPE_CHECKING:
    from collections.abc import Callable

    from starlette.requests import Request

    from app.domain.security import SecurityContext
    from app.protocols.signature_verifier import SignatureVerifierProtocol
    from app.security.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAYLOAD_BYTES = 1024 * 1024

ERROR_RATE_LIMITED = "Rate limit exceeded"
ERROR_PAYLOAD_TOO_LARGE = "Payload too large"
ERROR_INVALID_SIGNATURE = "Invalid Discord signature"


def rate_limit_client_key(client_ip: str) -> str:
    return f"rate_limit:{client_ip}"


class SecurityOrchestrator:
    """Combina as checagens de segurança numa única decisão."""

    def __init__(
        self,
        *,
        rate_limiter: RateLimiter,
        verifier: SignatureVerifierProtocol,
        max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES,
        max_skew_seconds: int = DEFAULT_MAX_TIMESTAMP_SKEW_SECONDS,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        cleanup_probability: float = DEFAULT_CLEANUP_PROBABILITY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._rate_limiter = rate_limiter
        self._verifier = verifier
        self._max_payload_bytes = max_payload_bytes
        self._max_skew_seconds = max_skew_seconds
        self._timeout_seconds = timeout_seconds
        self._cleanup_probability = cleanup_probability
        self._clock = clock

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    async def verify_request_secure(
        self,
        request: Request,
        public_key: str,
        context: SecurityContext,
    ) -> SecurityValidationResult:
        """Verifica o request e devolve decisão com motivo.

        Args:
            request: Request HTTP recebido (body é lido e cacheado).
            public_key: Chave pública Ed25519 da aplicação (hex).
            context: Contexto criado na borda; devolvido intacto.
        """
        try:
            return await self._verify(request, public_key, context)
        except Exception as exc:
            logger.warning(
                "request_verification_error",
                extra={
                    "request_id": context.request_id,
                    "error_type": type(exc).__name__,
                },
            )
            return self._reject(context, f"Verification error: {exc}")
        finally:
            self._sweep_rate_limits()

    async def _verify(
        self,
        request: Request,
        public_key: str,
        context: SecurityContext,
    ) -> SecurityValidationResult:
        headers = request.headers
        header_result = validate_headers(
            headers,
            now_seconds=self._clock(),
            max_skew_seconds=self._max_skew_seconds,
        )
        if not header_result.is_valid:
            return self._reject(context, header_result.error or "Invalid headers")

        if not self._rate_limiter.check_and_consume(rate_limit_client_key(context.client_ip)):
            return self._reject(context, ERROR_RATE_LIMITED)

        body = await request.body()
        if len(body) > self._max_payload_bytes:
            return self._reject(context, ERROR_PAYLOAD_TOO_LARGE)

        is_valid = await with_timeout(
            self._verifier.verify(
                body,
                headers[SIGNATURE_HEADER],
                headers[TIMESTAMP_HEADER],
                public_key,
            ),
            self._timeout_seconds,
        )
        if not is_valid:
            return self._reject(context, ERROR_INVALID_SIGNATURE)

        return SecurityValidationResult(is_valid=True, context=context)

    def _sweep_rate_limits(self) -> None:
        try:
            self._rate_limiter.maybe_sweep(self._cleanup_probability)
        except Exception as exc:
            logger.warning(
                "rate_limit_sweep_failed",
                extra={"error_type": type(exc).__name__},
            )

    @staticmethod
    def _reject(context: SecurityContext, error: str) -> SecurityValidationResult:
        logger.info(
            "request_verification_rejected",
            extra={"request_id": context.request_id, "reason": error},
        )
        return SecurityValidationResult(is_valid=False, context=context, error=error)
