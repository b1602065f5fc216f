"""Endpoint de interações do Discord.

Endpoints:
- POST /: recebe interações assinadas (PING e slash commands)
- OPTIONS /: preflight CORS
- PUT/PATCH/DELETE /: 405

Fluxo do POST:
1. SecurityContext criado na borda; request_id vira correlation_id
2. Orquestrador de segurança (headers, rate limit, tamanho, assinatura)
3. Parse do JSON
4. Dispatcher por tipo de interação / nome do comando

Falha de segurança responde 401 sem detalhe; erro inesperado responde 500.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from api.routes.security_headers import CORS_HEADERS
from app.commands.responses import error_response
from app.observability import reset_correlation_id, set_correlation_id
from app.security import build_security_context
from app.security.orchestrator import ERROR_RATE_LIMITED
from config.settings import get_discord_settings, get_security_settings

if TYPE_CHECKING:
    from app.audit import AuditLogger
    from app.commands import InteractionDispatcher
    from app.domain.security import SecurityContext
    from app.security import SecurityOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_REQUEST_FORMAT = "Invalid request format"
VIOLATION_MARKERS = ("rate limit", "signature", "timestamp")


def _get_security_orchestrator() -> SecurityOrchestrator:
    from app.bootstrap import get_security_orchestrator
    return get_security_orchestrator()


def _get_dispatcher() -> InteractionDispatcher:
    from app.bootstrap import get_dispatcher
    return get_dispatcher()


def _get_audit_logger() -> AuditLogger:
    from app.bootstrap import get_audit_logger
    return get_audit_logger()


def _plain(content: str, status_code: int) -> Response:
    return Response(content=content, media_type="text/plain", status_code=status_code)


def _reject(audit: AuditLogger, context: SecurityContext, error: str) -> Response:
    audit.request_rejected(context, reason=error)
    if any(marker in error.lower() for marker in VIOLATION_MARKERS):
        audit.security_violation(context, violation_type="REQUEST_VALIDATION", details=error)
    if error == ERROR_RATE_LIMITED:
        audit.rate_limit_exceeded(context)
    return _plain("Unauthorized", status.HTTP_401_UNAUTHORIZED)


@router.post("/", response_model=None)
async def receive_interaction(request: Request) -> Response:
    """Recebe e processa uma interação do Discord."""
    context = build_security_context(
        request.headers,
        peer_host=request.client.host if request.client else None,
        trust_proxy_headers=get_security_settings().trust_proxy_headers,
    )
    token = set_correlation_id(context.request_id)
    audit: AuditLogger | None = None

    try:
        audit = _get_audit_logger()
        audit.request_received(context, method=request.method, path=request.url.path)

        verification = await _get_security_orchestrator().verify_request_secure(
            request,
            get_discord_settings().public_key,
            context,
        )
        if not verification.is_valid:
            return _reject(audit, context, verification.error or "Unauthorized")
        audit.request_verified(context)

        try:
            interaction: Any = json.loads(await request.body())
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.info("interaction_json_invalid", extra={"request_id": context.request_id})
            return JSONResponse(content=error_response(INVALID_REQUEST_FORMAT))
        if not isinstance(interaction, dict):
            return JSONResponse(content=error_response(INVALID_REQUEST_FORMAT))

        result = await _get_dispatcher().dispatch(interaction, context)
        if result.body is None:
            return _plain(result.text or "", result.status_code)
        return JSONResponse(content=result.body, status_code=result.status_code)

    except Exception as exc:
        logger.exception(
            "interaction_processing_failed",
            extra={"request_id": context.request_id, "error_type": type(exc).__name__},
        )
        if audit is not None:
            audit.error_occurred(context, error=str(exc) or type(exc).__name__)
        return _plain("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)
    finally:
        reset_correlation_id(token)


@router.options("/")
async def cors_preflight() -> Response:
    """Preflight CORS."""
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.api_route("/", methods=["PUT", "PATCH", "DELETE"])
async def method_not_allowed() -> Response:
    return _plain("Method not allowed", status.HTTP_405_METHOD_NOT_ALLOWED)
