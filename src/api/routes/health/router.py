"""Endpoint de health check.

GET / responde 200 quando os segredos obrigatórios do Discord estão
configurados e 503 caso contrário.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.security import build_security_context
from config.settings import get_base_settings, get_discord_settings, get_security_settings
from utils.timestamps import utc_now_iso

if TYPE_CHECKING:
    from app.audit import AuditLogger

logger = logging.getLogger(__name__)

router = APIRouter()

HEALTHY_MESSAGE = "Beluga Discord Bot is running!"
UNHEALTHY_MESSAGE = "Beluga Discord Bot has issues"


class HealthChecks(BaseModel):
    """Checagens individuais."""

    model_config = ConfigDict(populate_by_name=True)

    secrets: Literal["pass", "fail"]
    environment: str
    deployment_source: str = Field(serialization_alias="deploymentSource")


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: Literal["healthy", "unhealthy"]
    message: str
    timestamp: str
    checks: HealthChecks


def build_health_response() -> HealthResponse:
    discord = get_discord_settings()
    base = get_base_settings()
    missing = discord.missing_secrets
    if missing:
        logger.warning("health_check_missing_secrets", extra={"missing": missing})
    healthy = not missing
    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        message=HEALTHY_MESSAGE if healthy else UNHEALTHY_MESSAGE,
        timestamp=utc_now_iso(),
        checks=HealthChecks(
            secrets="pass" if healthy else "fail",
            environment=base.environment,
            deployment_source=base.deployment_source,
        ),
    )


def _get_audit_logger() -> AuditLogger:
    from app.bootstrap import get_audit_logger
    return get_audit_logger()


@router.get("/")
async def health_check(request: Request) -> JSONResponse:
    """Liveness/health do bot."""
    context = build_security_context(
        request.headers,
        peer_host=request.client.host if request.client else None,
        trust_proxy_headers=get_security_settings().trust_proxy_headers,
    )
    health = build_health_response()
    healthy = health.status == "healthy"
    _get_audit_logger().health_check(context, healthy=healthy)
    return JSONResponse(
        content=health.model_dump(by_alias=True),
        status_code=200 if healthy else 503,
    )
