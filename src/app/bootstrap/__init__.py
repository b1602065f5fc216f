"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_dispatcher, get_security_orchestrator

    # Na inicialização do serviço
    initialize_app()

    # Obter componentes
    orchestrator = get_security_orchestrator()
    dispatcher = get_dispatcher()
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.logging.config import VALID_LOG_LEVELS
from config.settings import (
    get_base_settings,
    get_discord_settings,
    get_google_sheets_settings,
    get_security_settings,
)

if TYPE_CHECKING:
    from app.audit import AuditLogger
    from app.commands import InteractionDispatcher
    from app.infra.tasks import AsyncioTaskScheduler
    from app.protocols.discord_client import DiscordApiClientProtocol
    from app.protocols.rate_limit_store import RateLimitStoreProtocol
    from app.security import RateLimiter, SecurityOrchestrator

# Nome do serviço para logs e métricas
SERVICE_NAME = "beluga_bot"

# Usado quando LOG_LEVEL é inválido; o erro aparece na validação de settings
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging JSON com o nível de LOG_LEVEL.

    Deve ser chamada uma vez no início do serviço, antes de criar o app.
    """
    log_level = get_base_settings().log_level
    if log_level not in VALID_LOG_LEVELS:
        log_level = DEFAULT_LOG_LEVEL

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"discord: {error}" for error in get_discord_settings().validate())
    errors.extend(f"google_sheets: {error}" for error in get_google_sheets_settings().validate())
    errors.extend(f"security: {error}" for error in get_security_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_rate_limit_store() -> RateLimitStoreProtocol:
    """Obtém store de rate limit (singleton por processo)."""
    from app.bootstrap.dependencies import create_rate_limit_store
    return create_rate_limit_store()


@lru_cache(maxsize=1)
def get_rate_limiter() -> RateLimiter:
    """Obtém rate limiter (singleton)."""
    from app.bootstrap.dependencies import create_rate_limiter
    return create_rate_limiter(get_rate_limit_store())


@lru_cache(maxsize=1)
def get_task_scheduler() -> AsyncioTaskScheduler:
    """Obtém agendador de tarefas em background (singleton)."""
    from app.bootstrap.dependencies import create_task_scheduler
    return create_task_scheduler()


@lru_cache(maxsize=1)
def get_audit_logger() -> AuditLogger:
    """Obtém audit logger (singleton)."""
    from app.bootstrap.dependencies import create_audit_logger
    return create_audit_logger()


@lru_cache(maxsize=1)
def get_security_orchestrator() -> SecurityOrchestrator:
    """Obtém orquestrador de segurança (singleton)."""
    from app.bootstrap.dependencies import create_security_orchestrator
    return create_security_orchestrator(get_rate_limiter())


@lru_cache(maxsize=1)
def get_discord_client() -> DiscordApiClientProtocol:
    """Obtém cliente REST do Discord (singleton)."""
    from app.bootstrap.clients import create_discord_client
    return create_discord_client()


@lru_cache(maxsize=1)
def get_dispatcher() -> InteractionDispatcher:
    """Obtém dispatcher com todos os comandos registrados (singleton)."""
    from app.bootstrap.dependencies import create_dispatcher
    return create_dispatcher(
        audit=get_audit_logger(),
        scheduler=get_task_scheduler(),
        discord_client=get_discord_client(),
    )


def reset_singletons() -> None:
    """Limpa os caches dos getters (usado em testes)."""
    for getter in (
        get_rate_limit_store,
        get_rate_limiter,
        get_task_scheduler,
        get_audit_logger,
        get_security_orchestrator,
        get_discord_client,
        get_dispatcher,
    ):
        getter.cache_clear()
