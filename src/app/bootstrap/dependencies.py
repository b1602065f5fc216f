"""Factories de componentes: criação de implementações concretas.

Centraliza a criação de stores, agendador, auditoria, segurança e
handlers de comando a partir das settings de ambiente.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from app.audit import AuditLogger
from app.bootstrap.clients import create_sheets_factory
from app.commands import InteractionDispatcher
from app.commands.admin_sync import (
    AdminCommandConfig,
    AdminSyncUsersHandler,
    BackgroundSyncOrchestrator,
    load_service_account_credentials,
)
from app.commands.register import RegisterCommandConfig, RegisterHandler
from app.infra.audit import LoggingAuditSink
from app.infra.crypto import Ed25519SignatureVerifier
from app.infra.stores import MemoryRateLimitStore
from app.infra.tasks import AsyncioTaskScheduler
from app.security import RateLimiter, SecurityOrchestrator
from config.settings import (
    get_base_settings,
    get_discord_settings,
    get_google_sheets_settings,
    get_security_settings,
)

if TYPE_CHECKING:
    from app.commands.base import CommandHandler
    from app.protocols.discord_client import DiscordApiClientProtocol
    from app.protocols.rate_limit_store import RateLimitStoreProtocol
    from app.protocols.task_scheduler import TaskSchedulerProtocol

logger = logging.getLogger(__name__)


def create_rate_limit_store() -> RateLimitStoreProtocol:
    """Store em memória: limites valem por processo."""
    logger.info("rate_limit_store_created", extra={"backend": "memory"})
    return MemoryRateLimitStore()


def create_rate_limiter(store: RateLimitStoreProtocol) -> RateLimiter:
    settings = get_security_settings()
    return RateLimiter(
        store,
        limit=settings.rate_limit_requests,
        window_ms=settings.rate_limit_window_ms,
    )


def create_task_scheduler() -> AsyncioTaskScheduler:
    return AsyncioTaskScheduler(max_concurrency=get_security_settings().max_background_tasks)


def create_audit_logger() -> AuditLogger:
    return AuditLogger(LoggingAuditSink())


def create_security_orchestrator(rate_limiter: RateLimiter) -> SecurityOrchestrator:
    settings = get_security_settings()
    return SecurityOrchestrator(
        rate_limiter=rate_limiter,
        verifier=Ed25519SignatureVerifier(),
        max_payload_bytes=settings.max_payload_bytes,
        max_skew_seconds=settings.max_timestamp_skew_seconds,
        timeout_seconds=settings.request_timeout_seconds,
        cleanup_probability=settings.cleanup_probability,
    )


def create_command_handlers(
    *,
    scheduler: TaskSchedulerProtocol,
    discord_client: DiscordApiClientProtocol,
) -> list[CommandHandler]:
    """Instancia os handlers de todos os comandos suportados."""
    discord = get_discord_settings()
    sheets = get_google_sheets_settings()

    orchestrator = BackgroundSyncOrchestrator(
        scheduler=scheduler,
        sheets_factory=create_sheets_factory(),
        discord_client=discord_client,
        bot_token=discord.bot_token,
        sheet_id=sheets.sheet_id,
        id_range=sheets.users_id_range,
        append_range=sheets.users_append_range,
        batch_size=sheets.write_batch_size,
    )
    admin_sync = AdminSyncUsersHandler(
        config=AdminCommandConfig(
            sheet_id=sheets.sheet_id,
            admin_channel_id=discord.admin_channel_id,
            privileged_user_id=discord.privileged_user_id,
        ),
        credentials_loader=partial(load_service_account_credentials, sheets),
        orchestrator=orchestrator,
    )
    register = RegisterHandler(
        config=RegisterCommandConfig(
            is_development=get_base_settings().is_development,
            test_channel_id=discord.admin_channel_id,
            request_channel_id=discord.register_request_channel_id,
            response_channel_id=discord.register_response_channel_id,
        ),
        discord_client=discord_client,
        scheduler=scheduler,
    )
    return [admin_sync, register]


def create_dispatcher(
    *,
    audit: AuditLogger,
    scheduler: TaskSchedulerProtocol,
    discord_client: DiscordApiClientProtocol,
) -> InteractionDispatcher:
    dispatcher = InteractionDispatcher(
        create_command_handlers(scheduler=scheduler, discord_client=discord_client),
        audit=audit,
    )
    logger.info("dispatcher_created", extra={"commands": dispatcher.command_names})
    return dispatcher
