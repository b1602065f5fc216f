"""Handler do comando /admin_sync_users_to_sheets."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.commands.admin_sync.validation import run_admin_validation
from app.commands.base import CommandHandler
from app.commands.responses import ephemeral_response, error_response
from app.domain.result import Err
from app.domain.sync import SyncOperation
from utils.timestamps import utc_now_iso

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.commands.admin_sync.background import BackgroundSyncOrchestrator
    from app.commands.admin_sync.validation import AdminCommandConfig
    from app.domain.result import Result
    from app.domain.security import SecurityContext
    from app.domain.sync import ServiceAccountCredentials

logger = logging.getLogger(__name__)

COMMAND_NAME = "admin_sync_users_to_sheets"
SYNCING_MESSAGE = "Syncing users to the sheet..."


class AdminSyncUsersHandler(CommandHandler):
    """Valida o chamador, monta a SyncOperation e responde antes da sincronização.

    Args:
        config: Canal admin, usuário privilegiado e planilha configurados.
        credentials_loader: Carrega as credenciais da service account.
        orchestrator: Orquestrador da sincronização em background.
        now_iso: Relógio ISO-8601 do pedido.
    """

    name = COMMAND_NAME

    def __init__(
        self,
        *,
        config: AdminCommandConfig,
        credentials_loader: Callable[[], Result[ServiceAccountCredentials]],
        orchestrator: BackgroundSyncOrchestrator,
        now_iso: Callable[[], str] = utc_now_iso,
    ) -> None:
        self._config = config
        self._load_credentials = credentials_loader
        self._orchestrator = orchestrator
        self._now_iso = now_iso

    async def handle(
        self,
        interaction: dict[str, Any],
        context: SecurityContext,
    ) -> dict[str, Any]:
        authorization = run_admin_validation(interaction, self._config)
        if isinstance(authorization, Err):
            logger.info(
                "admin_command_denied",
                extra={"request_id": context.request_id, "reason": authorization.error},
            )
            return error_response(authorization.error)

        credentials = self._load_credentials()
        if isinstance(credentials, Err):
            return error_response(credentials.error)

        operation = SyncOperation(
            guild_id=authorization.value.guild_id,
            credentials=credentials.value,
            request_id=context.request_id,
            initiated_by=authorization.value.user_id,
            timestamp=self._now_iso(),
        )
        accepted = self._orchestrator.start(operation)
        if isinstance(accepted, Err):
            return error_response(accepted.error)

        acceptance = accepted.value
        return ephemeral_response(
            f"{SYNCING_MESSAGE}\n"
            f"Request ID: `{acceptance.request_id}`\n"
            f"Estimated duration: {acceptance.estimated_duration}"
        )
