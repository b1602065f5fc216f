"""Comando administrativo de sincronização de membros para a planilha."""

from app.commands.admin_sync.background import (
    BackgroundSyncOrchestrator,
    estimate_sync_duration,
)
from app.commands.admin_sync.credentials import load_service_account_credentials
from app.commands.admin_sync.handler import COMMAND_NAME, AdminSyncUsersHandler
from app.commands.admin_sync.validation import (
    AdminAuthorization,
    AdminCommandConfig,
    run_admin_validation,
)

__all__ = [
    "COMMAND_NAME",
    "AdminAuthorization",
    "AdminCommandConfig",
    "AdminSyncUsersHandler",
    "BackgroundSyncOrchestrator",
    "estimate_sync_duration",
    "load_service_account_credentials",
    "run_admin_validation",
]
