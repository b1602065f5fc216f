"""Carga das credenciais de service account a partir das settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.credentials import has_valid_shape
from app.domain.result import Err, Ok
from app.domain.sync import ServiceAccountCredentials

if TYPE_CHECKING:
    from app.domain.result import Result
    from config.settings.google_sheets import GoogleSheetsSettings

ERROR_INVALID_ENV_CREDENTIALS = "Invalid credentials format in environment"


def load_service_account_credentials(
    settings: GoogleSheetsSettings,
) -> Result[ServiceAccountCredentials]:
    """Monta ServiceAccountCredentials ou explica o que falta."""
    missing = settings.missing_credential_field()
    if missing:
        return Err(f"Missing required credential field: {missing}")

    credentials = ServiceAccountCredentials(
        client_email=settings.client_email,
        private_key=settings.private_key,
        credential_type=settings.credential_type,
        project_id=settings.project_id,
        private_key_id=settings.private_key_id,
        client_id=settings.client_id,
        token_uri=settings.token_uri,
    )
    if not has_valid_shape(credentials):
        return Err(ERROR_INVALID_ENV_CREDENTIALS)
    return Ok(credentials)
