"""Client concreto de Google Sheets (API v4) para a sincronização de membros."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.domain.credentials import service_account_error
from app.observability import get_correlation_id
from app.protocols.sheets_client import SheetsClientFactoryProtocol, SheetsClientProtocol
from utils.errors import CredentialsError, SheetsApiError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.sync import ServiceAccountCredentials

logger = logging.getLogger(__name__)

_COMPONENT = "google_sheets_client"
_SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"


def http_status(exc: HttpError) -> int | None:
    response = getattr(exc, "resp", None)
    return int(response.status) if response and getattr(response, "status", None) else None


class GoogleSheetsClient(SheetsClientProtocol):
    """Implementação do protocolo de planilha usando a API v4 do Google.

    Chamadas do client oficial são bloqueantes e rodam via asyncio.to_thread.
    """

    __slots__ = ("_service",)

    def __init__(self, service: Any) -> None:
        self._service = service

    @classmethod
    def from_credentials(cls, credentials: ServiceAccountCredentials) -> GoogleSheetsClient:
        scoped = service_account.Credentials.from_service_account_info(
            credentials.as_info(),
            scopes=[_SHEETS_SCOPE],
        )
        return cls(build("sheets", "v4", credentials=scoped, cache_discovery=False))

    async def read_column(self, spreadsheet_id: str, range_name: str) -> list[list[str]]:
        try:
            response = await asyncio.to_thread(self._get_values_sync, spreadsheet_id, range_name)
        except HttpError as exc:
            self._log_error(action="read_column", exc=exc)
            raise SheetsApiError(_reason(exc), http_status(exc)) from exc
        values = response.get("values", []) if isinstance(response, dict) else []
        return [[str(cell) for cell in row] for row in values if isinstance(row, list)]

    async def append_rows(
        self,
        spreadsheet_id: str,
        range_name: str,
        rows: Sequence[Sequence[str]],
    ) -> int:
        if not rows:
            return 0
        body = {"values": [list(row) for row in rows]}
        try:
            response = await asyncio.to_thread(
                self._append_values_sync, spreadsheet_id, range_name, body
            )
        except HttpError as exc:
            self._log_error(action="append_rows", exc=exc)
            raise SheetsApiError(_reason(exc), http_status(exc)) from exc
        updates = response.get("updates", {}) if isinstance(response, dict) else {}
        return int(updates.get("updatedRows", len(rows)))

    def _get_values_sync(self, spreadsheet_id: str, range_name: str) -> dict[str, Any]:
        return (
            self._service.spreadsheets()
            .values()
            .get(spreadsheetId=spreadsheet_id, range=range_name)
            .execute()
        )

    def _append_values_sync(
        self,
        spreadsheet_id: str,
        range_name: str,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        return (
            self._service.spreadsheets()
            .values()
            .append(
                spreadsheetId=spreadsheet_id,
                range=range_name,
                valueInputOption="RAW",
                insertDataOption="INSERT_ROWS",
                body=body,
            )
            .execute()
        )

    def _log_error(self, *, action: str, exc: HttpError) -> None:
        logger.error(
            "google_sheets_http_error",
            extra={
                "component": _COMPONENT,
                "action": action,
                "status_code": http_status(exc),
                "error_type": type(exc).__name__,
                "correlation_id": get_correlation_id(),
            },
        )


class GoogleSheetsClientFactory(SheetsClientFactoryProtocol):
    """Valida credenciais e constrói GoogleSheetsClient."""

    def create(self, credentials: ServiceAccountCredentials) -> SheetsClientProtocol:
        error = service_account_error(credentials)
        if error:
            raise CredentialsError(error)
        return GoogleSheetsClient.from_credentials(credentials)


def _reason(exc: HttpError) -> str:
    reason = getattr(exc, "reason", None)
    if reason:
        return str(reason)
    return type(exc).__name__
