"""Testes do client de Google Sheets com service mockado."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from googleapiclient.errors import HttpError

from app.infra.sheets import GoogleSheetsClient, GoogleSheetsClientFactory
from tests.fakes.interactions import build_credentials
from utils.errors import CredentialsError, SheetsApiError


def _service_with(values_api: MagicMock) -> MagicMock:
    service = MagicMock()
    service.spreadsheets.return_value.values.return_value = values_api
    return service


def _http_error(status: int) -> HttpError:
    return HttpError(
        SimpleNamespace(status=status, reason="Forbidden"),
        b'{"error": {"message": "Forbidden"}}',
    )


class TestGoogleSheetsClient:
    """Leitura e escrita via API v4."""

    @pytest.mark.asyncio
    async def test_read_column_returns_values(self) -> None:
        values_api = MagicMock()
        values_api.get.return_value.execute.return_value = {
            "values": [["discord_id"], ["123456789012345678"]]
        }
        client = GoogleSheetsClient(_service_with(values_api))

        rows = await client.read_column("sheet", "Users!A:A")

        assert rows == [["discord_id"], ["123456789012345678"]]
        values_api.get.assert_called_once_with(spreadsheetId="sheet", range="Users!A:A")

    @pytest.mark.asyncio
    async def test_read_column_without_values(self) -> None:
        values_api = MagicMock()
        values_api.get.return_value.execute.return_value = {}
        client = GoogleSheetsClient(_service_with(values_api))

        assert await client.read_column("sheet", "Users!A:A") == []

    @pytest.mark.asyncio
    async def test_append_rows_uses_raw_insert(self) -> None:
        values_api = MagicMock()
        values_api.append.return_value.execute.return_value = {"updates": {"updatedRows": 2}}
        client = GoogleSheetsClient(_service_with(values_api))

        written = await client.append_rows("sheet", "Users!A:G", [["1"], ["2"]])

        assert written == 2
        kwargs = values_api.append.call_args.kwargs
        assert kwargs["valueInputOption"] == "RAW"
        assert kwargs["insertDataOption"] == "INSERT_ROWS"
        assert kwargs["body"] == {"values": [["1"], ["2"]]}

    @pytest.mark.asyncio
    async def test_append_empty_rows_skips_api(self) -> None:
        values_api = MagicMock()
        client = GoogleSheetsClient(_service_with(values_api))

        assert await client.append_rows("sheet", "Users!A:G", []) == 0
        values_api.append.assert_not_called()

    @pytest.mark.asyncio
    async def test_http_error_becomes_sheets_api_error(self) -> None:
        values_api = MagicMock()
        values_api.get.return_value.execute.side_effect = _http_error(403)
        client = GoogleSheetsClient(_service_with(values_api))

        with pytest.raises(SheetsApiError) as exc_info:
            await client.read_column("sheet", "Users!A:A")

        assert exc_info.value.status_code == 403


class TestGoogleSheetsClientFactory:
    def test_rejects_wrong_credential_type(self) -> None:
        with pytest.raises(CredentialsError, match="Invalid credential type"):
            GoogleSheetsClientFactory().create(build_credentials(credential_type="user"))

    def test_rejects_missing_field(self) -> None:
        with pytest.raises(CredentialsError, match="Missing required field: client_id"):
            GoogleSheetsClientFactory().create(build_credentials(client_id=""))

    def test_builds_client_from_credentials(self, monkeypatch: pytest.MonkeyPatch) -> None:
        built = object()
        monkeypatch.setattr(
            GoogleSheetsClient,
            "from_credentials",
            classmethod(lambda cls, credentials: built),
        )
        assert GoogleSheetsClientFactory().create(build_credentials()) is built
