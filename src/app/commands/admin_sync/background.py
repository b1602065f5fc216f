"""Orquestrador da sincronização de membros em background (accept-then-detach).

`start` valida a operação de forma síncrona e, se aceita, devolve o
payload de aceitação e agenda a sincronização no TaskScheduler. A
sincronização em si percorre as fases:

    cliente da planilha -> ids existentes -> membros do servidor
    -> transformação/diff -> escrita em lotes

Falha em qualquer fase é registrada com o request_id e encerra a task
(ninguém mais aguarda o resultado: o chamador já recebeu ACCEPTED).
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from typing import TYPE_CHECKING

from app.commands.admin_sync.members import (
    existing_ids_from_column,
    filter_new_members,
    transform_members,
)
from app.domain.credentials import has_valid_shape
from app.domain.result import Err, Ok
from app.domain.sync import SyncAcceptance, SyncReport
from app.observability import record_counter, record_latency
from utils.timestamps import is_round_trip_iso, utc_now_iso

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.member import MemberRow
    from app.domain.result import Result
    from app.domain.sync import SyncOperation
    from app.protocols.discord_client import DiscordApiClientProtocol
    from app.protocols.sheets_client import SheetsClientFactoryProtocol, SheetsClientProtocol
    from app.protocols.task_scheduler import TaskSchedulerProtocol

logger = logging.getLogger(__name__)

MAX_GUILD_MEMBERS = 100_000
SMALL_GUILD_LIMIT = 1_000
MEDIUM_GUILD_LIMIT = 10_000

GUILD_ID_PATTERN = re.compile(r"[0-9]{17,19}")
BOT_TOKEN_PATTERN = re.compile(
    r"(?:Bot )?[A-Za-z0-9+/=]{20,}\.[A-Za-z0-9_-]{6,}\.[A-Za-z0-9_-]{27,}"
)

ERROR_MISSING_FIELDS = "Missing required operation fields"
ERROR_MISSING_CONFIG = "Missing required environment configuration"
ERROR_INVALID_CREDENTIALS = "Invalid credentials provided"
ERROR_INVALID_TOKEN = "Invalid Discord token format"
ERROR_INVALID_GUILD = "Invalid guild ID format"
ERROR_INVALID_TIMESTAMP = "Invalid timestamp format"
ERROR_GUILD_TOO_LARGE = "Guild too large for synchronization (max 100,000 members)"


def estimate_sync_duration(member_count: int | None) -> str:
    """Faixa de duração estimada a partir do tamanho do servidor."""
    if member_count is None or member_count <= SMALL_GUILD_LIMIT:
        return "2-5 minutes"
    if member_count <= MEDIUM_GUILD_LIMIT:
        return "5-10 minutes"
    return "10-15 minutes"


class BackgroundSyncOrchestrator:
    """Valida, aceita e dispara a sincronização de membros.

    Args:
        scheduler: Agenda a sincronização fora do ciclo do request.
        sheets_factory: Cria o cliente autenticado da planilha.
        discord_client: Cliente REST usado para listar membros.
        bot_token: Token do bot (validado quanto ao formato).
        sheet_id: Planilha de destino.
        id_range: Range com os ids já registrados.
        append_range: Range onde novas linhas são anexadas.
        batch_size: Linhas por chamada de escrita.
        now_iso: Relógio ISO-8601 (injetável em testes).
        id_factory: Gerador de request_id quando o chamador não envia um.
    """

    def __init__(
        self,
        *,
        scheduler: TaskSchedulerProtocol,
        sheets_factory: SheetsClientFactoryProtocol,
        discord_client: DiscordApiClientProtocol,
        bot_token: str,
        sheet_id: str,
        id_range: str = "Users!A:A",
        append_range: str = "Users!A:G",
        batch_size: int = 500,
        now_iso: Callable[[], str] = utc_now_iso,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self._scheduler = scheduler
        self._sheets_factory = sheets_factory
        self._discord = discord_client
        self._bot_token = bot_token
        self._sheet_id = sheet_id
        self._id_range = id_range
        self._append_range = append_range
        self._batch_size = max(batch_size, 1)
        self._now_iso = now_iso
        self._id_factory = id_factory

    def validate(self, operation: SyncOperation) -> str | None:
        """Valida a operação; retorna o primeiro erro ou None."""
        if not (operation.guild_id and operation.initiated_by and operation.timestamp):
            return ERROR_MISSING_FIELDS
        if not (self._bot_token and self._sheet_id):
            return ERROR_MISSING_CONFIG
        if not has_valid_shape(operation.credentials):
            return ERROR_INVALID_CREDENTIALS
        if not BOT_TOKEN_PATTERN.fullmatch(self._bot_token):
            return ERROR_INVALID_TOKEN
        if not GUILD_ID_PATTERN.fullmatch(operation.guild_id):
            return ERROR_INVALID_GUILD
        if not is_round_trip_iso(operation.timestamp):
            return ERROR_INVALID_TIMESTAMP
        count = operation.estimated_member_count
        if count is not None and count > MAX_GUILD_MEMBERS:
            return ERROR_GUILD_TOO_LARGE
        return None

    def start(self, operation: SyncOperation) -> Result[SyncAcceptance]:
        """RECEIVED -> REJECTED (Err) ou ACCEPTED (Ok + sincronização agendada)."""
        error = self.validate(operation)
        if error is not None:
            logger.warning(
                "member_sync_rejected",
                extra={"request_id": operation.request_id, "reason": error},
            )
            return Err(error)

        request_id = operation.request_id or self._id_factory()
        metadata: dict[str, object] = {
            "guildId": operation.guild_id,
            "initiatedBy": operation.initiated_by,
            "timestamp": operation.timestamp,
        }
        if operation.estimated_member_count is not None:
            metadata["estimatedMemberCount"] = operation.estimated_member_count

        acceptance = SyncAcceptance(
            request_id=request_id,
            estimated_duration=estimate_sync_duration(operation.estimated_member_count),
            metadata=metadata,
        )
        self._scheduler.schedule(
            self.run_sync(operation, request_id),
            correlation_id=request_id,
            name="member_sync",
        )
        logger.info(
            "member_sync_accepted",
            extra={
                "request_id": request_id,
                "guild_id": operation.guild_id,
                "estimated_duration": acceptance.estimated_duration,
            },
        )
        return Ok(acceptance)

    async def run_sync(self, operation: SyncOperation, request_id: str) -> SyncReport | None:
        """Executa as fases da sincronização; falhas são registradas, nunca propagadas."""
        started_at = time.perf_counter()

        phase = "acquire_sheets_client"
        try:
            sheets = self._sheets_factory.create(operation.credentials)

            phase = "read_existing_ids"
            existing_ids = await self._read_existing_ids(sheets)

            phase = "fetch_guild_members"
            raw_members = await self._discord.list_guild_members(operation.guild_id)

            phase = "transform_members"
            rows = transform_members(raw_members, now_iso=self._now_iso())
            new_rows = filter_new_members(rows, existing_ids)

            phase = "write_rows"
            written = await self._write_rows(sheets, new_rows)
        except Exception as exc:
            logger.error(
                "member_sync_failed",
                extra={
                    "request_id": request_id,
                    "phase": phase,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return None

        report = SyncReport(
            request_id=request_id,
            members_fetched=len(raw_members),
            existing_ids=len(existing_ids),
            new_rows=len(new_rows),
            rows_written=written,
        )
        elapsed_ms = (time.perf_counter() - started_at) * 1000
        record_latency("member_sync", "run_sync", elapsed_ms, request_id)
        record_counter("member_sync", "rows_written", written, request_id)
        logger.info(
            "member_sync_completed",
            extra={
                "request_id": request_id,
                "members_fetched": report.members_fetched,
                "existing_ids": report.existing_ids,
                "new_rows": report.new_rows,
                "rows_written": report.rows_written,
            },
        )
        return report

    async def _read_existing_ids(self, sheets: SheetsClientProtocol) -> set[str]:
        values = await sheets.read_column(self._sheet_id, self._id_range)
        return existing_ids_from_column(values)

    async def _write_rows(self, sheets: SheetsClientProtocol, rows: list[MemberRow]) -> int:
        if not rows:
            logger.info("member_sync_nothing_to_write")
            return 0
        written = 0
        for start in range(0, len(rows), self._batch_size):
            batch = rows[start : start + self._batch_size]
            written += await sheets.append_rows(
                self._sheet_id,
                self._append_range,
                [row.as_row() for row in batch],
            )
        return written
