"""Testes do orquestrador de sincronização em background."""

from __future__ import annotations

import logging

import pytest

from app.commands.admin_sync import BackgroundSyncOrchestrator, estimate_sync_duration
from app.commands.admin_sync.background import (
    ERROR_GUILD_TOO_LARGE,
    ERROR_INVALID_CREDENTIALS,
    ERROR_INVALID_GUILD,
    ERROR_INVALID_TIMESTAMP,
    ERROR_INVALID_TOKEN,
    ERROR_MISSING_CONFIG,
    ERROR_MISSING_FIELDS,
)
from app.domain.result import Err, Ok
from app.domain.sync import SyncOperation
from tests.fakes.fake_discord import FakeDiscordClient
from tests.fakes.fake_scheduler import RecordingScheduler
from tests.fakes.fake_sheets import FakeSheetsClient, FakeSheetsClientFactory
from tests.fakes.interactions import (
    BOT_TOKEN,
    GUILD_ID,
    PRIVILEGED_USER_ID,
    SHEET_ID,
    build_credentials,
    build_member,
)
from utils.errors import SheetsApiError

NOW = "2024-05-01T12:00:00.000Z"


def _operation(**overrides) -> SyncOperation:
    values = {
        "guild_id": GUILD_ID,
        "credentials": build_credentials(),
        "request_id": "req-sync",
        "initiated_by": PRIVILEGED_USER_ID,
        "timestamp": NOW,
    }
    values.update(overrides)
    return SyncOperation(**values)


def _orchestrator(
    scheduler: RecordingScheduler,
    *,
    sheets: FakeSheetsClient | None = None,
    discord: FakeDiscordClient | None = None,
    bot_token: str = BOT_TOKEN,
    sheet_id: str = SHEET_ID,
    batch_size: int = 500,
) -> BackgroundSyncOrchestrator:
    return BackgroundSyncOrchestrator(
        scheduler=scheduler,
        sheets_factory=FakeSheetsClientFactory(sheets),
        discord_client=discord or FakeDiscordClient(),
        bot_token=bot_token,
        sheet_id=sheet_id,
        batch_size=batch_size,
        now_iso=lambda: NOW,
        id_factory=lambda: "generated-id",
    )


@pytest.fixture
def scheduler():
    recording = RecordingScheduler()
    yield recording
    recording.close()


class TestStart:
    """Aceitação e rejeição síncronas."""

    def test_valid_operation_accepted_and_scheduled_once(self, scheduler) -> None:
        result = _orchestrator(scheduler).start(_operation())

        assert isinstance(result, Ok)
        assert result.value.request_id == "req-sync"
        assert result.value.estimated_duration == "2-5 minutes"
        assert result.value.as_dict()["message"] == "Background sync initiated successfully"
        assert len(scheduler.calls) == 1
        assert scheduler.calls[0].correlation_id == "req-sync"
        assert scheduler.calls[0].name == "member_sync"

    def test_invalid_guild_rejected_without_scheduling(self, scheduler) -> None:
        result = _orchestrator(scheduler).start(_operation(guild_id="abc"))

        assert result == Err(ERROR_INVALID_GUILD)
        assert scheduler.calls == []

    def test_request_id_generated_when_empty(self, scheduler) -> None:
        result = _orchestrator(scheduler).start(_operation(request_id=""))
        assert result.value.request_id == "generated-id"

    @pytest.mark.parametrize(
        ("overrides", "orchestrator_kwargs", "expected"),
        [
            ({"initiated_by": ""}, {}, ERROR_MISSING_FIELDS),
            ({}, {"sheet_id": ""}, ERROR_MISSING_CONFIG),
            ({"credentials": build_credentials(client_email="bad")}, {}, ERROR_INVALID_CREDENTIALS),
            ({}, {"bot_token": "not-a-token"}, ERROR_INVALID_TOKEN),
            ({}, {"bot_token": f"{BOT_TOKEN}\n"}, ERROR_INVALID_TOKEN),
            ({"guild_id": f"{GUILD_ID}\n"}, {}, ERROR_INVALID_GUILD),
            ({"timestamp": "2024-05-01"}, {}, ERROR_INVALID_TIMESTAMP),
            ({"estimated_member_count": 100_001}, {}, ERROR_GUILD_TOO_LARGE),
        ],
    )
    def test_validation_errors(self, scheduler, overrides, orchestrator_kwargs, expected) -> None:
        result = _orchestrator(scheduler, **orchestrator_kwargs).start(_operation(**overrides))

        assert result == Err(expected)
        assert scheduler.calls == []

    def test_metadata_includes_member_count(self, scheduler) -> None:
        result = _orchestrator(scheduler).start(_operation(estimated_member_count=5_000))

        assert result.value.estimated_duration == "5-10 minutes"
        assert result.value.metadata["estimatedMemberCount"] == 5_000


@pytest.mark.parametrize(
    ("count", "expected"),
    [
        (None, "2-5 minutes"),
        (1_000, "2-5 minutes"),
        (1_001, "5-10 minutes"),
        (10_000, "5-10 minutes"),
        (10_001, "10-15 minutes"),
    ],
)
def test_estimate_sync_duration_bands(count, expected) -> None:
    assert estimate_sync_duration(count) == expected


class TestRunSync:
    """Fases da sincronização destacada."""

    @pytest.mark.asyncio
    async def test_writes_only_new_members_in_batches(self, scheduler) -> None:
        existing = "100000000000000001"
        sheets = FakeSheetsClient([["discord_id"], [existing]])
        discord = FakeDiscordClient(
            [
                build_member(existing, "old"),
                build_member("100000000000000002", "new1"),
                build_member("100000000000000003", "new2"),
                build_member("100000000000000004", "new3"),
            ]
        )
        orchestrator = _orchestrator(scheduler, sheets=sheets, discord=discord, batch_size=2)

        report = await orchestrator.run_sync(_operation(), "req-sync")

        assert report is not None
        assert report.members_fetched == 4
        assert report.new_rows == 3
        assert report.rows_written == 3
        assert [len(batch) for batch in sheets.appended] == [2, 1]
        assert [row[0] for row in sheets.written_rows] == [
            "100000000000000002",
            "100000000000000003",
            "100000000000000004",
        ]
        assert discord.member_requests == [GUILD_ID]

    @pytest.mark.asyncio
    async def test_nothing_to_write(self, scheduler) -> None:
        sheets = FakeSheetsClient()
        report = await _orchestrator(scheduler, sheets=sheets).run_sync(_operation(), "req-sync")

        assert report.rows_written == 0
        assert sheets.appended == []

    @pytest.mark.asyncio
    async def test_failure_logged_with_phase(
        self, scheduler, caplog: pytest.LogCaptureFixture
    ) -> None:
        sheets = FakeSheetsClient(read_error=SheetsApiError("forbidden", 403))

        with caplog.at_level(logging.ERROR):
            report = await _orchestrator(scheduler, sheets=sheets).run_sync(_operation(), "req-x")

        assert report is None
        record = next(r for r in caplog.records if r.message == "member_sync_failed")
        assert record.phase == "read_existing_ids"
        assert record.request_id == "req-x"

    @pytest.mark.asyncio
    async def test_scheduled_coroutine_runs_sync(self, scheduler) -> None:
        sheets = FakeSheetsClient()
        discord = FakeDiscordClient([build_member("100000000000000002", "new")])
        orchestrator = _orchestrator(scheduler, sheets=sheets, discord=discord)

        orchestrator.start(_operation())
        reports = await scheduler.run_all()

        assert reports[0].rows_written == 1
