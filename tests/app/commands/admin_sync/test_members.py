"""Testes da transformação de membros em linhas da planilha."""

from __future__ import annotations

from app.commands.admin_sync.members import (
    existing_ids_from_column,
    filter_new_members,
    is_snowflake,
    transform_members,
)
from tests.fakes.interactions import build_member

NOW = "2024-05-01T12:00:00.000Z"
ALICE = "100000000000000001"
BOB = "100000000000000002"


class TestTransformMembers:
    def test_builds_rows_with_display_name_priority(self) -> None:
        raw = [
            build_member(ALICE, "alice", nick="Ali", user={"global_name": "Alice G"}),
            build_member(BOB, "bob", user={"global_name": "Bobby"}),
        ]

        rows = transform_members(raw, now_iso=NOW)

        assert [row.display_name for row in rows] == ["Ali", "Bobby"]
        assert rows[0].as_row() == [
            ALICE,
            "Ali",
            "alice",
            "2024-01-01T00:00:00.000000+00:00",
            "FALSE",
            "TRUE",
            NOW,
        ]

    def test_username_used_when_no_nick_or_global_name(self) -> None:
        rows = transform_members([build_member(ALICE, "alice")], now_iso=NOW)
        assert rows[0].display_name == "alice"

    def test_skips_bots_invalid_ids_duplicates_and_malformed(self) -> None:
        raw = [
            build_member(ALICE, "alice"),
            build_member(ALICE, "alice-again"),
            build_member(BOB, "botty", user={"bot": True}),
            build_member("123", "short-id"),
            {"user": {"id": "100000000000000003"}},
            {"nick": "no user"},
        ]

        rows = transform_members(raw, now_iso=NOW)

        assert [row.discord_id for row in rows] == [ALICE]


def test_existing_ids_skip_header_and_invalid_values() -> None:
    column = [["discord_id"], [ALICE], [], ["not-an-id"], [BOB]]
    assert existing_ids_from_column(column) == {ALICE, BOB}


def test_filter_new_members() -> None:
    rows = transform_members([build_member(ALICE, "alice"), build_member(BOB, "bob")], now_iso=NOW)
    assert [row.discord_id for row in filter_new_members(rows, {ALICE})] == [BOB]


def test_snowflake_requires_exact_ascii_digits() -> None:
    assert is_snowflake(ALICE)
    assert not is_snowflake(f"{ALICE}\n")
    assert not is_snowflake("١" * 18)
    assert not is_snowflake(int(ALICE))
