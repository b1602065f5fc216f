"""Transformação de membros do Discord em linhas da planilha."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from app.domain.member import GuildMember, MemberRow

if TYPE_CHECKING:
    from collections.abc import Iterable

SNOWFLAKE_PATTERN = re.compile(r"[0-9]{17,19}")


def is_snowflake(value: Any) -> bool:
    return isinstance(value, str) and bool(SNOWFLAKE_PATTERN.fullmatch(value))


def existing_ids_from_column(values: Iterable[list[str]]) -> set[str]:
    """Ids da coluna A, ignorando o cabeçalho e valores que não são snowflake."""
    rows = list(values)
    return {row[0] for row in rows[1:] if row and is_snowflake(row[0])}


def transform_members(raw_members: Iterable[dict[str, Any]], *, now_iso: str) -> list[MemberRow]:
    """Converte membros crus em MemberRow.

    Ignora bots, ids inválidos e membros malformados; ids repetidos
    aparecem uma única vez.
    """
    rows: list[MemberRow] = []
    seen: set[str] = set()
    for raw in raw_members:
        try:
            member = GuildMember.model_validate(raw)
        except ValidationError:
            continue
        user = member.user
        if user.bot or not user.username or not is_snowflake(user.id) or user.id in seen:
            continue
        seen.add(user.id)
        rows.append(
            MemberRow(
                discord_id=user.id,
                display_name=member.display_name,
                username=user.username,
                joined_at=member.joined_at,
                is_banned=False,
                is_active=True,
                last_updated=now_iso,
            )
        )
    return rows


def filter_new_members(rows: Iterable[MemberRow], existing_ids: set[str]) -> list[MemberRow]:
    return [row for row in rows if row.discord_id not in existing_ids]
