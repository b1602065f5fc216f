"""Helpers de timestamp ISO-8601 em UTC com milissegundos (sufixo Z)."""

from __future__ import annotations

from datetime import UTC, datetime


def format_iso_timestamp(moment: datetime) -> str:
    """Formata como `YYYY-MM-DDTHH:MM:SS.mmmZ`."""
    utc_moment = moment.astimezone(UTC)
    return utc_moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return format_iso_timestamp(datetime.now(UTC))


def is_round_trip_iso(value: str) -> bool:
    """True se `value` sobrevive a parse + format sem alteração."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return False
    if parsed.tzinfo is None:
        return False
    return format_iso_timestamp(parsed) == value
