"""Validação de URLs de perfil do Rocket League Tracker.

Formato aceito:
    https://rocketleague.tracker.network/rocket-league/profile/<platform>/<id>/overview
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

TRACKER_HOST = "rocketleague.tracker.network"
SUPPORTED_PLATFORMS = ("steam", "epic", "psn", "xbl", "switch")
MAX_PLATFORM_ID_LENGTH = 100

_PLATFORM_RULES: dict[str, tuple[re.Pattern[str], str]] = {
    "steam": (
        re.compile(r"7656119[0-9]{10}"),
        "Invalid Steam ID64 format. Must be 17 digits starting with 7656119",
    ),
    "psn": (
        re.compile(r"[a-zA-Z][a-zA-Z0-9_-]{2,15}"),
        "Invalid PSN ID format. Must be 3-16 characters, start with letter, "
        "contain only letters/numbers/hyphens/underscores",
    ),
    "xbl": (
        re.compile(r"[a-zA-Z][a-zA-Z0-9 ]{2,11}"),
        "Invalid Xbox gamertag format. Must be 3-12 characters, start with letter, "
        "contain only letters/numbers/spaces",
    ),
    "epic": (
        re.compile(r"[a-zA-Z0-9._-]{3,}"),
        "Invalid Epic Games display name format. Must be 3+ characters, "
        "contain only letters/numbers/periods/hyphens/underscores",
    ),
    "switch": (
        re.compile(r"[a-zA-Z0-9._-]{3,}"),
        "Invalid Nintendo Switch ID format. Must be 3+ characters, "
        "contain only letters/numbers/periods/hyphens/underscores",
    ),
}

FORMAT_HINT = (
    "URL must follow the format: https://rocketleague.tracker.network/rocket-league"
    "/profile/<platform>/<platform_id>/overview"
)


@dataclass(frozen=True, slots=True)
class TrackerProfile:
    """Perfil válido extraído da URL."""

    url: str
    platform: str
    platform_id: str


@dataclass(frozen=True, slots=True)
class TrackerValidation:
    profile: TrackerProfile | None = None
    error: str | None = None


def validate_tracker_url(url: str) -> TrackerValidation:
    """Valida domínio, estrutura do path, plataforma e id."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return TrackerValidation(error="Invalid URL format")
    if not parts.scheme or not parts.netloc:
        return TrackerValidation(error="Invalid URL format")

    if (parts.hostname or "") != TRACKER_HOST:
        return TrackerValidation(error=f"URL must be from {TRACKER_HOST}")

    segments = [segment for segment in parts.path.split("/") if segment]
    if (
        len(segments) != 5
        or segments[0] != "rocket-league"
        or segments[1] != "profile"
        or segments[4] != "overview"
    ):
        return TrackerValidation(error=FORMAT_HINT)

    platform = segments[2].lower()
    if platform not in SUPPORTED_PLATFORMS:
        return TrackerValidation(
            error=(
                f"Unsupported platform: {segments[2]}. "
                f"Supported platforms: {', '.join(SUPPORTED_PLATFORMS)}"
            )
        )

    platform_id = unquote(segments[3])
    if len(platform_id) > MAX_PLATFORM_ID_LENGTH:
        return TrackerValidation(
            error=f"Platform ID too long (maximum {MAX_PLATFORM_ID_LENGTH} characters)"
        )

    pattern, message = _PLATFORM_RULES[platform]
    if not pattern.fullmatch(platform_id):
        return TrackerValidation(error=message)

    return TrackerValidation(
        profile=TrackerProfile(url=url, platform=platform, platform_id=platform_id)
    )
