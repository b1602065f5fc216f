"""Agregador de settings do Beluga Bot.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Discord settings
from config.settings.discord import (
    DISCORD_API_BASE_URL,
    DISCORD_API_VERSION,
    DiscordSettings,
    get_discord_settings,
)

# Google Sheets settings
from config.settings.google_sheets import (
    GOOGLE_TOKEN_URI,
    REQUIRED_CREDENTIAL_ENV_VARS,
    GoogleSheetsSettings,
    get_google_sheets_settings,
)

# Security settings
from config.settings.security import (
    SecuritySettings,
    get_security_settings,
)

__all__ = [
    # Constants
    "DISCORD_API_BASE_URL",
    "DISCORD_API_VERSION",
    "GOOGLE_TOKEN_URI",
    "REQUIRED_CREDENTIAL_ENV_VARS",
    # Base
    "BaseSettings",
    # Discord
    "DiscordSettings",
    "Environment",
    # Google Sheets
    "GoogleSheetsSettings",
    # Security
    "SecuritySettings",
    "get_base_settings",
    "get_discord_settings",
    "get_google_sheets_settings",
    "get_security_settings",
]
