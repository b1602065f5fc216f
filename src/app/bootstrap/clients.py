"""Factories de clientes externos: Discord REST e Google Sheets."""

from __future__ import annotations

import logging

from api.connectors.discord import DiscordApiClient, HttpClient, HttpClientConfig
from app.infra.sheets import GoogleSheetsClientFactory
from config.settings import get_discord_settings

logger = logging.getLogger(__name__)


def create_discord_client() -> DiscordApiClient:
    """Cria cliente REST do Discord a partir das settings."""
    settings = get_discord_settings()
    http_client = HttpClient(
        HttpClientConfig(
            timeout_seconds=settings.request_timeout_seconds,
            max_retries=settings.max_retries,
        )
    )
    client = DiscordApiClient(
        bot_token=settings.bot_token,
        api_endpoint=settings.api_endpoint,
        http_client=http_client,
    )
    logger.info("discord_client_created", extra={"api_endpoint": settings.api_endpoint})
    return client


def create_sheets_factory() -> GoogleSheetsClientFactory:
    """Cria a factory de clientes da planilha (um cliente por sincronização)."""
    return GoogleSheetsClientFactory()
