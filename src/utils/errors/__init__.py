"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    CredentialsError,
    DiscordApiError,
    InfrastructureError,
    OperationTimeoutError,
    SheetsApiError,
    UpstreamApiError,
)

__all__ = [
    "CredentialsError",
    "DiscordApiError",
    "InfrastructureError",
    "OperationTimeoutError",
    "SheetsApiError",
    "UpstreamApiError",
]
