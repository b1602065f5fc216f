"""Connector da Discord REST API."""

from .client import DiscordApiClient, authorization_value
from .http_base import HttpClient, HttpClientConfig, HttpError

__all__ = [
    "DiscordApiClient",
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "authorization_value",
]
