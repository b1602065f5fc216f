"""Cliente HTTP base para a Discord REST API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


class HttpClient:
    """Cliente HTTP com retry para 429 (respeitando retry_after), 5xx e rede.

    Respostas 4xx não-429 são devolvidas ao chamador sem retry.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport
        self._sleep = sleep

    async def get(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self.request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self.request("POST", url, json=json, headers=headers)

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        merged_headers = {**self._config.default_headers, **(headers or {})}
        for attempt in range(self._config.max_retries + 1):
            try:
                async with httpx.AsyncClient(
                    verify=self._config.verify_ssl,
                    transport=self._transport,
                ) as client:
                    response = await client.request(
                        method,
                        url,
                        json=json,
                        params=params,
                        headers=merged_headers,
                        timeout=self._config.timeout_seconds,
                    )
                if response.status_code == 429:
                    if attempt >= self._config.max_retries:
                        raise HttpError("http_rate_limited", status_code=429, is_retryable=True)
                    await self._sleep_rate_limited(response)
                    continue
                if response.status_code >= 500:
                    raise HttpError(
                        "http_retryable_status",
                        status_code=response.status_code,
                        is_retryable=True,
                    )
                return response
            except HttpError as exc:
                if not exc.is_retryable or attempt >= self._config.max_retries:
                    raise
                await self._backoff_sleep(attempt)
            except (httpx.TimeoutException, httpx.ConnectError) as exc:
                if attempt >= self._config.max_retries:
                    raise HttpError("http_connection_error", is_retryable=True) from exc
                await self._backoff_sleep(attempt)
        raise HttpError("http_retry_exhausted", is_retryable=True)

    async def _sleep_rate_limited(self, response: httpx.Response) -> None:
        retry_after, is_global = _parse_rate_limit(response)
        logger.warning(
            "http_rate_limited",
            extra={
                "retry_after_seconds": retry_after,
                "global_rate_limit": is_global,
            },
        )
        await self._sleep(min(retry_after, self._config.backoff_max_seconds))

    async def _backoff_sleep(self, attempt: int) -> None:
        backoff = min(
            (2**attempt) * self._config.backoff_base_seconds,
            self._config.backoff_max_seconds,
        )
        logger.info("http_backoff", extra={"backoff_seconds": backoff})
        await self._sleep(backoff)


def _parse_rate_limit(response: httpx.Response) -> tuple[float, bool]:
    """Extrai (retry_after, global) do corpo 429 ou dos headers."""
    retry_after = 1.0
    is_global = response.headers.get("x-ratelimit-global", "").lower() == "true"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        if isinstance(body.get("retry_after"), int | float):
            retry_after = float(body["retry_after"])
        is_global = is_global or bool(body.get("global"))
    elif response.headers.get("retry-after"):
        try:
            retry_after = float(response.headers["retry-after"])
        except ValueError:
            retry_after = 1.0
    return max(retry_after, 0.0), is_global
