"""Timeout uniforme para chamadas externas no caminho síncrono."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

from utils.errors import OperationTimeoutError

if TYPE_CHECKING:
    from collections.abc import Awaitable

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 10.0


async def with_timeout(
    awaitable: Awaitable[T],
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> T:
    """Aguarda `awaitable` por no máximo `timeout_seconds`.

    Raises:
        OperationTimeoutError: Com a mensagem "Request timeout" ao expirar.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except TimeoutError as exc:
        raise OperationTimeoutError() from exc
