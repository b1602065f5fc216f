"""Testes do helper de timeout."""

from __future__ import annotations

import asyncio

import pytest

from app.security import with_timeout
from utils.errors import OperationTimeoutError


@pytest.mark.asyncio
async def test_with_timeout_returns_result() -> None:
    async def _fast() -> str:
        return "ok"

    assert await with_timeout(_fast(), 1.0) == "ok"


@pytest.mark.asyncio
async def test_with_timeout_raises_request_timeout() -> None:
    with pytest.raises(OperationTimeoutError, match="Request timeout"):
        await with_timeout(asyncio.sleep(1.0), 0.01)
