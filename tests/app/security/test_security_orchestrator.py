"""Testes do orquestrador de segurança."""

from __future__ import annotations

import asyncio

import pytest
from starlette.requests import Request

from app.infra.stores import MemoryRateLimitStore
from app.protocols.signature_verifier import SignatureVerifierProtocol
from app.security import RateLimiter, SecurityOrchestrator
from app.security.headers import ERROR_MISSING_SIGNATURE, ERROR_TIMESTAMP_SKEW
from app.security.orchestrator import (
    ERROR_INVALID_SIGNATURE,
    ERROR_PAYLOAD_TOO_LARGE,
    ERROR_RATE_LIMITED,
)
from tests.fakes.interactions import build_context

NOW = 1_700_000_000
ONE_MIB = 1024 * 1024


class SpyVerifier(SignatureVerifierProtocol):
    def __init__(self, result: bool = True, delay: float = 0.0) -> None:
        self.calls: list[tuple[bytes, str, str, str]] = []
        self._result = result
        self._delay = delay

    async def verify(self, body: bytes, signature: str, timestamp: str, public_key: str) -> bool:
        self.calls.append((body, signature, timestamp, public_key))
        if self._delay:
            await asyncio.sleep(self._delay)
        return self._result


class ExplodingVerifier(SignatureVerifierProtocol):
    async def verify(self, body: bytes, signature: str, timestamp: str, public_key: str) -> bool:
        raise RuntimeError("boom")


def _build_request(
    *,
    body: bytes = b'{"type":1}',
    headers: dict[str, str] | None = None,
) -> Request:
    header_items = headers if headers is not None else {
        "X-Signature-Ed25519": "ab" * 64,
        "X-Signature-Timestamp": str(NOW),
        "Content-Type": "application/json",
    }
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _build_orchestrator(
    verifier: SignatureVerifierProtocol,
    *,
    limit: int = 100,
    timeout_seconds: float = 10.0,
) -> SecurityOrchestrator:
    limiter = RateLimiter(MemoryRateLimitStore(), limit=limit, clock=lambda: NOW * 1000)
    return SecurityOrchestrator(
        rate_limiter=limiter,
        verifier=verifier,
        timeout_seconds=timeout_seconds,
        clock=lambda: float(NOW),
    )


class TestVerifyRequestSecure:
    """Sequência de checagens e decisão final."""

    @pytest.mark.asyncio
    async def test_valid_request_returns_same_context(self) -> None:
        verifier = SpyVerifier()
        context = build_context()

        result = await _build_orchestrator(verifier).verify_request_secure(
            _build_request(), "pk", context
        )

        assert result.is_valid is True
        assert result.context is context
        assert result.error is None
        assert verifier.calls == [(b'{"type":1}', "ab" * 64, str(NOW), "pk")]

    @pytest.mark.asyncio
    async def test_stale_timestamp_rejected_before_crypto(self) -> None:
        verifier = SpyVerifier()
        request = _build_request(
            headers={
                "X-Signature-Ed25519": "ab" * 64,
                "X-Signature-Timestamp": str(NOW - 301),
                "Content-Type": "application/json",
            }
        )

        result = await _build_orchestrator(verifier).verify_request_secure(
            request, "pk", build_context()
        )

        assert result.is_valid is False
        assert result.error == ERROR_TIMESTAMP_SKEW
        assert verifier.calls == []

    @pytest.mark.asyncio
    async def test_missing_headers_rejected(self) -> None:
        result = await _build_orchestrator(SpyVerifier()).verify_request_secure(
            _build_request(headers={"Content-Type": "application/json"}), "pk", build_context()
        )
        assert result.error == ERROR_MISSING_SIGNATURE

    @pytest.mark.asyncio
    async def test_rate_limit_exceeded(self) -> None:
        orchestrator = _build_orchestrator(SpyVerifier(), limit=1)
        context = build_context()

        first = await orchestrator.verify_request_secure(_build_request(), "pk", context)
        second = await orchestrator.verify_request_secure(_build_request(), "pk", context)

        assert first.is_valid is True
        assert second.is_valid is False
        assert second.error == ERROR_RATE_LIMITED
        assert second.context is context

    @pytest.mark.asyncio
    async def test_payload_at_limit_accepted(self) -> None:
        verifier = SpyVerifier()
        result = await _build_orchestrator(verifier).verify_request_secure(
            _build_request(body=b"x" * ONE_MIB), "pk", build_context()
        )
        assert result.is_valid is True
        assert len(verifier.calls) == 1

    @pytest.mark.asyncio
    async def test_payload_over_limit_rejected(self) -> None:
        verifier = SpyVerifier()
        result = await _build_orchestrator(verifier).verify_request_secure(
            _build_request(body=b"x" * (ONE_MIB + 1)), "pk", build_context()
        )
        assert result.error == ERROR_PAYLOAD_TOO_LARGE
        assert verifier.calls == []

    @pytest.mark.asyncio
    async def test_invalid_signature(self) -> None:
        result = await _build_orchestrator(SpyVerifier(result=False)).verify_request_secure(
            _build_request(), "pk", build_context()
        )
        assert result.error == ERROR_INVALID_SIGNATURE

    @pytest.mark.asyncio
    async def test_verifier_timeout_becomes_verification_error(self) -> None:
        orchestrator = _build_orchestrator(SpyVerifier(delay=1.0), timeout_seconds=0.01)
        result = await orchestrator.verify_request_secure(_build_request(), "pk", build_context())
        assert result.is_valid is False
        assert result.error == "Verification error: Request timeout"

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_verification_error(self) -> None:
        context = build_context()
        result = await _build_orchestrator(ExplodingVerifier()).verify_request_secure(
            _build_request(), "pk", context
        )
        assert result.error == "Verification error: boom"
        assert result.context is context


class TestRateLimitSweep:
    """Varredura do rate limiter a cada verificação."""

    @pytest.mark.asyncio
    async def test_rejected_requests_from_rotating_ips_do_not_accumulate(self) -> None:
        now_ms = [NOW * 1000]
        store = MemoryRateLimitStore()
        limiter = RateLimiter(store, clock=lambda: now_ms[0], rng=lambda: 0.0)
        orchestrator = SecurityOrchestrator(
            rate_limiter=limiter,
            verifier=SpyVerifier(result=False),
            cleanup_probability=1.0,
            clock=lambda: float(NOW),
        )

        for index in range(50):
            result = await orchestrator.verify_request_secure(
                _build_request(), "pk", build_context(client_ip=f"198.51.100.{index}")
            )
            assert result.error == ERROR_INVALID_SIGNATURE
            now_ms[0] += 61_000

        assert len(store) <= 1

    @pytest.mark.asyncio
    async def test_header_rejection_still_sweeps(self) -> None:
        now_ms = [NOW * 1000]
        store = MemoryRateLimitStore()
        limiter = RateLimiter(store, clock=lambda: now_ms[0], rng=lambda: 0.0)
        limiter.check_and_consume("rate_limit:198.51.100.1")
        now_ms[0] += 61_000
        orchestrator = SecurityOrchestrator(
            rate_limiter=limiter,
            verifier=SpyVerifier(),
            cleanup_probability=1.0,
            clock=lambda: float(NOW),
        )

        result = await orchestrator.verify_request_secure(
            _build_request(headers={"Content-Type": "application/json"}), "pk", build_context()
        )

        assert result.error == ERROR_MISSING_SIGNATURE
        assert len(store) == 0
