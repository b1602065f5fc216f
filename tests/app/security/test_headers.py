"""Testes das checagens estruturais de headers."""

from __future__ import annotations

import pytest

from app.security.headers import (
    ERROR_INVALID_CONTENT_TYPE,
    ERROR_MISSING_SIGNATURE,
    ERROR_MISSING_TIMESTAMP,
    ERROR_TIMESTAMP_SKEW,
    media_type,
    validate_headers,
)

NOW = 1_700_000_000


def _headers(
    *,
    signature: str | None = "ab" * 64,
    timestamp: str | None = str(NOW),
    content_type: str | None = "application/json",
) -> dict[str, str]:
    headers = {
        "X-Signature-Ed25519": signature,
        "X-Signature-Timestamp": timestamp,
        "Content-Type": content_type,
    }
    return {name: value for name, value in headers.items() if value is not None}


class TestValidateHeaders:
    """Ordem e conteúdo das falhas."""

    def test_valid_headers(self) -> None:
        result = validate_headers(_headers(), now_seconds=NOW)
        assert result.is_valid is True
        assert result.error is None

    def test_missing_signature_reported_first(self) -> None:
        headers = _headers(signature=None, timestamp=None)
        result = validate_headers(headers, now_seconds=NOW)
        assert result.error == ERROR_MISSING_SIGNATURE

    def test_missing_timestamp(self) -> None:
        result = validate_headers(_headers(timestamp=None), now_seconds=NOW)
        assert result.error == ERROR_MISSING_TIMESTAMP

    def test_wrong_content_type(self) -> None:
        result = validate_headers(_headers(content_type="text/plain"), now_seconds=NOW)
        assert result.error == ERROR_INVALID_CONTENT_TYPE

    def test_content_type_parameters_are_ignored(self) -> None:
        headers = _headers(content_type="Application/JSON; charset=utf-8")
        assert validate_headers(headers, now_seconds=NOW).is_valid is True

    def test_stale_timestamp_rejected(self) -> None:
        headers = _headers(timestamp=str(NOW - 301))
        assert validate_headers(headers, now_seconds=NOW).error == ERROR_TIMESTAMP_SKEW

    def test_future_timestamp_rejected(self) -> None:
        headers = _headers(timestamp=str(NOW + 301))
        assert validate_headers(headers, now_seconds=NOW).error == ERROR_TIMESTAMP_SKEW

    def test_timestamp_at_window_edge_accepted(self) -> None:
        headers = _headers(timestamp=str(NOW - 300))
        assert validate_headers(headers, now_seconds=NOW).is_valid is True

    def test_non_numeric_timestamp_rejected(self) -> None:
        headers = _headers(timestamp="yesterday")
        assert validate_headers(headers, now_seconds=NOW).error == ERROR_TIMESTAMP_SKEW

    @pytest.mark.parametrize(
        "timestamp",
        ["\u00b2", "1\u00b3", "\u0661\u0662", "9" * 5000, "-1", "1.5"],
    )
    def test_malformed_timestamp_rejected_without_raising(self, timestamp: str) -> None:
        headers = _headers(timestamp=timestamp)
        result = validate_headers(headers, now_seconds=NOW)
        assert result.is_valid is False
        assert result.error == ERROR_TIMESTAMP_SKEW


def test_media_type_strips_parameters() -> None:
    assert media_type("application/json; charset=UTF-8") == "application/json"
    assert media_type("") == ""
