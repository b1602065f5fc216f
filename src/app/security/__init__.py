"""Segurança de requests: rate limit, headers, assinatura e timeout."""

from app.security.context import build_security_context, resolve_client_ip
from app.security.headers import validate_headers
from app.security.orchestrator import SecurityOrchestrator, rate_limit_client_key
from app.security.rate_limiter import RateLimiter
from app.security.timeouts import with_timeout

__all__ = [
    "RateLimiter",
    "SecurityOrchestrator",
    "build_security_context",
    "rate_limit_client_key",
    "resolve_client_ip",
    "validate_headers",
    "with_timeout",
]
