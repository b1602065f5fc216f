"""Criação do SecurityContext na borda HTTP.

Os headers CF-Connecting-IP e X-Forwarded-For só identificam o cliente
quando um proxy confiável (Cloudflare, load balancer) os sobrescreve.
Sem proxy, qualquer cliente os forja; com `trust_proxy_headers=False`
o IP vem apenas do peer TCP.
"""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING

from app.domain.security import SecurityContext

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

UNKNOWN = "unknown"


def resolve_client_ip(
    headers: Mapping[str, str],
    peer_host: str | None = None,
    *,
    trust_proxy_headers: bool = True,
) -> str:
    """IP do cliente: CF-Connecting-IP > 1º X-Forwarded-For > peer > "unknown"."""
    if trust_proxy_headers:
        normalized = {name.lower(): value for name, value in headers.items()}
        cf_ip = normalized.get("cf-connecting-ip", "").strip()
        if cf_ip:
            return cf_ip
        forwarded = normalized.get("x-forwarded-for", "")
        first_hop = forwarded.split(",", 1)[0].strip()
        if first_hop:
            return first_hop
    return peer_host or UNKNOWN


def build_security_context(
    headers: Mapping[str, str],
    *,
    peer_host: str | None = None,
    trust_proxy_headers: bool = True,
    clock: Callable[[], float] = time.time,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> SecurityContext:
    """Monta o contexto imutável do request."""
    user_agent = next(
        (value for name, value in headers.items() if name.lower() == "user-agent" and value),
        UNKNOWN,
    )
    return SecurityContext(
        client_ip=resolve_client_ip(headers, peer_host, trust_proxy_headers=trust_proxy_headers),
        user_agent=user_agent,
        timestamp=int(clock() * 1000),
        request_id=id_factory(),
    )
