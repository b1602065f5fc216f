"""Rate limiter de janela fixa por cliente.

O estado vive num RateLimitStoreProtocol injetado. Em produção há um
store por processo: instâncias diferentes (escala horizontal) não
compartilham contadores, então o limite é best-effort e não global.
Dentro de um processo o check-and-increment não tem `await`, portanto
nenhuma outra coroutine intercala entre a leitura e a escrita.
"""

from __future__ import annotations

import logging
import random
import time
from typing import TYPE_CHECKING

from app.domain.security import RateLimitEntry
from app.observability import record_counter

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.rate_limit_store import RateLimitStoreProtocol

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100
DEFAULT_WINDOW_MS = 60_000
DEFAULT_CLEANUP_PROBABILITY = 0.01


def _now_ms() -> int:
    return int(time.time() * 1000)


class RateLimiter:
    """Contador por chave de cliente com varredura de entradas expiradas.

    Args:
        store: Store dos contadores.
        limit: Requests permitidos por janela.
        window_ms: Duração da janela em milissegundos.
        clock: Relógio em epoch ms (injetável em testes).
        rng: Fonte de aleatoriedade para `maybe_sweep`.
    """

    def __init__(
        self,
        store: RateLimitStoreProtocol,
        *,
        limit: int = DEFAULT_LIMIT,
        window_ms: int = DEFAULT_WINDOW_MS,
        clock: Callable[[], int] | None = None,
        rng: Callable[[], float] | None = None,
    ) -> None:
        if limit <= 0:
            raise ValueError("limit deve ser > 0")
        if window_ms <= 0:
            raise ValueError("window_ms deve ser > 0")
        self._store = store
        self._limit = limit
        self._window_ms = window_ms
        self._clock = clock or _now_ms
        self._rng = rng or random.random

    @property
    def limit(self) -> int:
        return self._limit

    def check_and_consume(self, client_key: str) -> bool:
        """Consome uma unidade da janela do cliente.

        Returns:
            True se o request é permitido; False se o limite foi atingido
            (nesse caso o contador não é alterado).
        """
        now = self._clock()
        entry = self._store.get(client_key)

        if entry is None or entry.is_expired(now):
            self._store.set(client_key, RateLimitEntry(count=1, reset_time=now + self._window_ms))
            return True

        if entry.count < self._limit:
            self._store.set(
                client_key,
                RateLimitEntry(count=entry.count + 1, reset_time=entry.reset_time),
            )
            return True

        return False

    def sweep(self) -> int:
        """Remove entradas com janela expirada.

        Returns:
            Quantidade removida. Sem avanço do relógio, uma segunda
            chamada seguida remove zero.
        """
        now = self._clock()
        expired = [key for key, entry in self._store.items() if entry.is_expired(now)]
        for key in expired:
            self._store.delete(key)
        if expired:
            record_counter("rate_limiter", "sweep_removed", len(expired))
        return len(expired)

    def maybe_sweep(self, probability: float = DEFAULT_CLEANUP_PROBABILITY) -> int:
        """Executa `sweep` com a probabilidade dada; retorna removidas (ou 0)."""
        if self._rng() >= probability:
            return 0
        return self.sweep()
