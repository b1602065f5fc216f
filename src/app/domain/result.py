"""Resultado discriminado para validações (Ok | Err).

Falhas esperadas (validação, autorização) trafegam como valores;
exceções ficam reservadas para condições realmente excepcionais.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Sucesso carregando o valor produzido."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    """Falha carregando a mensagem legível do motivo."""

    error: str

    @property
    def is_ok(self) -> bool:
        return False


Result = Ok[T] | Err
