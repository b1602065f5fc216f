"""Protocolos do cliente de planilha usado pela sincronização."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.sync import ServiceAccountCredentials


class SheetsClientProtocol(ABC):
    """Leitura/escrita da aba de usuários.

    Erros de API devem ser levantados como SheetsApiError.
    """

    @abstractmethod
    async def read_column(self, spreadsheet_id: str, range_name: str) -> list[list[str]]:
        """Lê valores de um range (linhas x colunas)."""

    @abstractmethod
    async def append_rows(
        self,
        spreadsheet_id: str,
        range_name: str,
        rows: Sequence[Sequence[str]],
    ) -> int:
        """Anexa linhas ao final do range; retorna linhas escritas."""


class SheetsClientFactoryProtocol(ABC):
    """Cria clientes autenticados a partir de credenciais."""

    @abstractmethod
    def create(self, credentials: ServiceAccountCredentials) -> SheetsClientProtocol:
        """Valida credenciais e devolve cliente pronto.

        Raises:
            CredentialsError: Se as credenciais estiverem incompletas/malformadas.
        """
