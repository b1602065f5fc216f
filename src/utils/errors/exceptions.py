"""Exceções de domínio para falhas de infraestrutura e dependências externas."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class OperationTimeoutError(InfrastructureError):
    """Operação externa excedeu o timeout configurado."""

    def __init__(self, message: str = "Request timeout") -> None:
        super().__init__(message)


class UpstreamApiError(InfrastructureError):
    """Erro de API externa com status e mensagem do upstream.

    A mensagem nunca carrega credenciais, apenas o texto devolvido
    pelo serviço remoto.
    """

    service_name = "Upstream"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        self.upstream_message = message
        self.status_code = status_code
        self.is_retryable = is_retryable
        if status_code is None:
            super().__init__(f"{self.service_name} API error: {message}")
        else:
            super().__init__(f"{self.service_name} API error ({status_code}): {message}")


class DiscordApiError(UpstreamApiError):
    """Falha ao chamar a Discord REST API."""

    service_name = "Discord"


class SheetsApiError(UpstreamApiError):
    """Falha ao chamar a Google Sheets API."""

    service_name = "Google Sheets"


class CredentialsError(ValueError):
    """Credenciais de service account ausentes ou malformadas."""
