"""Modelos de domínio da sincronização de membros para a planilha."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ServiceAccountCredentials:
    """Credenciais de service account da Google Sheets API.

    Campos vazios são permitidos na construção; a checagem estrutural
    acontece na validação da operação e na criação do cliente.
    """

    client_email: str
    private_key: str
    credential_type: str = "service_account"
    project_id: str = ""
    private_key_id: str = ""
    client_id: str = ""
    token_uri: str = "https://oauth2.googleapis.com/token"

    def as_info(self) -> dict[str, Any]:
        """Formato aceito por `service_account.Credentials.from_service_account_info`."""
        return {
            "type": self.credential_type,
            "project_id": self.project_id,
            "private_key_id": self.private_key_id,
            "private_key": self.private_key,
            "client_email": self.client_email,
            "client_id": self.client_id,
            "token_uri": self.token_uri,
        }

    def __repr__(self) -> str:
        # Nunca expor a chave privada em logs/tracebacks
        return (
            f"ServiceAccountCredentials(client_email={self.client_email!r}, "
            f"project_id={self.project_id!r}, private_key=<redacted>)"
        )


@dataclass(frozen=True, slots=True)
class SyncOperation:
    """Pedido de sincronização construído na entrada do comando admin.

    Attributes:
        guild_id: Servidor cujos membros serão sincronizados
        credentials: Credenciais da service account
        request_id: ID de rastreamento (vazio = gerar novo)
        initiated_by: Usuário que disparou o comando
        timestamp: Momento do pedido em ISO-8601 (YYYY-MM-DDTHH:MM:SS.mmmZ)
        estimated_member_count: Tamanho estimado do servidor, se conhecido
    """

    guild_id: str
    credentials: ServiceAccountCredentials
    request_id: str
    initiated_by: str
    timestamp: str
    estimated_member_count: int | None = None


@dataclass(frozen=True, slots=True)
class SyncAcceptance:
    """Payload devolvido ao chamador antes da sincronização executar."""

    request_id: str
    estimated_duration: str
    message: str = "Background sync initiated successfully"
    metadata: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "requestId": self.request_id,
            "estimatedDuration": self.estimated_duration,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True, slots=True)
class SyncReport:
    """Resumo de uma sincronização concluída (registrado em log)."""

    request_id: str
    members_fetched: int
    existing_ids: int
    new_rows: int
    rows_written: int
