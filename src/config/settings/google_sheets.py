"""Settings específicas de Google Sheets.

Planilha alvo da sincronização de membros e credenciais da
service account usada para autenticar na Sheets API v4.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

GOOGLE_TOKEN_URI: str = "https://oauth2.googleapis.com/token"

# Ordem importa: a primeira ausente é reportada
REQUIRED_CREDENTIAL_ENV_VARS: tuple[str, ...] = (
    "GOOGLE_SHEETS_TYPE",
    "GOOGLE_SHEETS_PROJECT_ID",
    "GOOGLE_SHEETS_PRIVATE_KEY_ID",
    "GOOGLE_SHEETS_PRIVATE_KEY",
    "GOOGLE_SHEETS_CLIENT_EMAIL",
    "GOOGLE_SHEETS_CLIENT_ID",
)


@dataclass(frozen=True)
class GoogleSheetsSettings:
    """Configurações da integração com Google Sheets.

    Attributes:
        sheet_id: ID da planilha de usuários
        credential_type: Tipo da credencial (esperado: service_account)
        project_id: Projeto GCP da service account
        private_key_id: ID da chave privada
        private_key: Chave privada PEM (com quebras de linha reais)
        client_email: Email da service account
        client_id: Client ID da service account
        token_uri: Endpoint OAuth de troca de token
        users_id_range: Range lido para ids existentes
        users_append_range: Range usado para anexar novas linhas
        write_batch_size: Linhas por chamada de append
    """

    sheet_id: str = ""

    # Service account
    credential_type: str = ""
    project_id: str = ""
    private_key_id: str = ""
    private_key: str = ""
    client_email: str = ""
    client_id: str = ""
    token_uri: str = GOOGLE_TOKEN_URI

    # Planilha
    users_id_range: str = "Users!A:A"
    users_append_range: str = "Users!A:G"
    write_batch_size: int = 500

    def missing_credential_field(self) -> str | None:
        """Retorna a primeira variável de credencial ausente (ou None)."""
        values = (
            self.credential_type,
            self.project_id,
            self.private_key_id,
            self.private_key,
            self.client_email,
            self.client_id,
        )
        for name, value in zip(REQUIRED_CREDENTIAL_ENV_VARS, values, strict=True):
            if not value:
                return name
        return None

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Google Sheets."""
        errors: list[str] = []
        if not self.sheet_id:
            errors.append("GOOGLE_SHEET_ID não configurado")
        missing = self.missing_credential_field()
        if missing:
            errors.append(f"{missing} não configurado")
        if self.write_batch_size <= 0:
            errors.append("GOOGLE_SHEETS_WRITE_BATCH_SIZE deve ser > 0")
        return errors


def _load_private_key(raw: str) -> str:
    # Secrets costumam chegar com "\n" literal
    return raw.replace("\\n", "\n")


def _load_from_env() -> GoogleSheetsSettings:
    """Carrega GoogleSheetsSettings de variáveis de ambiente."""
    return GoogleSheetsSettings(
        sheet_id=os.getenv("GOOGLE_SHEET_ID", ""),
        credential_type=os.getenv("GOOGLE_SHEETS_TYPE", ""),
        project_id=os.getenv("GOOGLE_SHEETS_PROJECT_ID", ""),
        private_key_id=os.getenv("GOOGLE_SHEETS_PRIVATE_KEY_ID", ""),
        private_key=_load_private_key(os.getenv("GOOGLE_SHEETS_PRIVATE_KEY", "")),
        client_email=os.getenv("GOOGLE_SHEETS_CLIENT_EMAIL", ""),
        client_id=os.getenv("GOOGLE_SHEETS_CLIENT_ID", ""),
        token_uri=os.getenv("GOOGLE_SHEETS_TOKEN_URI", GOOGLE_TOKEN_URI),
        users_id_range=os.getenv("GOOGLE_SHEETS_USERS_ID_RANGE", "Users!A:A"),
        users_append_range=os.getenv("GOOGLE_SHEETS_USERS_APPEND_RANGE", "Users!A:G"),
        write_batch_size=int(os.getenv("GOOGLE_SHEETS_WRITE_BATCH_SIZE", "500")),
    )


@lru_cache(maxsize=1)
def get_google_sheets_settings() -> GoogleSheetsSettings:
    """Retorna instância cacheada de GoogleSheetsSettings."""
    return _load_from_env()
