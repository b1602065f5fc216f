"""Connectors: adapters de borda para APIs externas.

Estrutura:
- discord/: Discord REST API (membros de servidor, mensagens em canal)

Google Sheets fica em app/infra/sheets (cliente oficial do Google, síncrono).
"""

__all__: list[str] = []
