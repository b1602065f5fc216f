"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (interações do Discord, health)
- Criar o SecurityContext na borda
- Delegação para segurança, dispatcher e auditoria
- Respostas HTTP apropriadas

Estrutura:
- routes/interactions/: webhook de interações do Discord
- routes/health/: health check
- security_headers.py: headers aplicados a toda resposta

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
