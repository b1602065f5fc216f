"""API: camada de borda.

Responsabilidades:
- Receber interações do Discord (webhook HTTP)
- Expor health check
- Falar com APIs externas (Discord REST)

Subpastas:
- connectors/: clientes HTTP de APIs externas
- routes/: endpoints HTTP (interações, health)

NÃO PODE conter: regras de comando, validação de domínio, orquestração de sincronização.
"""
