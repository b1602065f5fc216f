"""Coração do sistema: segurança, comandos e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- security/: rate limit, headers, orquestrador de segurança
- commands/: dispatcher e handlers de comando
- audit/: trilha de auditoria das interações
- domain/: modelos de domínio (sem IO)
- infra/: implementações concretas de IO
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs

Padrão: app executa; api adapta; utils apoia.
"""
