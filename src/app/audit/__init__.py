"""Trilha de auditoria das interações."""

from app.audit.audit_logger import AuditLogger

__all__ = ["AuditLogger"]
