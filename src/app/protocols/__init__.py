"""Protocolos e contratos do core da aplicação."""

from .audit_sink import AuditSinkProtocol
from .discord_client import DiscordApiClientProtocol
from .rate_limit_store import RateLimitStoreProtocol
from .sheets_client import SheetsClientFactoryProtocol, SheetsClientProtocol
from .signature_verifier import SignatureVerifierProtocol
from .task_scheduler import TaskSchedulerProtocol

__all__ = [
    "AuditSinkProtocol",
    "DiscordApiClientProtocol",
    "RateLimitStoreProtocol",
    "SheetsClientFactoryProtocol",
    "SheetsClientProtocol",
    "SignatureVerifierProtocol",
    "TaskSchedulerProtocol",
]
