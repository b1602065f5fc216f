"""Stores concretos usados pelo app."""

from .memory_stores import MemoryAuditSink, MemoryRateLimitStore

__all__ = [
    "MemoryAuditSink",
    "MemoryRateLimitStore",
]
