"""Audit logging package."""

from trackie.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
