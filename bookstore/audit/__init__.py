"""Audit logging package."""

from bookstore.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
