"""
Audit Logger

DESIGN DECISION: Every command the interpreter handles is logged.
This provides:
1. Complete traceability of accepted operations
2. The reason behind every rejection (the user only ever sees "Invalid")
3. The history behind `log` and `report employee`

The audit logger:
- Writes structured diagnostics to stderr, never stdout (stdout carries
  command output)
- Persists accepted mutating operations to the operation log
- Gracefully handles operation-log failures (logs them, doesn't stop the
  interpreter)
"""

import logging
import sys
from typing import Optional

import structlog

from bookstore.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
    OperationRecord,
)
from bookstore.services.storage import OperationLogInterface, StorageError


def _processors(renderer) -> list:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


# Configure structlog for local logging
structlog.configure(
    processors=_processors(structlog.processors.JSONRenderer()),
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "WARNING", json: bool = True) -> None:
    """
    Route diagnostics to stderr at the given level.

    Call once at startup, before the first log line is emitted.
    """
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        force=True,
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=_processors(renderer),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The operation log file (accepted mutating operations only)
    """

    def __init__(
        self,
        storage: Optional[OperationLogInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Operation log backend.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("bookstore.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists the attached operation if any.

        Returns True if the operation write succeeded (or nothing needed
        persisting).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage and event.operation is not None:
            try:
                self._storage.append_operation(event.operation)
            except StorageError as e:
                # Log failure but don't raise
                self._logger.error(
                    "operation_log_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_data_loaded(
        self,
        accounts: int,
        books: int,
        transactions: int,
        operations: int,
    ) -> None:
        """Log the startup load."""
        self.log(AuditEventBuilder.data_loaded(accounts, books, transactions, operations))

    def log_bootstrap_account_created(self, user_id: str) -> None:
        self.log(AuditEventBuilder.bootstrap_account_created(user_id))

    def log_command_accepted(
        self,
        command: str,
        actor: str,
        operation: Optional[OperationRecord] = None,
    ) -> bool:
        """Log an accepted command, persisting its operation record."""
        return self.log(AuditEventBuilder.command_accepted(command, actor, operation))

    def log_command_rejected(self, command: str, reason: str, actor: str) -> None:
        self.log(AuditEventBuilder.command_rejected(command, reason, actor))

    def log_error(self, error_type: str, error_message: str) -> None:
        self.log(AuditEventBuilder.system_error(error_type, error_message))

    def log_interpreter_stopped(self, lines_read: int) -> None:
        self.log(AuditEventBuilder.interpreter_stopped(lines_read))
