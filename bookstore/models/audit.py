"""
Audit Models for Bookstore

Every command the interpreter handles is logged for audit purposes.
This provides:
1. Traceability of who changed accounts, inventory and the ledger
2. Debugging information when a command is rejected
3. The data behind the `log` and `report employee` commands

DESIGN DECISION: The operation log is append-only. We never delete or
modify its records. Diagnostic events (including rejections) go to the
structured log only; accepted mutating operations are also persisted.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Lifecycle
    DATA_LOADED = "data_loaded"
    BOOTSTRAP_ACCOUNT_CREATED = "bootstrap_account_created"
    INTERPRETER_STOPPED = "interpreter_stopped"

    # Commands
    COMMAND_ACCEPTED = "command_accepted"
    COMMAND_REJECTED = "command_rejected"

    # Failures
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    INFO = "info"
    ERROR = "error"


class OperationRecord(BaseModel):
    """
    One accepted mutating operation, as persisted in the operation log.

    Passwords never appear in `detail`.
    """
    model_config = ConfigDict(frozen=True)

    actor: str = Field(
        default="",
        max_length=30,
        description="User on top of the login stack when the command ran ('' for a guest)"
    )
    action: str = Field(
        ...,
        min_length=1,
        max_length=15,
        description="Command keyword"
    )
    detail: str = Field(
        default="",
        max_length=128,
        description="Short, password-free description of the operation"
    )

    def to_log_line(self) -> str:
        """Format for the `log` command."""
        return "\t".join([self.actor or "-", self.action, self.detail])


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    # Set only for accepted mutating commands
    operation: Optional[OperationRecord] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.command_rejected("buy", "insufficient stock", actor="alice")
    """

    @staticmethod
    def data_loaded(accounts: int, books: int, transactions: int, operations: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_LOADED,
            description="Record files loaded",
            details={
                "accounts": accounts,
                "books": books,
                "transactions": transactions,
                "operations": operations,
            },
        )

    @staticmethod
    def bootstrap_account_created(user_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BOOTSTRAP_ACCOUNT_CREATED,
            description=f"Bootstrap account created: {user_id}",
            details={"user_id": user_id},
        )

    @staticmethod
    def command_accepted(
        command: str,
        actor: str,
        operation: Optional[OperationRecord] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_ACCEPTED,
            description=f"Command accepted: {command}",
            details={"command": command, "actor": actor},
            operation=operation,
        )

    @staticmethod
    def command_rejected(command: str, reason: str, actor: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_REJECTED,
            description=f"Command rejected: {command}",
            details={"command": command, "actor": actor, "reason": reason},
        )

    @staticmethod
    def system_error(error_type: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
        )

    @staticmethod
    def interpreter_stopped(lines_read: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INTERPRETER_STOPPED,
            description="Interpreter stopped",
            details={"lines_read": lines_read},
        )
