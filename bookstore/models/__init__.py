"""
Data Models Package

This package contains all Pydantic models used in the Bookstore system.
All data flowing through the system must conform to these schemas.
"""

from bookstore.models.account import ACCOUNT_PRIVILEGES, Account, Privilege
from bookstore.models.book import MAX_QUANTITY, Book
from bookstore.models.ledger import FinanceSummary, Transaction, format_money
from bookstore.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    OperationRecord,
)

__all__ = [
    # Account models
    "ACCOUNT_PRIVILEGES",
    "Account",
    "Privilege",
    # Inventory models
    "MAX_QUANTITY",
    "Book",
    # Ledger models
    "FinanceSummary",
    "Transaction",
    "format_money",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    "OperationRecord",
]
