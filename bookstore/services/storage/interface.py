"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the fixed-width record files behind one seam
2. Use in-memory storage for testing
3. Keep business logic decoupled from the on-disk layout

The interface is intentionally simple. Entity sets are loaded once at
startup and rewritten wholesale whenever the interpreter mutates them;
there is no per-record update.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from bookstore.models.account import Account
from bookstore.models.audit import OperationRecord
from bookstore.models.book import Book
from bookstore.models.ledger import Transaction


class RecordStoreInterface(ABC):
    """
    Abstract interface for the three entity sets.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load_accounts(self) -> list[Account]:
        """
        Load every stored account.

        Returns:
            Accounts in stored order (empty if nothing was stored yet)

        Raises:
            CorruptRecordError: If a stored record cannot be decoded
        """
        pass

    @abstractmethod
    def save_accounts(self, accounts: Iterable[Account]) -> None:
        """
        Replace the stored account set.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def load_books(self) -> list[Book]:
        """Load every stored book."""
        pass

    @abstractmethod
    def save_books(self, books: Iterable[Book]) -> None:
        """Replace the stored book set."""
        pass

    @abstractmethod
    def load_transactions(self) -> list[Transaction]:
        """Load the ledger in chronological order."""
        pass

    @abstractmethod
    def save_transactions(self, transactions: Iterable[Transaction]) -> None:
        """Replace the stored ledger."""
        pass


class OperationLogInterface(ABC):
    """
    Abstract interface for operation log storage.

    Operation logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_operation(self, record: OperationRecord) -> None:
        """
        Append one operation record to the log.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def load_operations(self) -> list[OperationRecord]:
        """
        Load the operation log.

        Returns:
            Records in chronological order
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptRecordError(StorageError):
    """A stored record could not be decoded."""
    pass


class FieldOverflowError(StorageError):
    """A value does not fit its fixed-width field."""
    pass
