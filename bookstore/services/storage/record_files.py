"""
Flat-File Storage Implementation

DESIGN DECISION: Each entity set lives in its own file of fixed-size
binary records:
1. Loading is a single read and a slice per record
2. No database setup required
3. A whole set is rewritten on every mutation, which is cheap at
   bookstore scale

TRADEOFFS:
- No atomic multi-file commit (a crash between two writes is out of scope)
- No schema versioning; the layouts in `codec` are the format

The implementation follows the abstract interface, so the interpreter
can run against the in-memory store in tests without touching disk.
"""

from pathlib import Path
from struct import Struct
from typing import Callable, Iterable, Optional, TypeVar

import structlog

from bookstore.config import BookstoreSettings, get_settings
from bookstore.models.account import Account
from bookstore.models.audit import OperationRecord
from bookstore.models.book import Book
from bookstore.models.ledger import Transaction
from bookstore.services.storage import codec
from bookstore.services.storage.interface import (
    OperationLogInterface,
    RecordStoreInterface,
    StorageError,
)


T = TypeVar("T")


class FileRecordStore(RecordStoreInterface, OperationLogInterface):
    """
    Record files in the configured data directory.

    Missing files read as empty sets; they are created on first write.
    """

    def __init__(self, settings: Optional[BookstoreSettings] = None):
        self._settings = settings or get_settings()
        self._logger = structlog.get_logger(__name__)

    # -------------------------------------------------------------------------
    # Low-level file access
    # -------------------------------------------------------------------------

    def _read_records(
        self,
        path: Path,
        layout: Struct,
        decode: Callable[[bytes], T],
    ) -> list[T]:
        if not path.exists():
            return []
        try:
            data = path.read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

        leftover = len(data) % layout.size
        if leftover:
            self._logger.warning(
                "partial_record_ignored",
                path=str(path),
                trailing_bytes=leftover,
            )
        return [decode(record) for record in codec.iter_records(data, layout)]

    def _write_records(
        self,
        path: Path,
        items: Iterable[T],
        encode: Callable[[T], bytes],
        append: bool = False,
    ) -> None:
        # Encode everything first so an overflow never leaves a half-written file
        payload = b"".join(encode(item) for item in items)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "ab" if append else "wb") as f:
                f.write(payload)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    # -------------------------------------------------------------------------
    # Entity sets
    # -------------------------------------------------------------------------

    def load_accounts(self) -> list[Account]:
        return self._read_records(
            self._settings.account_path, codec.ACCOUNT_LAYOUT, codec.decode_account
        )

    def save_accounts(self, accounts: Iterable[Account]) -> None:
        self._write_records(self._settings.account_path, accounts, codec.encode_account)

    def load_books(self) -> list[Book]:
        return self._read_records(
            self._settings.book_path, codec.BOOK_LAYOUT, codec.decode_book
        )

    def save_books(self, books: Iterable[Book]) -> None:
        self._write_records(self._settings.book_path, books, codec.encode_book)

    def load_transactions(self) -> list[Transaction]:
        return self._read_records(
            self._settings.transaction_path,
            codec.TRANSACTION_LAYOUT,
            codec.decode_transaction,
        )

    def save_transactions(self, transactions: Iterable[Transaction]) -> None:
        self._write_records(
            self._settings.transaction_path, transactions, codec.encode_transaction
        )

    # -------------------------------------------------------------------------
    # Operation log
    # -------------------------------------------------------------------------

    def append_operation(self, record: OperationRecord) -> None:
        self._write_records(
            self._settings.log_path, [record], codec.encode_operation, append=True
        )

    def load_operations(self) -> list[OperationRecord]:
        return self._read_records(
            self._settings.log_path, codec.OPERATION_LAYOUT, codec.decode_operation
        )


class InMemoryRecordStore(RecordStoreInterface, OperationLogInterface):
    """Storage backed by plain lists, for tests and dry runs."""

    def __init__(self):
        self.accounts: list[Account] = []
        self.books: list[Book] = []
        self.transactions: list[Transaction] = []
        self.operations: list[OperationRecord] = []
        self.save_counts: dict[str, int] = {"accounts": 0, "books": 0, "transactions": 0}

    def load_accounts(self) -> list[Account]:
        return list(self.accounts)

    def save_accounts(self, accounts: Iterable[Account]) -> None:
        self.accounts = list(accounts)
        self.save_counts["accounts"] += 1

    def load_books(self) -> list[Book]:
        return list(self.books)

    def save_books(self, books: Iterable[Book]) -> None:
        self.books = list(books)
        self.save_counts["books"] += 1

    def load_transactions(self) -> list[Transaction]:
        return list(self.transactions)

    def save_transactions(self, transactions: Iterable[Transaction]) -> None:
        self.transactions = list(transactions)
        self.save_counts["transactions"] += 1

    def append_operation(self, record: OperationRecord) -> None:
        self.operations.append(record)

    def load_operations(self) -> list[OperationRecord]:
        return list(self.operations)
