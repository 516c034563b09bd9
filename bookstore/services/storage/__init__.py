"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements fixed-width record files as the backend, plus an
in-memory store used by tests.
"""

from bookstore.services.storage.interface import (
    CorruptRecordError,
    FieldOverflowError,
    OperationLogInterface,
    RecordStoreInterface,
    StorageError,
)
from bookstore.services.storage.record_files import (
    FileRecordStore,
    InMemoryRecordStore,
)

__all__ = [
    # Interfaces
    "OperationLogInterface",
    "RecordStoreInterface",
    # Exceptions
    "CorruptRecordError",
    "FieldOverflowError",
    "StorageError",
    # Implementations
    "FileRecordStore",
    "InMemoryRecordStore",
]
