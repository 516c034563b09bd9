"""Services package."""

from bookstore.services.storage import (
    CorruptRecordError,
    FieldOverflowError,
    FileRecordStore,
    InMemoryRecordStore,
    OperationLogInterface,
    RecordStoreInterface,
    StorageError,
)

__all__ = [
    "CorruptRecordError",
    "FieldOverflowError",
    "FileRecordStore",
    "InMemoryRecordStore",
    "OperationLogInterface",
    "RecordStoreInterface",
    "StorageError",
]
