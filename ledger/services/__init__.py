"""Services package."""

from ledger.services.storage import (
    InMemoryTransactionStorage,
    IOFailureError,
    MalformedRecordError,
    PipeFileStorage,
    StorageError,
    TransactionStorageInterface,
)

__all__ = [
    "InMemoryTransactionStorage",
    "IOFailureError",
    "MalformedRecordError",
    "PipeFileStorage",
    "StorageError",
    "TransactionStorageInterface",
]
