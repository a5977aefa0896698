"""
Storage Services Package

Provides the abstract storage interface, the line codec, and the concrete
backends. The pipe-delimited file is the production backend.
"""

from ledger.services.storage.interface import (
    IOFailureError,
    MalformedRecordError,
    StorageError,
    TransactionStorageInterface,
)
from ledger.services.storage.codec import (
    parse_transaction,
    serialize_transaction,
)
from ledger.services.storage.file_storage import PipeFileStorage
from ledger.services.storage.memory import InMemoryTransactionStorage

__all__ = [
    # Interfaces
    "TransactionStorageInterface",
    # Exceptions
    "IOFailureError",
    "MalformedRecordError",
    "StorageError",
    # Codec
    "parse_transaction",
    "serialize_transaction",
    # Implementations
    "InMemoryTransactionStorage",
    "PipeFileStorage",
]
