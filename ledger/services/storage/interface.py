"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for durable storage.
This allows us to:
1. Keep the pipe-delimited file as the production backend
2. Use in-memory storage for testing
3. Keep the Store and the query code decoupled from file handling

The interface is intentionally tiny. The ledger is an append-only log:
there is no update, no delete, and no keyed lookup.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ledger.models.transaction import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction storage.

    Any backend must keep records in append order and must fail
    loudly: read errors and write errors are raised, never dropped.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where records live."""
        pass

    @abstractmethod
    def ensure_exists(self) -> bool:
        """
        Create the backing store empty if it does not exist yet.

        Safe to call when it already exists.

        Returns:
            True if the store was created by this call

        Raises:
            IOFailureError: If the store cannot be created
        """
        pass

    @abstractmethod
    def read_all(self) -> list[Transaction]:
        """
        Read every record in storage order (oldest first).

        Returns:
            All stored transactions

        Raises:
            MalformedRecordError: On the first record that does not parse
            IOFailureError: If the store cannot be read
        """
        pass

    @abstractmethod
    def append(self, transaction: Transaction) -> str:
        """
        Append one record at the end of the store.

        Args:
            transaction: The transaction to persist

        Returns:
            The serialized line that was written

        Raises:
            IOFailureError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class MalformedRecordError(StorageError):
    """A persisted line does not parse into a transaction."""

    def __init__(
        self,
        reason: str,
        line: str,
        line_number: Optional[int] = None,
    ):
        self.reason = reason
        self.line = line
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "record"
        super().__init__(f"Malformed {where}: {reason} ({line!r})")


class IOFailureError(StorageError):
    """The backing store could not be created, read, or appended to."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)
