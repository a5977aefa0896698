"""
Transaction Store

The Store owns the in-memory ordered collection of transactions.
It is built once at startup from durable storage and grows by append.

GUARANTEES:
- Insertion order is preserved; nothing here ever reorders records
- Callers only ever get an immutable snapshot (a tuple)
- A failed load produces no store at all, never a partial one

KNOWN LIMITATION: append writes memory first and disk second. If the
disk write fails, the record stays in memory and the error is raised,
so memory is ahead of the file until the process exits.

The Store is not thread-safe. Library callers sharing one Store across
threads must guard it with a single lock of their own.
"""

from datetime import date, time
from decimal import Decimal
from pathlib import Path
from typing import Iterator, Optional, Union
from uuid import UUID

from ledger.audit import AuditLogger
from ledger.models.audit import AuditEventBuilder
from ledger.models.transaction import Transaction
from ledger.services.storage import (
    IOFailureError,
    PipeFileStorage,
    StorageError,
    TransactionStorageInterface,
)
from ledger.services.storage.codec import serialize_transaction


class TransactionStore:
    """
    In-memory ledger backed by durable storage.

    Build it with TransactionStore.load() so existing records are read
    before anything is appended.
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        transactions: Optional[list[Transaction]] = None,
        audit_logger: Optional[AuditLogger] = None,
        created: bool = False,
    ):
        self._storage = storage
        self._transactions: list[Transaction] = list(transactions or [])
        self._audit_logger = audit_logger
        self.created = created

    @classmethod
    def load(
        cls,
        source: Union[str, Path, TransactionStorageInterface],
        audit_logger: Optional[AuditLogger] = None,
    ) -> "TransactionStore":
        """
        Load every persisted record into a new Store.

        A missing file is created empty and yields an empty Store.

        Raises:
            MalformedRecordError: First line that does not parse; nothing is loaded
            IOFailureError: The file cannot be created or read
        """
        if isinstance(source, TransactionStorageInterface):
            storage = source
        else:
            storage = PipeFileStorage(source)

        try:
            created = storage.ensure_exists()
            transactions = storage.read_all()
        except StorageError as e:
            if audit_logger:
                audit_logger.log(
                    AuditEventBuilder.load_failed(storage.location, str(e))
                )
            raise

        if audit_logger:
            if created:
                audit_logger.log(AuditEventBuilder.store_created(storage.location))
            audit_logger.log(
                AuditEventBuilder.store_loaded(storage.location, len(transactions))
            )

        return cls(
            storage,
            transactions=transactions,
            audit_logger=audit_logger,
            created=created,
        )

    # Public API -----------------------------------------------------------

    @property
    def storage(self) -> TransactionStorageInterface:
        return self._storage

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Snapshot of all records in insertion order."""
        return tuple(self._transactions)

    def read_all(self) -> tuple[Transaction, ...]:
        return self.transactions

    def append(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Add a transaction at the tail, in memory and then on disk.

        Raises:
            IOFailureError: The durable write failed; the record stays in memory
        """
        self._transactions.append(transaction)

        try:
            line = self._storage.append(transaction)
        except IOFailureError as e:
            if self._audit_logger:
                self._audit_logger.log(
                    AuditEventBuilder.append_failed(
                        line=serialize_transaction(transaction),
                        location=self._storage.location,
                        error_message=str(e),
                        correlation_id=correlation_id,
                    )
                )
            raise

        if self._audit_logger:
            self._audit_logger.log(
                AuditEventBuilder.transaction_appended(
                    line=line,
                    location=self._storage.location,
                    correlation_id=correlation_id,
                )
            )
        return transaction

    def record(
        self,
        date: date,
        time: time,
        description: str,
        vendor: str,
        amount: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """Build a Transaction from its five fields and append it."""
        transaction = Transaction(
            date=date,
            time=time,
            description=description,
            vendor=vendor,
            amount=amount,
        )
        return self.append(transaction, correlation_id=correlation_id)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.transactions)
