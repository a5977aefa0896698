"""
In-Memory Storage Implementation

Keeps serialized lines in a list instead of a file. Records go through
the same codec as the file backend, so malformed lines fail the same way.
"""

from typing import Iterable, Optional

from ledger.models.transaction import Transaction
from ledger.services.storage.codec import parse_transaction, serialize_transaction
from ledger.services.storage.interface import TransactionStorageInterface


class InMemoryTransactionStorage(TransactionStorageInterface):
    """Line storage held in a Python list."""

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self._lines: Optional[list[str]] = list(lines) if lines is not None else None

    @property
    def location(self) -> str:
        return "<memory>"

    @property
    def lines(self) -> list[str]:
        return list(self._lines or [])

    def ensure_exists(self) -> bool:
        if self._lines is not None:
            return False
        self._lines = []
        return True

    def read_all(self) -> list[Transaction]:
        return [
            parse_transaction(line, line_number=line_number)
            for line_number, line in enumerate(self._lines or [], start=1)
        ]

    def append(self, transaction: Transaction) -> str:
        line = serialize_transaction(transaction)
        if self._lines is None:
            self._lines = []
        self._lines.append(line)
        return line
