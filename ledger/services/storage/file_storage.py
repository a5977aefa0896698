"""
Pipe-Delimited File Storage Implementation

DESIGN DECISION: A plain UTF-8 text file is the storage backend because:
1. Users can read and back up their ledger with any text editor
2. No database setup required
3. Appending one line is the only write the ledger ever makes

TRADEOFFS:
- No escaping: '|' inside a description or vendor corrupts the record
- No transactions beyond a single-line append
- Not safe for concurrent writers (the ledger is single-process)

Writes open the file in append mode, so a crash mid-write can at most
damage the last line. Earlier records are never rewritten.
"""

from pathlib import Path
from typing import Union

from ledger.models.transaction import Transaction
from ledger.services.storage.codec import parse_transaction, serialize_transaction
from ledger.services.storage.interface import (
    IOFailureError,
    TransactionStorageInterface,
)


ENCODING = "utf-8"


class PipeFileStorage(TransactionStorageInterface):
    """
    File implementation of transaction storage.

    One transaction per line, in append order, no header.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def ensure_exists(self) -> bool:
        if self._path.exists():
            return False
        try:
            self._path.touch(exist_ok=True)
        except OSError as e:
            raise IOFailureError(
                f"Unable to create data file {self._path}: {e}",
                path=str(self._path),
            ) from e
        return True

    def read_all(self) -> list[Transaction]:
        try:
            with self._path.open("r", encoding=ENCODING, newline="") as handle:
                lines = handle.readlines()
        except OSError as e:
            raise IOFailureError(
                f"Unable to read data file {self._path}: {e}",
                path=str(self._path),
            ) from e
        except UnicodeDecodeError as e:
            raise IOFailureError(
                f"Data file {self._path} is not valid UTF-8: {e}",
                path=str(self._path),
            ) from e

        return [
            parse_transaction(line, line_number=line_number)
            for line_number, line in enumerate(lines, start=1)
        ]

    def append(self, transaction: Transaction) -> str:
        line = serialize_transaction(transaction)
        try:
            with self._path.open("a", encoding=ENCODING, newline="\n") as handle:
                handle.write(line + "\n")
        except OSError as e:
            raise IOFailureError(
                f"Unable to write to data file {self._path}: {e}",
                path=str(self._path),
            ) from e
        except UnicodeEncodeError as e:
            # Lone surrogates from undecodable terminal input
            raise IOFailureError(
                f"Record cannot be written as UTF-8 to {self._path}: {e}",
                path=str(self._path),
            ) from e
        return line
