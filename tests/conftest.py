"""Shared fixtures for the ledger tests."""

from datetime import date, time
from decimal import Decimal

import pytest

from ledger.config import LedgerSettings
from ledger.models.transaction import Transaction
from ledger.services.storage import InMemoryTransactionStorage
from ledger.store import TransactionStore


def make_transaction(
    day: str = "2025-05-10",
    at: str = "14:35:22",
    description: str = "Coffee",
    vendor: str = "Starbucks",
    amount: str = "-4.25",
) -> Transaction:
    return Transaction(
        date=date.fromisoformat(day),
        time=time.fromisoformat(at),
        description=description,
        vendor=vendor,
        amount=Decimal(amount),
    )


@pytest.fixture
def make_txn():
    """Factory fixture for transactions given as plain strings."""
    return make_transaction


@pytest.fixture
def settings(tmp_path):
    return LedgerSettings(
        _env_file=None,
        data_file=tmp_path / "transactions.csv",
    )


@pytest.fixture
def memory_store():
    return TransactionStore.load(InMemoryTransactionStorage())


@pytest.fixture
def sample_transactions():
    """A small ledger in insertion order."""
    return [
        make_transaction("2025-05-10", "14:35:22", "Coffee", "Starbucks", "-4.25"),
        make_transaction("2025-05-11", "09:00:00", "Salary", "Employer", "2500.00"),
        make_transaction("2025-04-30", "18:15:00", "Groceries", "Whole Foods", "-82.10"),
        make_transaction("2025-05-11", "07:30:00", "Latte", "STARBUCKS", "-5.10"),
        make_transaction("2025-03-01", "12:00:00", "Adjustment", "Bank", "0.00"),
        make_transaction("2025-05-02", "08:00:00", "Espresso", "Starbucks Reserve", "-6.00"),
    ]


@pytest.fixture
def sample_store(sample_transactions):
    storage = InMemoryTransactionStorage()
    store = TransactionStore.load(storage)
    for transaction in sample_transactions:
        store.append(transaction)
    return store
