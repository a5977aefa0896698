"""
Pure filtering and sorting over a sequence of transactions.

None of these functions touch the Store. Each takes a sequence and
returns a new list, so the Store's insertion order is never disturbed.

Display order for every listing and report is newest first: date
descending, then time descending. Records with the same date and time
keep their relative insertion order (sorted() is stable).
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ledger.models.transaction import SearchCriteria, Transaction, quantize_amount


def sorted_newest_first(transactions: Sequence[Transaction]) -> list[Transaction]:
    return sorted(
        transactions,
        key=lambda t: (t.date, t.time),
        reverse=True,
    )


def all_transactions(transactions: Sequence[Transaction]) -> list[Transaction]:
    return sorted_newest_first(transactions)


def deposits_only(transactions: Sequence[Transaction]) -> list[Transaction]:
    """Positive amounts only. Zero is neither a deposit nor a payment."""
    return [t for t in sorted_newest_first(transactions) if t.is_deposit]


def payments_only(transactions: Sequence[Transaction]) -> list[Transaction]:
    return [t for t in sorted_newest_first(transactions) if t.is_payment]


def by_date_range(
    transactions: Sequence[Transaction],
    start: date,
    end: date,
) -> list[Transaction]:
    """
    Transactions dated within [start, end], both ends included.

    An inverted range (start after end) matches nothing.
    """
    return [
        t for t in sorted_newest_first(transactions)
        if start <= t.date <= end
    ]


def text_matches(value: str, wanted: str) -> bool:
    """Whole-value comparison ignoring case ('Starbucks' == 'STARBUCKS')."""
    return value.casefold() == wanted.casefold()


def by_vendor(transactions: Sequence[Transaction], name: str) -> list[Transaction]:
    """Exact vendor match ignoring case. Not a substring search."""
    return [
        t for t in sorted_newest_first(transactions)
        if text_matches(t.vendor, name)
    ]


def by_description(transactions: Sequence[Transaction], text: str) -> list[Transaction]:
    return [
        t for t in sorted_newest_first(transactions)
        if text_matches(t.description, text)
    ]


def amounts_equal(left: Decimal, right: Decimal) -> bool:
    """Compare amounts at the stored two-decimal precision."""
    return quantize_amount(left) == quantize_amount(right)


def matches_criteria(transaction: Transaction, criteria: SearchCriteria) -> bool:
    if criteria.start_date is not None and transaction.date < criteria.start_date:
        return False
    if criteria.end_date is not None and transaction.date > criteria.end_date:
        return False
    if criteria.description is not None and not text_matches(
        transaction.description, criteria.description
    ):
        return False
    if criteria.vendor is not None and not text_matches(
        transaction.vendor, criteria.vendor
    ):
        return False
    if criteria.amount is not None and not amounts_equal(
        transaction.amount, criteria.amount
    ):
        return False
    return True


def custom_search(
    transactions: Sequence[Transaction],
    criteria: Optional[SearchCriteria] = None,
) -> list[Transaction]:
    """
    Conjunctive search over every supplied criterion.

    Unlike the other reports, results stay in insertion order.
    With no criteria every transaction matches.
    """
    criteria = criteria or SearchCriteria()
    return [t for t in transactions if matches_criteria(t, criteria)]
