"""
Core Data Models for the Ledger

These models define the schemas for everything flowing through the ledger:
1. Transaction - one immutable monetary event (deposit or payment)
2. SearchCriteria - the optional, conjunctive filters of a custom search
3. QueryResult - what a report or listing hands back to the front end

DESIGN DECISION: Transactions are frozen pydantic models.
Construction only coerces types; validating user input is the job of
ledger.validation, which runs before a Transaction is ever built.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


TWO_PLACES = Decimal("0.01")


def quantize_amount(amount: Decimal) -> Decimal:
    """Round an amount to the two-decimal fixed point used on disk."""
    return Decimal(amount).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


# =============================================================================
# TRANSACTION
# =============================================================================

class Transaction(BaseModel):
    """
    One financial record.

    Sign convention:
    - positive amount = deposit (money in)
    - negative amount = payment (money out)
    - zero is storable but is neither a deposit nor a payment

    There is no identity field. Two transactions with the same content
    are still two records; the ledger never merges or deduplicates.
    """
    model_config = ConfigDict(frozen=True)

    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    time: dt.time = Field(
        ...,
        description="Time of day, second precision"
    )
    description: str = Field(
        ...,
        description="Free-text description (may be empty)"
    )
    vendor: str = Field(
        ...,
        description="Where the money came from or went to (may be empty)"
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount: positive for deposits, negative for payments"
    )

    @property
    def is_deposit(self) -> bool:
        return self.amount > 0

    @property
    def is_payment(self) -> bool:
        return self.amount < 0

    @property
    def occurred_at(self) -> dt.datetime:
        """Date and time combined (naive, no time zone)."""
        return dt.datetime.combine(self.date, self.time)

    @property
    def rounded_amount(self) -> Decimal:
        return quantize_amount(self.amount)


# =============================================================================
# QUERY MODELS
# =============================================================================

class SearchCriteria(BaseModel):
    """
    Criteria for a custom search.

    Every field is optional. None means "no constraint".
    A transaction matches only if it satisfies every supplied field.
    """
    model_config = ConfigDict(frozen=True)

    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    description: Optional[str] = None
    vendor: Optional[str] = None
    amount: Optional[Decimal] = None

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.start_date,
                self.end_date,
                self.description,
                self.vendor,
                self.amount,
            )
        )


class QueryResult(BaseModel):
    """
    Result of running a listing or report.

    The three outcomes the front end has to tell apart:
    - success and data_found: print the rows
    - success and not data_found: the query ran and matched nothing
    - not success: the query did not run (see error_message)
    """

    query_id: UUID = Field(
        default_factory=uuid4
    )
    executed_at: dt.datetime = Field(
        default_factory=dt.datetime.now
    )
    query_type: str = Field(
        ...,
        description="Which listing or report produced this result"
    )

    # Success/failure
    success: bool
    error_message: Optional[str] = None

    # Results
    data_found: bool = Field(
        ...,
        description="Did the query match anything?"
    )
    result_count: int = Field(
        ge=0,
        description="Number of matching transactions"
    )
    transactions: tuple[Transaction, ...] = Field(
        default_factory=tuple,
        description="Matching transactions in display order"
    )

    query_description: str = Field(
        ...,
        description="Human-readable description of what was queried"
    )

    @property
    def total(self) -> Decimal:
        """Sum of the matched amounts, two decimals."""
        return quantize_amount(
            sum((t.amount for t in self.transactions), start=Decimal("0"))
        )
