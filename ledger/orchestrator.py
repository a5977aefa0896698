"""
Main Orchestrator for the Ledger

This module ties together all the components and defines the
end-to-end flows for:
1. Recording (typed input -> validated values -> Transaction -> Store)
2. Reporting (menu choice -> QueryExecutor -> QueryResult)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches the Store without passing input validation
- Deposits are stored positive, payments negative
- Every step is audited, and every error still reaches the caller
"""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union
from uuid import UUID

from ledger.audit import AuditLogger, create_correlation_id
from ledger.config import LedgerSettings, get_settings
from ledger.models.audit import AuditEventBuilder
from ledger.models.transaction import Transaction
from ledger.queries import QueryExecutor
from ledger.store import TransactionStore
from ledger.validation import (
    InvalidInputError,
    parse_datetime,
    parse_positive_amount,
    parse_text_field,
)


class LedgerFlow:
    """
    Orchestrates recording deposits and payments.

    Flow:
    1. Parse the date/time line, description, vendor and amount
    2. Apply the sign (deposit +, payment -)
    3. Append to the Store (memory, then disk)
    """

    def __init__(
        self,
        store: TransactionStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger

    @property
    def store(self) -> TransactionStore:
        return self._store

    def add_deposit(
        self,
        when: datetime,
        description: str,
        vendor: str,
        amount: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """Record money in. The amount must already be positive."""
        return self._store.record(
            date=when.date(),
            time=when.time().replace(microsecond=0),
            description=description,
            vendor=vendor,
            amount=amount,
            correlation_id=correlation_id,
        )

    def add_payment(
        self,
        when: datetime,
        description: str,
        vendor: str,
        amount: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """Record money out. Takes a positive amount and stores it negated."""
        return self._store.record(
            date=when.date(),
            time=when.time().replace(microsecond=0),
            description=description,
            vendor=vendor,
            amount=-amount,
            correlation_id=correlation_id,
        )

    def record_from_input(
        self,
        raw_datetime: str,
        raw_description: str,
        raw_vendor: str,
        raw_amount: str,
        is_payment: bool = False,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Validate typed input and record it.

        Raises:
            InvalidInputError: Any field fails validation; nothing is recorded
            IOFailureError: The durable write failed (record kept in memory)
        """
        correlation_id = correlation_id or create_correlation_id()
        try:
            when = parse_datetime(raw_datetime)
            description = parse_text_field(raw_description, "description")
            vendor = parse_text_field(raw_vendor, "vendor")
            amount = parse_positive_amount(raw_amount)
        except InvalidInputError as e:
            self.log_invalid_input(e)
            raise

        record = self.add_payment if is_payment else self.add_deposit
        return record(when, description, vendor, amount, correlation_id=correlation_id)

    def log_invalid_input(self, error: InvalidInputError) -> None:
        if self._audit_logger:
            self._audit_logger.log(
                AuditEventBuilder.invalid_input(
                    field=error.field,
                    raw_value=error.raw_value,
                    error_message=str(error),
                )
            )


def create_app_components(
    data_file: Optional[Union[str, Path]] = None,
    settings: Optional[LedgerSettings] = None,
) -> tuple[LedgerFlow, QueryExecutor]:
    """
    Factory function to create all application components.

    Args:
        data_file: Overrides the configured data file.
        settings: Settings to use instead of the cached environment settings.

    Returns:
        (ledger_flow, query_executor)

    Raises:
        MalformedRecordError: The data file holds a line that does not parse
        IOFailureError: The data file cannot be created or read
    """
    settings = settings or get_settings()
    audit_logger = AuditLogger()

    store = TransactionStore.load(
        data_file if data_file is not None else settings.data_file,
        audit_logger=audit_logger,
    )

    ledger_flow = LedgerFlow(store, audit_logger=audit_logger)
    query_executor = QueryExecutor(
        store,
        settings=settings,
        audit_logger=audit_logger,
    )

    return ledger_flow, query_executor
