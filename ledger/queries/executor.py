"""
Query Execution Engine

DESIGN DECISION: Query execution is DETERMINISTIC and read-only.
Every listing and report reads a snapshot of the Store and hands the
front end a QueryResult. Nothing here reorders or edits the Store.

A QueryResult always says which of three things happened:
- the query ran and found rows
- the query ran and found nothing ("no matches")
- the query did not run (bad arguments, e.g. an inverted date range)
"""

from datetime import date
from typing import Callable, Optional
from uuid import UUID, uuid4

from ledger.audit import AuditLogger
from ledger.config import LedgerSettings, get_settings
from ledger.models.audit import AuditEventBuilder
from ledger.models.transaction import QueryResult, SearchCriteria, Transaction
from ledger.queries import filters, ranges
from ledger.services.storage.codec import format_amount
from ledger.store import TransactionStore


class QueryExecutionError(Exception):
    """Query arguments that cannot be executed."""
    pass


class QueryExecutor:
    """
    Executes listings and reports against a TransactionStore.

    GUARANTEES:
    - Only returns records that are in the Store
    - Never mutates the Store
    - Clear "no data found" if nothing matches
    """

    def __init__(
        self,
        store: TransactionStore,
        settings: Optional[LedgerSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], date] = date.today,
    ):
        self._store = store
        self._settings = settings or get_settings()
        self._audit_logger = audit_logger
        self._clock = clock

    # Listings ---------------------------------------------------------------

    def list_all(self, correlation_id: Optional[UUID] = None) -> QueryResult:
        return self._run(
            "all",
            "All transactions",
            filters.all_transactions,
            correlation_id,
        )

    def list_deposits(self, correlation_id: Optional[UUID] = None) -> QueryResult:
        return self._run(
            "deposits",
            "Deposits only",
            filters.deposits_only,
            correlation_id,
        )

    def list_payments(self, correlation_id: Optional[UUID] = None) -> QueryResult:
        return self._run(
            "payments",
            "Payments only",
            filters.payments_only,
            correlation_id,
        )

    # Date reports -----------------------------------------------------------

    def report_by_range(
        self,
        start: date,
        end: date,
        correlation_id: Optional[UUID] = None,
        query_type: str = "date_range",
    ) -> QueryResult:
        """Transactions dated from start to end inclusive, newest first."""

        def run(transactions: tuple[Transaction, ...]) -> list[Transaction]:
            if start > end:
                raise QueryExecutionError(
                    f"Start date {start.isoformat()} is after end date {end.isoformat()}"
                )
            return filters.by_date_range(transactions, start, end)

        return self._run(
            query_type,
            f"Transactions {self._date_range_str(start, end)}",
            run,
            correlation_id,
        )

    def report_month_to_date(self, correlation_id: Optional[UUID] = None) -> QueryResult:
        start, end = ranges.month_to_date(self._clock())
        return self.report_by_range(start, end, correlation_id, "month_to_date")

    def report_previous_month(self, correlation_id: Optional[UUID] = None) -> QueryResult:
        start, end = ranges.previous_month(self._clock())
        return self.report_by_range(start, end, correlation_id, "previous_month")

    def report_year_to_date(self, correlation_id: Optional[UUID] = None) -> QueryResult:
        start, end = ranges.year_to_date(self._clock())
        return self.report_by_range(start, end, correlation_id, "year_to_date")

    def report_previous_year(self, correlation_id: Optional[UUID] = None) -> QueryResult:
        start, end = ranges.previous_year(
            self._clock(),
            through_dec31=self._settings.previous_year_through_dec31,
        )
        return self.report_by_range(start, end, correlation_id, "previous_year")

    # Text searches ----------------------------------------------------------

    def report_by_vendor(
        self,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> QueryResult:
        return self._run(
            "vendor",
            f"Transactions for vendor: {name}",
            lambda transactions: filters.by_vendor(transactions, name),
            correlation_id,
        )

    def custom_search(
        self,
        criteria: Optional[SearchCriteria] = None,
        correlation_id: Optional[UUID] = None,
    ) -> QueryResult:
        """Conjunctive search; results keep insertion order."""
        criteria = criteria or SearchCriteria()
        return self._run(
            "custom_search",
            self._criteria_str(criteria),
            lambda transactions: filters.custom_search(transactions, criteria),
            correlation_id,
        )

    # Internal helpers -------------------------------------------------------

    def _run(
        self,
        query_type: str,
        query_description: str,
        query: Callable[[tuple[Transaction, ...]], list[Transaction]],
        correlation_id: Optional[UUID],
    ) -> QueryResult:
        query_id = uuid4()
        try:
            matched = query(self._store.transactions)
        except QueryExecutionError as e:
            if self._audit_logger:
                self._audit_logger.log(
                    AuditEventBuilder.query_failed(
                        query_id=query_id,
                        query_type=query_type,
                        error_message=str(e),
                        correlation_id=correlation_id,
                    )
                )
            return QueryResult(
                query_id=query_id,
                query_type=query_type,
                success=False,
                error_message=str(e),
                data_found=False,
                result_count=0,
                query_description=f"Query failed: {e}",
            )

        if self._audit_logger:
            self._audit_logger.log(
                AuditEventBuilder.query_executed(
                    query_id=query_id,
                    query_type=query_type,
                    result_count=len(matched),
                    correlation_id=correlation_id,
                )
            )

        return QueryResult(
            query_id=query_id,
            query_type=query_type,
            success=True,
            data_found=len(matched) > 0,
            result_count=len(matched),
            transactions=tuple(matched),
            query_description=query_description,
        )

    def _date_range_str(self, start: date, end: date) -> str:
        """Format date range for description."""
        if start == end:
            return f"on {start.strftime('%d %b %Y')}"
        elif start.month == end.month and start.year == end.year:
            return f"from {start.strftime('%d')} to {end.strftime('%d %b %Y')}"
        elif start.year == end.year:
            return f"from {start.strftime('%d %b')} to {end.strftime('%d %b %Y')}"
        return f"from {start.strftime('%d %b %Y')} to {end.strftime('%d %b %Y')}"

    def _criteria_str(self, criteria: SearchCriteria) -> str:
        if criteria.is_empty:
            return "Custom search (no criteria)"
        desc_parts = ["Custom search"]
        if criteria.start_date:
            desc_parts.append(f"from {criteria.start_date.isoformat()}")
        if criteria.end_date:
            desc_parts.append(f"until {criteria.end_date.isoformat()}")
        if criteria.description is not None:
            desc_parts.append(f"description: {criteria.description}")
        if criteria.vendor is not None:
            desc_parts.append(f"vendor: {criteria.vendor}")
        if criteria.amount is not None:
            desc_parts.append(f"amount: {format_amount(criteria.amount)}")
        return " | ".join(desc_parts)
