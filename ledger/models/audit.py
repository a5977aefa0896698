"""
Audit Models for the Ledger

Every significant action on the ledger is logged:
- loading the data file (and creating it when absent)
- appending a transaction, and a failed durable write
- running a listing or report
- rejecting malformed input

DESIGN DECISION: Audit events are log records only. They are never
written into the transaction file, which holds nothing but records.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Persistence
    STORE_LOADED = "store_loaded"
    STORE_CREATED = "store_created"
    LOAD_FAILED = "load_failed"
    TRANSACTION_APPENDED = "transaction_appended"
    APPEND_FAILED = "append_failed"

    # Query operations
    QUERY_EXECUTED = "query_executed"
    QUERY_FAILED = "query_failed"

    # Input
    INVALID_INPUT = "invalid_input"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one menu action)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_appended(line="...", location="...")
        audit_logger.log(event)
    """

    @staticmethod
    def store_loaded(location: str, record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            description=f"Loaded {record_count} transactions from {location}",
            details={"location": location, "record_count": record_count},
        )

    @staticmethod
    def store_created(location: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_CREATED,
            description=f"Created new data file: {location}",
            details={"location": location},
        )

    @staticmethod
    def load_failed(location: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Could not load transactions from {location}",
            details={"location": location},
            error_message=error_message,
        )

    @staticmethod
    def transaction_appended(
        line: str,
        location: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_APPENDED,
            correlation_id=correlation_id,
            description="Transaction appended",
            details={"line": line, "location": location},
        )

    @staticmethod
    def append_failed(
        line: str,
        location: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        """
        The record is in memory but not on disk.

        Logged as an error because memory is now ahead of the file
        for the rest of the process.
        """
        return AuditEvent(
            event_type=AuditEventType.APPEND_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description="Transaction kept in memory but not written to disk",
            details={"line": line, "location": location},
            error_message=error_message,
        )

    @staticmethod
    def query_executed(
        query_id: UUID,
        query_type: str,
        result_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUERY_EXECUTED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Executed {query_type} query",
            details={
                "query_id": str(query_id),
                "query_type": query_type,
                "result_count": result_count,
            },
        )

    @staticmethod
    def query_failed(
        query_id: UUID,
        query_type: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUERY_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"{query_type} query did not run",
            details={"query_id": str(query_id), "query_type": query_type},
            error_message=error_message,
        )

    @staticmethod
    def invalid_input(field: str, raw_value: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVALID_INPUT,
            severity=AuditSeverity.WARNING,
            description=f"Rejected input for {field}",
            details={"field": field, "raw_value": raw_value},
            error_message=error_message,
        )
