"""
Line codec for the transaction file.

One record per line, five fields separated by '|':

    DATE|TIME|DESCRIPTION|VENDOR|AMOUNT
    2025-05-10|14:35:22|Coffee|Starbucks|-4.25

DATE is yyyy-MM-dd, TIME is HH:mm:ss (24-hour), AMOUNT has exactly two
fraction digits. There is no escaping: description and vendor must not
contain '|' or line breaks.
"""

import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from ledger.models.transaction import Transaction, quantize_amount
from ledger.services.storage.interface import MalformedRecordError


FIELD_DELIMITER = "|"
FIELD_COUNT = 5

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"

# strptime alone accepts unpadded values like 2025-5-1
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
TIME_PATTERN = re.compile(r"\d{2}:\d{2}:\d{2}")
AMOUNT_PATTERN = re.compile(r"-?\d+\.\d{2}")


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_time(value: time) -> str:
    return value.strftime(TIME_FORMAT)


def format_amount(amount: Decimal) -> str:
    return f"{quantize_amount(amount):.2f}"


def serialize_transaction(transaction: Transaction) -> str:
    """Render a transaction as one line, without the line terminator."""
    return FIELD_DELIMITER.join([
        format_date(transaction.date),
        format_time(transaction.time),
        transaction.description,
        transaction.vendor,
        format_amount(transaction.amount),
    ])


def parse_transaction(line: str, line_number: Optional[int] = None) -> Transaction:
    """
    Parse one stored line back into a Transaction.

    Only the line terminator is stripped; whitespace inside the fields
    is part of the record.

    Raises:
        MalformedRecordError: If the line does not hold five valid fields
    """
    record = line.rstrip("\r\n")
    fields = record.split(FIELD_DELIMITER)

    if len(fields) != FIELD_COUNT:
        raise MalformedRecordError(
            f"expected {FIELD_COUNT} fields, found {len(fields)}",
            record,
            line_number,
        )

    raw_date, raw_time, description, vendor, raw_amount = fields

    return Transaction(
        date=_parse_date_field(raw_date, record, line_number),
        time=_parse_time_field(raw_time, record, line_number),
        description=description,
        vendor=vendor,
        amount=_parse_amount_field(raw_amount, record, line_number),
    )


def _parse_date_field(raw: str, record: str, line_number: Optional[int]) -> date:
    if not DATE_PATTERN.fullmatch(raw):
        raise MalformedRecordError(f"invalid date {raw!r}", record, line_number)
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError as e:
        raise MalformedRecordError(f"invalid date {raw!r}", record, line_number) from e


def _parse_time_field(raw: str, record: str, line_number: Optional[int]) -> time:
    if not TIME_PATTERN.fullmatch(raw):
        raise MalformedRecordError(f"invalid time {raw!r}", record, line_number)
    try:
        return datetime.strptime(raw, TIME_FORMAT).time()
    except ValueError as e:
        raise MalformedRecordError(f"invalid time {raw!r}", record, line_number) from e


def _parse_amount_field(raw: str, record: str, line_number: Optional[int]) -> Decimal:
    if not AMOUNT_PATTERN.fullmatch(raw):
        raise MalformedRecordError(f"invalid amount {raw!r}", record, line_number)
    return Decimal(raw)
