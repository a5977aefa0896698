"""
Input Parsing Primitives

Turns raw typed text into the values the ledger works with.

IMPORTANT: Parsing NEVER silently fixes input. Two outcomes are kept apart:
- blank input for an optional field means "no constraint" (None)
- present but invalid input is an error (InvalidInputError)

The prompt layer decides what to do with an error; these helpers only
report it.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from ledger.models.transaction import SearchCriteria, quantize_amount


DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_HINT = "yyyy-MM-dd"
DATETIME_HINT = "yyyy-MM-dd HH:mm:ss"

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
DATETIME_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")

# Characters the line format cannot represent
FORBIDDEN_TEXT = ("|", "\n", "\r")


class InvalidInputError(ValueError):
    """User-supplied text is present but cannot be used."""

    def __init__(self, field: str, raw_value: str, message: str):
        self.field = field
        self.raw_value = raw_value
        super().__init__(message)


def parse_date(raw: str, field: str = "date") -> date:
    value = raw.strip()
    if not DATE_PATTERN.fullmatch(value):
        raise InvalidInputError(field, raw, f"Invalid date: {raw!r} (expected {DATE_HINT})")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidInputError(field, raw, f"Invalid date: {raw!r}") from e


def parse_optional_date(raw: str, field: str = "date") -> Optional[date]:
    if not raw.strip():
        return None
    return parse_date(raw, field)


def parse_datetime(raw: str, field: str = "date_time") -> datetime:
    """Parse the single 'yyyy-MM-dd HH:mm:ss' line used when recording."""
    value = raw.strip()
    if not DATETIME_PATTERN.fullmatch(value):
        raise InvalidInputError(
            field, raw, f"Invalid date/time: {raw!r} (expected {DATETIME_HINT})"
        )
    try:
        return datetime.strptime(value, DATETIME_FORMAT)
    except ValueError as e:
        raise InvalidInputError(field, raw, f"Invalid date/time: {raw!r}") from e


def _parse_decimal(raw: str, field: str) -> Decimal:
    value = raw.strip()
    try:
        amount = Decimal(value)
    except InvalidOperation as e:
        raise InvalidInputError(field, raw, f"Invalid number: {raw!r}") from e
    if not amount.is_finite():
        raise InvalidInputError(field, raw, f"Invalid number: {raw!r}")
    return amount


def parse_positive_amount(raw: str, field: str = "amount") -> Decimal:
    """
    Amount typed when recording a deposit or payment.

    Always positive; the payment flow negates it before storing. Checked
    at the stored two-decimal precision, so 0.004 (stored as 0.00) is
    rejected.
    """
    if not raw.strip():
        raise InvalidInputError(field, raw, "Amount must be a positive number.")
    amount = _parse_decimal(raw, field)
    if quantize_amount(amount) <= 0:
        raise InvalidInputError(field, raw, "Amount must be a positive number.")
    return amount


def parse_optional_amount(raw: str, field: str = "amount") -> Optional[Decimal]:
    if not raw.strip():
        return None
    return _parse_decimal(raw, field)


def parse_text_field(raw: str, field: str) -> str:
    """
    Free text for a description or vendor.

    May be empty. Rejects characters the data file cannot hold.
    """
    for forbidden in FORBIDDEN_TEXT:
        if forbidden in raw:
            shown = "|" if forbidden == "|" else "line breaks"
            raise InvalidInputError(field, raw, f"{field.capitalize()} cannot contain {shown}")
    return raw


def parse_optional_text(raw: str, field: str) -> Optional[str]:
    value = raw.strip()
    if not value:
        return None
    return parse_text_field(value, field)


def parse_search_criteria(
    start_date: str = "",
    end_date: str = "",
    description: str = "",
    vendor: str = "",
    amount: str = "",
) -> SearchCriteria:
    """Build custom-search criteria from raw prompts; blank means any."""
    return SearchCriteria(
        start_date=parse_optional_date(start_date, "start_date"),
        end_date=parse_optional_date(end_date, "end_date"),
        description=parse_optional_text(description, "description"),
        vendor=parse_optional_text(vendor, "vendor"),
        amount=parse_optional_amount(amount, "amount"),
    )
