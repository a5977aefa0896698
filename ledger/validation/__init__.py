"""Input validation package."""

from ledger.validation.inputs import (
    InvalidInputError,
    parse_date,
    parse_datetime,
    parse_optional_amount,
    parse_optional_date,
    parse_positive_amount,
    parse_search_criteria,
    parse_text_field,
)

__all__ = [
    "InvalidInputError",
    "parse_date",
    "parse_datetime",
    "parse_optional_amount",
    "parse_optional_date",
    "parse_positive_amount",
    "parse_search_criteria",
    "parse_text_field",
]
