"""Tests for the input parsing primitives."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from ledger.validation import (
    InvalidInputError,
    parse_date,
    parse_datetime,
    parse_optional_amount,
    parse_optional_date,
    parse_positive_amount,
    parse_search_criteria,
    parse_text_field,
)


class TestDates:
    """Tests for date and date/time parsing."""

    def test_parse_date(self):
        """Test yyyy-MM-dd parses, surrounding spaces ignored."""
        assert parse_date(" 2025-05-10 ") == date(2025, 5, 10)

    @pytest.mark.parametrize("raw", ["2025-5-10", "10/05/2025", "2025-13-01", "yesterday"])
    def test_parse_date_rejects_invalid(self, raw):
        """Test malformed or impossible dates are errors."""
        with pytest.raises(InvalidInputError):
            parse_date(raw)

    def test_blank_optional_date_is_none(self):
        """Test blank means no constraint."""
        assert parse_optional_date("") is None
        assert parse_optional_date("   ") is None

    def test_invalid_optional_date_is_error(self):
        """Test present-but-invalid is not treated as blank."""
        with pytest.raises(InvalidInputError) as exc_info:
            parse_optional_date("2025-02-30", "start_date")
        assert exc_info.value.field == "start_date"
        assert exc_info.value.raw_value == "2025-02-30"

    def test_parse_datetime(self):
        """Test the single date & time line."""
        assert parse_datetime("2025-05-10 14:35:22") == datetime(2025, 5, 10, 14, 35, 22)

    @pytest.mark.parametrize("raw", ["2025-05-10", "2025-05-10T14:35:22", "2025-05-10 14:35", ""])
    def test_parse_datetime_rejects_invalid(self, raw):
        """Test anything but yyyy-MM-dd HH:mm:ss is rejected."""
        with pytest.raises(InvalidInputError):
            parse_datetime(raw)


class TestAmounts:
    """Tests for amount parsing."""

    def test_positive_amount(self):
        """Test a positive number parses to Decimal."""
        assert parse_positive_amount("4.25") == Decimal("4.25")

    @pytest.mark.parametrize("raw", ["0", "-4.25", "", "abc", "NaN", "0.004", "0.00"])
    def test_positive_amount_rejects(self, raw):
        """Test zero (after rounding to cents), negatives, blanks and junk are rejected."""
        with pytest.raises(InvalidInputError, match="Amount must be a positive number|Invalid number"):
            parse_positive_amount(raw)

    def test_optional_amount_blank_is_none(self):
        """Test blank amount means any amount."""
        assert parse_optional_amount(" ") is None

    def test_optional_amount_accepts_negative(self):
        """Test search amounts keep their sign."""
        assert parse_optional_amount("-4.25") == Decimal("-4.25")

    def test_optional_amount_invalid_is_error(self):
        """Test present-but-invalid amount is an error."""
        with pytest.raises(InvalidInputError):
            parse_optional_amount("four")


class TestText:
    """Tests for free-text fields."""

    def test_text_kept_as_typed(self):
        """Test text is returned unchanged and may be empty."""
        assert parse_text_field("Coffee ", "description") == "Coffee "
        assert parse_text_field("", "vendor") == ""

    @pytest.mark.parametrize("raw", ["Coffee|Tea", "Line\nbreak", "Carriage\rreturn"])
    def test_text_rejects_unstorable_characters(self, raw):
        """Test the delimiter and line breaks are refused."""
        with pytest.raises(InvalidInputError):
            parse_text_field(raw, "description")


class TestSearchCriteria:
    """Tests for parse_search_criteria."""

    def test_all_blank_is_empty(self):
        """Test blank prompts produce empty criteria."""
        assert parse_search_criteria().is_empty is True

    def test_fields_parsed(self):
        """Test every prompt is parsed into its field."""
        criteria = parse_search_criteria(
            start_date="2025-05-01",
            end_date="2025-05-31",
            description=" Coffee ",
            vendor="starbucks",
            amount="-4.25",
        )
        assert criteria.start_date == date(2025, 5, 1)
        assert criteria.end_date == date(2025, 5, 31)
        assert criteria.description == "Coffee"
        assert criteria.vendor == "starbucks"
        assert criteria.amount == Decimal("-4.25")

    def test_invalid_field_is_error(self):
        """Test one bad prompt fails the whole search."""
        with pytest.raises(InvalidInputError):
            parse_search_criteria(end_date="31/05/2025")
