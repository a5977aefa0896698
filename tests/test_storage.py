"""Tests for the line codec and the storage backends."""

import pytest
from datetime import date, time
from decimal import Decimal

from ledger.services.storage import (
    InMemoryTransactionStorage,
    IOFailureError,
    MalformedRecordError,
    PipeFileStorage,
    parse_transaction,
    serialize_transaction,
)


class TestCodec:
    """Tests for serialize_transaction / parse_transaction."""

    def test_serialize_payment(self, make_txn):
        """Test the exact on-disk line for a payment."""
        assert serialize_transaction(make_txn()) == "2025-05-10|14:35:22|Coffee|Starbucks|-4.25"

    def test_serialize_pads_amount_to_two_decimals(self, make_txn):
        """Test whole amounts get two fraction digits."""
        line = serialize_transaction(
            make_txn("2025-05-11", "09:00:00", "Salary", "Employer", "2500")
        )
        assert line == "2025-05-11|09:00:00|Salary|Employer|2500.00"

    def test_serialize_zero_pads_date_and_time(self, make_txn):
        """Test date and time fields are zero-padded."""
        line = serialize_transaction(make_txn("2025-01-02", "03:04:05"))
        assert line.startswith("2025-01-02|03:04:05|")

    def test_serialize_keeps_empty_text_fields(self, make_txn):
        """Test empty description and vendor still produce five fields."""
        line = serialize_transaction(make_txn(description="", vendor=""))
        assert line == "2025-05-10|14:35:22|||-4.25"

    def test_parse_line(self):
        """Test parsing restores all five fields."""
        transaction = parse_transaction("2025-05-10|14:35:22|Coffee|Starbucks|-4.25\n")
        assert transaction.date == date(2025, 5, 10)
        assert transaction.time == time(14, 35, 22)
        assert transaction.description == "Coffee"
        assert transaction.vendor == "Starbucks"
        assert transaction.amount == Decimal("-4.25")

    def test_parse_handles_crlf(self):
        """Test Windows line endings are stripped."""
        transaction = parse_transaction("2025-05-10|14:35:22|Coffee|Starbucks|-4.25\r\n")
        assert transaction.amount == Decimal("-4.25")

    def test_round_trip(self, make_txn):
        """Test parse(serialize(t)) == t."""
        for transaction in [
            make_txn(),
            make_txn("2024-02-29", "23:59:59", "Leap day", "", "1234.50"),
            make_txn("2025-12-31", "00:00:00", "", "Bank", "0.00"),
        ]:
            assert parse_transaction(serialize_transaction(transaction)) == transaction

    def test_round_trip_rounds_to_two_decimals(self, make_txn):
        """Test extra precision is rounded on the way to disk."""
        transaction = make_txn(amount="-4.249")
        parsed = parse_transaction(serialize_transaction(transaction))
        assert parsed.amount == Decimal("-4.25")

    @pytest.mark.parametrize(
        "line",
        [
            "2025-05-10|14:35:22|Coffee|-4.25",
            "2025-05-10|14:35:22|Coffee|Star|bucks|-4.25",
            "",
        ],
    )
    def test_wrong_field_count_is_malformed(self, line):
        """Test anything but five fields is rejected."""
        with pytest.raises(MalformedRecordError, match="expected 5 fields"):
            parse_transaction(line)

    @pytest.mark.parametrize(
        "line",
        [
            "2025-5-10|14:35:22|Coffee|Starbucks|-4.25",
            "2025-02-30|14:35:22|Coffee|Starbucks|-4.25",
            "10/05/2025|14:35:22|Coffee|Starbucks|-4.25",
        ],
    )
    def test_bad_date_is_malformed(self, line):
        """Test dates must be zero-padded real calendar dates."""
        with pytest.raises(MalformedRecordError, match="invalid date"):
            parse_transaction(line)

    @pytest.mark.parametrize("raw_time", ["2:35:22", "25:00:00", "14:35"])
    def test_bad_time_is_malformed(self, raw_time):
        """Test times must be HH:mm:ss."""
        with pytest.raises(MalformedRecordError, match="invalid time"):
            parse_transaction(f"2025-05-10|{raw_time}|Coffee|Starbucks|-4.25")

    @pytest.mark.parametrize(
        "raw_amount",
        ["abc", "", "NaN", "Infinity", "1_000.00", "1e3", " 4.25", "4.5", "+4.25"],
    )
    def test_bad_amount_is_malformed(self, raw_amount):
        """Test amount must be digits with exactly two fraction digits."""
        with pytest.raises(MalformedRecordError, match="invalid amount"):
            parse_transaction(f"2025-05-10|14:35:22|Coffee|Starbucks|{raw_amount}")

    def test_malformed_error_carries_context(self):
        """Test the error names the line number and content."""
        with pytest.raises(MalformedRecordError) as exc_info:
            parse_transaction("bad line", line_number=7)
        assert exc_info.value.line_number == 7
        assert exc_info.value.line == "bad line"
        assert "line 7" in str(exc_info.value)


class TestPipeFileStorage:
    """Tests for the file backend."""

    def test_ensure_exists_creates_empty_file(self, tmp_path):
        """Test a missing file is created empty."""
        path = tmp_path / "transactions.csv"
        storage = PipeFileStorage(path)
        assert storage.ensure_exists() is True
        assert path.exists()
        assert path.read_text(encoding="utf-8") == ""

    def test_ensure_exists_is_idempotent(self, tmp_path):
        """Test calling twice keeps existing content."""
        path = tmp_path / "transactions.csv"
        path.write_text("2025-05-10|14:35:22|Coffee|Starbucks|-4.25\n", encoding="utf-8")
        storage = PipeFileStorage(path)
        assert storage.ensure_exists() is False
        assert storage.ensure_exists() is False
        assert len(storage.read_all()) == 1

    def test_ensure_exists_missing_directory(self, tmp_path):
        """Test a missing parent directory is an IO failure."""
        storage = PipeFileStorage(tmp_path / "missing" / "transactions.csv")
        with pytest.raises(IOFailureError):
            storage.ensure_exists()

    def test_read_all_keeps_file_order(self, tmp_path):
        """Test records come back oldest-first, as written."""
        path = tmp_path / "transactions.csv"
        path.write_text(
            "2025-05-11|09:00:00|Salary|Employer|2500.00\n"
            "2025-05-10|14:35:22|Coffee|Starbucks|-4.25\n",
            encoding="utf-8",
        )
        descriptions = [t.description for t in PipeFileStorage(path).read_all()]
        assert descriptions == ["Salary", "Coffee"]

    def test_read_all_rejects_empty_line(self, tmp_path):
        """Test a blank line between records is malformed, not skipped."""
        path = tmp_path / "transactions.csv"
        path.write_text(
            "2025-05-10|14:35:22|Coffee|Starbucks|-4.25\n"
            "\n"
            "2025-05-11|09:00:00|Salary|Employer|2500.00\n",
            encoding="utf-8",
        )
        with pytest.raises(MalformedRecordError, match="expected 5 fields") as exc_info:
            PipeFileStorage(path).read_all()
        assert exc_info.value.line_number == 2

    def test_read_all_reports_line_number(self, tmp_path):
        """Test the first malformed line aborts the read with its number."""
        path = tmp_path / "transactions.csv"
        path.write_text(
            "2025-05-10|14:35:22|Coffee|Starbucks|-4.25\n"
            "2025-05-11|09:00:00|Salary|2500.00\n",
            encoding="utf-8",
        )
        with pytest.raises(MalformedRecordError) as exc_info:
            PipeFileStorage(path).read_all()
        assert exc_info.value.line_number == 2

    def test_read_missing_file_is_io_failure(self, tmp_path):
        """Test reading a file that does not exist fails loudly."""
        with pytest.raises(IOFailureError):
            PipeFileStorage(tmp_path / "nope.csv").read_all()

    def test_append_adds_one_line(self, tmp_path, make_txn):
        """Test append writes a terminated line after existing content."""
        path = tmp_path / "transactions.csv"
        path.write_text("2025-05-11|09:00:00|Salary|Employer|2500.00\n", encoding="utf-8")
        storage = PipeFileStorage(path)
        line = storage.append(make_txn())
        assert line == "2025-05-10|14:35:22|Coffee|Starbucks|-4.25"
        assert path.read_text(encoding="utf-8") == (
            "2025-05-11|09:00:00|Salary|Employer|2500.00\n"
            "2025-05-10|14:35:22|Coffee|Starbucks|-4.25\n"
        )

    def test_append_keeps_unicode(self, tmp_path, make_txn):
        """Test UTF-8 text survives a write and read."""
        storage = PipeFileStorage(tmp_path / "transactions.csv")
        storage.ensure_exists()
        storage.append(make_txn(description="Café crème", vendor="Bäckerei"))
        [transaction] = storage.read_all()
        assert transaction.description == "Café crème"
        assert transaction.vendor == "Bäckerei"

    def test_append_unencodable_text_is_io_failure(self, tmp_path, make_txn):
        """Test text that cannot be written as UTF-8 raises IOFailureError."""
        path = tmp_path / "transactions.csv"
        storage = PipeFileStorage(path)
        storage.ensure_exists()
        with pytest.raises(IOFailureError, match="UTF-8"):
            storage.append(make_txn(description="Caf\udce9"))
        assert path.read_text(encoding="utf-8") == ""

    def test_append_to_missing_directory_is_io_failure(self, tmp_path, make_txn):
        """Test a failed write raises IOFailureError."""
        storage = PipeFileStorage(tmp_path / "missing" / "transactions.csv")
        with pytest.raises(IOFailureError) as exc_info:
            storage.append(make_txn())
        assert exc_info.value.path.endswith("transactions.csv")


class TestInMemoryStorage:
    """Tests for the in-memory backend."""

    def test_starts_absent_then_created(self):
        """Test ensure_exists reports creation once."""
        storage = InMemoryTransactionStorage()
        assert storage.ensure_exists() is True
        assert storage.ensure_exists() is False
        assert storage.read_all() == []

    def test_preloaded_lines_are_parsed(self):
        """Test seeded lines go through the codec."""
        storage = InMemoryTransactionStorage(
            ["2025-05-10|14:35:22|Coffee|Starbucks|-4.25"]
        )
        assert storage.ensure_exists() is False
        [transaction] = storage.read_all()
        assert transaction.vendor == "Starbucks"

    def test_append_stores_serialized_line(self, make_txn):
        """Test append keeps the serialized form."""
        storage = InMemoryTransactionStorage()
        storage.append(make_txn())
        assert storage.lines == ["2025-05-10|14:35:22|Coffee|Starbucks|-4.25"]

    def test_blank_line_is_malformed(self):
        """Test seeded blank lines fail like the file backend."""
        storage = InMemoryTransactionStorage(
            ["2025-05-10|14:35:22|Coffee|Starbucks|-4.25", ""]
        )
        with pytest.raises(MalformedRecordError) as exc_info:
            storage.read_all()
        assert exc_info.value.line_number == 2
