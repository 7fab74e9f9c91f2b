"""
Unit tests for the charge file reader (charge_summation.reader).

Tests buffer sizing, byte counts, decoding, and the error raised for
missing or unreadable files, using pytest's tmp_path fixture.
"""

from __future__ import annotations

import pytest

from charge_summation.config import CurrencyFormat, SummationConfig
from charge_summation.exceptions import ChargeFileError, ChargeFileNotFoundError
from charge_summation.reader import (
    END_OF_STREAM,
    MAX_BUFFER_SIZE,
    ChargeLineReader,
    ChargeLineResults,
    sum_file,
)
from charge_summation.summation import ChargeCardSummation
from tests.conftest import CLEAN_CHARGES, CLEAN_TOTAL


class TestChargeLineResults:
    """Tests for the result pair."""

    def test_accessors(self):
        summation = ChargeCardSummation()
        results = ChargeLineResults(10, summation)
        assert results.get_first() == 10
        assert results.get_second() is summation

    def test_second_defaults_to_none(self):
        assert ChargeLineResults(3).get_second() is None

    def test_immutable(self):
        results = ChargeLineResults(1, None)
        with pytest.raises(AttributeError):
            results.first = 2


class TestBufferSize:
    """Tests for ChargeLineReader buffer sizing."""

    def test_defaults_to_file_size(self, charge_file):
        path = charge_file("$1.00$2.00")
        assert ChargeLineReader(path).buffer_size == 10

    def test_missing_file_defaults_to_zero(self, tmp_path):
        assert ChargeLineReader(tmp_path / "absent.txt").buffer_size == 0

    def test_capped(self, charge_file):
        reader = ChargeLineReader(charge_file("$1"), buffer_size=MAX_BUFFER_SIZE + 10)
        assert reader.buffer_size == MAX_BUFFER_SIZE

    def test_negative_rejected(self, charge_file):
        with pytest.raises(ValueError, match="buffer_size"):
            ChargeLineReader(charge_file("$1"), buffer_size=-1)


class TestSum:
    """Tests for ChargeLineReader.sum()."""

    def test_whole_file(self, charge_file):
        path = charge_file(CLEAN_CHARGES)
        results = ChargeLineReader(path).sum()
        assert results.get_first() == len(CLEAN_CHARGES.encode("utf-8"))
        assert results.get_second().get_sum() == pytest.approx(CLEAN_TOTAL)
        assert results.get_second().get_errors() == ()

    def test_buffer_truncates_input(self, charge_file):
        path = charge_file("$1.00$2.00")
        results = ChargeLineReader(path, buffer_size=5).sum()
        assert results.get_first() == 5
        assert results.get_second().get_sum() == 1.0

    def test_initial_sum_and_format(self, charge_file):
        path = charge_file("€1.234,50", encoding="utf-8")
        fmt = CurrencyFormat(symbol="€", grouping_separator=".", decimal_separator=",")
        results = ChargeLineReader(path).sum(initial_sum=0.5, currency_format=fmt)
        assert results.get_second().get_sum() == pytest.approx(1235.0)

    def test_empty_file(self, charge_file):
        results = ChargeLineReader(charge_file("")).sum()
        assert results.get_first() == 0
        assert results.get_second().get_sum() == 0.0

    def test_end_of_stream(self, charge_file):
        """A non-empty read that finds no data reports END_OF_STREAM."""
        results = ChargeLineReader(charge_file(""), buffer_size=16).sum()
        assert results.get_first() == END_OF_STREAM
        assert results.get_second().get_errors() == ()

    def test_undecodable_bytes_replaced(self, tmp_path):
        path = tmp_path / "charges.txt"
        path.write_bytes(b"$1.00\xff$2.00")
        results = ChargeLineReader(path).sum()
        assert results.get_second().get_sum() == pytest.approx(3.0)

    def test_encoding(self, charge_file):
        path = charge_file("£4.00 £1.00", encoding="latin-1")
        reader = ChargeLineReader(path, encoding="latin-1")
        results = reader.sum(currency_format=CurrencyFormat(symbol="£"))
        assert results.get_second().get_sum() == pytest.approx(5.0)

    # -----------------------------------------------------------------
    # Resource failures
    # -----------------------------------------------------------------

    def test_missing_file(self, tmp_path):
        reader = ChargeLineReader(tmp_path / "absent.txt")
        with pytest.raises(ChargeFileNotFoundError, match="was not found") as excinfo:
            reader.sum()
        assert excinfo.value.path.endswith("absent.txt")

    def test_directory_is_io_error(self, tmp_path):
        with pytest.raises(ChargeFileError, match="I/O exception"):
            ChargeLineReader(tmp_path).sum()


class TestSumFile:
    """Tests for sum_file()."""

    def test_default_config(self, charge_file):
        results = sum_file(charge_file("$1.00$abc$3.00"))
        assert results.get_second().get_sum() == pytest.approx(4.0)
        assert results.get_second().get_errors() == (2,)

    def test_config_applied(self, charge_file):
        config = SummationConfig(initial_sum=10.0, buffer_size=5)
        results = sum_file(charge_file("$1.00$2.00"), config)
        assert results.get_first() == 5
        assert results.get_second().get_sum() == pytest.approx(11.0)
