"""
Tests for numeric parsing and display formatting.
"""

import pytest

from app.calculations.formatting import (
    format_currency,
    format_number,
    format_percentage,
    format_string_value,
    parse_formatted_number,
)


class TestParseFormattedNumber:
    """Test parsing of free-text form values."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("$2,500,000.50", 2500000.5),
            ("", 0.0),
            ("abc", 0.0),
            ("-150", -150.0),
            ("  1,234  ", 1234.0),
            ("7.0%", 7.0),
            (".5", 0.5),
            ("12.", 12.0),
        ],
    )
    def test_parse_values(self, raw, expected):
        """Test currency symbols, separators and whitespace are tolerated."""
        assert parse_formatted_number(raw) == expected

    def test_parse_reads_leading_number_only(self):
        """Test trailing garbage after the number is ignored."""
        assert parse_formatted_number("1.2.3") == 1.2
        assert parse_formatted_number("1-2") == 1.0

    def test_parse_lone_signs(self):
        """Test strings with no digits parse as zero."""
        assert parse_formatted_number("-") == 0.0
        assert parse_formatted_number(".") == 0.0
        assert parse_formatted_number("--5") == 0.0

    def test_parse_none_and_numbers(self):
        """Test non-string inputs."""
        assert parse_formatted_number(None) == 0.0
        assert parse_formatted_number(42) == 42.0
        assert parse_formatted_number(float("inf")) == 0.0
        assert parse_formatted_number(float("nan")) == 0.0


class TestFormatting:
    """Test display formatting helpers."""

    def test_format_currency_default_decimals(self):
        assert format_currency(1234.567) == "$1,234.57"

    def test_format_currency_fixed_decimals(self):
        assert format_currency(2250000, 0) == "$2,250,000"
        assert format_currency(0.5, 3) == "$0.500"

    def test_format_currency_negative(self):
        assert format_currency(-500, 0) == "-$500"

    def test_format_percentage(self):
        assert format_percentage(7.2) == "7.20%"
        assert format_percentage(0) == "0.00%"
        assert format_percentage(6.2915) == "6.29%"

    def test_format_number_default(self):
        """Test default formatting keeps up to three decimals."""
        assert format_number(3500) == "3,500"
        assert format_number(3500.5) == "3,500.5"
        assert format_number(0.12345) == "0.123"
        assert format_number(0) == "0"

    def test_format_number_fixed_decimals(self):
        assert format_number(15000, 2) == "15,000.00"
        assert format_number(0.0125, 4) == "0.0125"


class TestFormatStringValue:
    """Test regrouping of partially typed values."""

    def test_integer(self):
        assert format_string_value("3500") == "3,500"

    def test_decimal(self):
        assert format_string_value("3500.5") == "3,500.5"

    def test_trailing_dot(self):
        assert format_string_value("3500.") == "3,500."

    def test_already_grouped(self):
        assert format_string_value("1,250,000") == "1,250,000"

    def test_empty(self):
        assert format_string_value("") == "0"

    def test_no_digits_returned_as_is(self):
        assert format_string_value("-") == "-"
        assert format_string_value("abc") == "abc"
