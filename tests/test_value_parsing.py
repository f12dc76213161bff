# -*- coding: utf-8 -*-
"""Test locale-aware value parsing.

Covers dates (native, serial, DD/MM/YYYY, generic text), locale numbers,
leading integers, identifier codes and flags.
"""

from datetime import date, datetime

import pandas as pd
import pytest

from sales_recon.utils.value_parsing import (
    clean_code,
    clean_text,
    date_portion,
    is_missing,
    parse_date,
    parse_flag,
    parse_int,
    parse_locale_number,
)


class TestParseDate:
    """Test parse_date."""

    def test_strict_day_month_year(self):
        assert parse_date("25/12/2024") == datetime(2024, 12, 25)

    def test_strict_format_is_midnight(self):
        parsed = parse_date("01/02/2024")
        assert (parsed.hour, parsed.minute, parsed.second) == (0, 0, 0)
        assert parsed.month == 2

    def test_spreadsheet_serial(self):
        """Serial 45000 is 19431 days after 1970-01-01."""
        assert parse_date(45000) == datetime(2023, 3, 15)

    def test_spreadsheet_serial_float(self):
        assert parse_date(45000.0) == datetime(2023, 3, 15)

    def test_serial_epoch(self):
        assert parse_date(25569) == datetime(1970, 1, 1)

    def test_native_datetime_passes_through(self):
        value = datetime(2024, 5, 1, 10, 30)
        assert parse_date(value) == value

    def test_native_date(self):
        assert parse_date(date(2024, 5, 1)) == datetime(2024, 5, 1)

    def test_pandas_timestamp(self):
        result = parse_date(pd.Timestamp("2024-06-10"))
        assert result == datetime(2024, 6, 10)
        assert isinstance(result, datetime)

    def test_generic_text(self):
        assert parse_date("2024-03-01") == datetime(2024, 3, 1)

    def test_surrounding_whitespace(self):
        assert parse_date("  25/12/2024 ") == datetime(2024, 12, 25)

    @pytest.mark.parametrize("value", ["not a date", "abc", "??/??/????"])
    def test_junk_returns_none(self, value):
        assert parse_date(value) is None

    @pytest.mark.parametrize("value", [None, "", "   ", 0, float("nan"), pd.NaT])
    def test_empty_returns_none(self, value):
        assert parse_date(value) is None


class TestParseLocaleNumber:
    """Test parse_locale_number."""

    def test_brazilian_format(self):
        assert parse_locale_number("1.234,56") == pytest.approx(1234.56)

    def test_international_format(self):
        assert parse_locale_number("1234.56") == pytest.approx(1234.56)

    def test_international_thousands(self):
        assert parse_locale_number("1,234.56") == pytest.approx(1234.56)

    def test_currency_prefix(self):
        assert parse_locale_number("R$ 10,50") == pytest.approx(10.5)

    def test_lone_comma_is_decimal(self):
        assert parse_locale_number("3,5") == pytest.approx(3.5)

    def test_plain_integer_text(self):
        assert parse_locale_number("42") == 42

    @pytest.mark.parametrize("value", ["", "   ", "abc", None, float("nan"), "R$"])
    def test_empty_or_non_numeric_is_zero(self, value):
        assert parse_locale_number(value) == 0

    @pytest.mark.parametrize("value", [7, 12.25, -3])
    def test_numbers_pass_through(self, value):
        assert parse_locale_number(value) == value

    def test_infinity_text_is_zero(self):
        assert parse_locale_number("inf") == 0


class TestParseInt:
    """Test parse_int."""

    def test_plain(self):
        assert parse_int("12") == 12

    def test_leading_integer_only(self):
        assert parse_int(" 12 un") == 12

    def test_decimal_text_truncates(self):
        assert parse_int("3,7") == 3

    def test_float_truncates(self):
        assert parse_int(5.9) == 5

    @pytest.mark.parametrize("value", [None, "", "abc", float("nan")])
    def test_default_zero(self, value):
        assert parse_int(value) == 0


class TestTextHelpers:
    """Test clean_code, clean_text, date_portion, parse_flag, is_missing."""

    def test_clean_code_float_integer(self):
        assert clean_code(1002.0) == "1002"

    def test_clean_code_text(self):
        assert clean_code(" C001 ") == "C001"

    def test_clean_code_missing(self):
        assert clean_code(None) == ""

    def test_clean_text_default(self):
        assert clean_text("  ", "N/A") == "N/A"
        assert clean_text(None, "N/A") == "N/A"

    def test_clean_text_strips(self):
        assert clean_text("  Loja  ") == "Loja"

    def test_date_portion_with_time(self):
        assert date_portion("15/03/2023 10:22:00") == "15/03/2023"

    def test_date_portion_iso_with_time(self):
        assert date_portion("2023-03-15T10:22:00") == "2023-03-15"

    def test_date_portion_without_time(self):
        assert date_portion("15/03/2023") == "15/03/2023"

    def test_date_portion_datetime(self):
        assert date_portion(datetime(2023, 3, 15, 10, 22)) == "15/03/2023"

    @pytest.mark.parametrize("value", ["S", "sim", "X", 1, True])
    def test_flag_true(self, value):
        assert parse_flag(value) is True

    @pytest.mark.parametrize("value", ["N", "não", "", None, 0, False])
    def test_flag_false(self, value):
        assert parse_flag(value) is False

    def test_is_missing(self):
        assert is_missing(None)
        assert is_missing(float("nan"))
        assert not is_missing("")
        assert not is_missing(["a"])
