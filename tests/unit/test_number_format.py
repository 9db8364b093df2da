"""
Unit tests for pt-BR money parsing and formatting.
"""

import pytest
from bakery.utils.number_format import parse_localized_amount_to_cents, format_cents_to_localized, money_brl


class TestParseLocalizedAmount:
    """Tests for parse_localized_amount_to_cents."""

    def test_comma_is_decimal_separator(self):
        assert parse_localized_amount_to_cents("12,34") == 1234

    def test_dot_thousands_with_comma_decimal(self):
        assert parse_localized_amount_to_cents("1.234,56") == 123456

    def test_several_thousands_groups(self):
        assert parse_localized_amount_to_cents("1.234.567,89") == 123456789

    def test_only_dot_is_decimal_separator(self):
        assert parse_localized_amount_to_cents("3.5") == 350

    def test_integer_amount(self):
        assert parse_localized_amount_to_cents("18") == 1800

    @pytest.mark.parametrize('value', ["", "   ", None])
    def test_blank_is_zero(self, value):
        assert parse_localized_amount_to_cents(value) == 0

    @pytest.mark.parametrize('value', ["abc", "R$", ",", "."])
    def test_unparseable_is_zero(self, value):
        assert parse_localized_amount_to_cents(value) == 0

    def test_long_amounts_keep_every_digit(self):
        """Amounts longer than the default decimal precision still parse exactly."""
        assert parse_localized_amount_to_cents("1" * 30) == int("1" * 30 + "00")
        assert parse_localized_amount_to_cents("1" * 27 + ",50") == int("1" * 27 + "50")
        assert parse_localized_amount_to_cents("0," + "9" * 40) == 100

    def test_currency_symbol_and_spaces_are_dropped(self):
        assert parse_localized_amount_to_cents("R$ 1.890,00") == 189000

    def test_rounds_to_nearest_cent(self):
        assert parse_localized_amount_to_cents("0,005") == 1
        assert parse_localized_amount_to_cents("0,004") == 0
        assert parse_localized_amount_to_cents("2,675") == 268

    def test_leading_number_only(self):
        """Trailing garbage after a second decimal point is ignored."""
        assert parse_localized_amount_to_cents("1.2.3") == 120

    def test_minus_sign_is_stripped(self):
        assert parse_localized_amount_to_cents("-5,00") == 500


class TestFormatCents:
    """Tests for format_cents_to_localized and money_brl."""

    def test_two_decimals(self):
        assert format_cents_to_localized(1234) == "12,34"
        assert format_cents_to_localized(90) == "0,90"
        assert format_cents_to_localized(0) == "0,00"

    def test_thousands_grouping(self):
        assert format_cents_to_localized(123456) == "1.234,56"
        assert format_cents_to_localized(123456789) == "1.234.567,89"

    def test_negative(self):
        assert format_cents_to_localized(-50) == "-0,50"

    def test_none_is_zero(self):
        assert format_cents_to_localized(None) == "0,00"

    def test_money_brl(self):
        assert money_brl(3500) == "R$ 35,00"

    @pytest.mark.parametrize('text', ["12,34", "0,90", "1234,5", "7,00"])
    def test_format_of_parse_keeps_value(self, text):
        cents = parse_localized_amount_to_cents(text)
        assert parse_localized_amount_to_cents(format_cents_to_localized(cents)) == cents
