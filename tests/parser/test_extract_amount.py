# -*- coding: utf-8 -*-
"""
Unit tests for extract_amount module.
"""

from decimal import Decimal

import pytest

from voice_expense.parser.errors import InvalidAmountReason
from voice_expense.parser.extract_amount import (
    extract_amount_and_currency,
    extract_spoken_amount,
    parse_decimal,
)

CEILING = Decimal("999999.99")


@pytest.fixture
def usd(catalog):
    return catalog.lookup("USD")


@pytest.fixture
def aed(catalog):
    return catalog.lookup("AED")


class TestExtractAmountAndCurrency:
    """Tests for extract_amount_and_currency function."""

    # === Number then currency ===

    def test_number_then_word(self, usd):
        """I spent 50 dirhams on groceries -> 50 AED"""
        result = extract_amount_and_currency("I spent 50 dirhams on groceries", usd, max_amount=CEILING)
        assert result.amount.value == Decimal("50")
        assert result.currency.code == "AED"
        assert result.currency_explicit is True

    def test_number_then_symbol(self, usd):
        """20€ -> 20 EUR"""
        result = extract_amount_and_currency("lunch 20€", usd, max_amount=CEILING)
        assert result.amount.value == Decimal("20")
        assert result.currency.code == "EUR"

    def test_number_then_multichar_symbol(self, usd):
        """10 CN¥ -> CNY, not JPY"""
        result = extract_amount_and_currency("tea 10 CN¥", usd, max_amount=CEILING)
        assert result.currency.code == "CNY"

    def test_grouped_thousands(self, usd):
        """1,250.75 euros -> 1250.75 EUR"""
        result = extract_amount_and_currency("Paid 1,250.75 euros for rent", usd, max_amount=CEILING)
        assert result.amount.value == Decimal("1250.75")
        assert result.literal == "1,250.75"
        assert result.currency.code == "EUR"

    # === Currency then number ===

    def test_symbol_then_number(self, aed):
        """$12.50 coffee -> 12.50 USD"""
        result = extract_amount_and_currency("$12.50 coffee", aed, max_amount=CEILING)
        assert result.amount.value == Decimal("12.50")
        assert result.currency.code == "USD"

    def test_code_then_number(self, usd):
        """AED 25 for lunch -> 25 AED"""
        result = extract_amount_and_currency("AED 25 for lunch", usd, max_amount=CEILING)
        assert result.amount.value == Decimal("25")
        assert result.currency.code == "AED"

    def test_glued_code_then_number(self, usd):
        result = extract_amount_and_currency("EUR40 taxi", usd, max_amount=CEILING)
        assert result.amount.value == Decimal("40")
        assert result.currency.code == "EUR"

    def test_glued_letter_symbol_then_number(self, usd):
        """R50 -> ZAR"""
        result = extract_amount_and_currency("R50 for parking", usd, max_amount=CEILING)
        assert result.currency.code == "ZAR"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("I spent 30 Riyals on lunch", "SAR"),
            ("I paid 500 Rupees for medicine", "INR"),
            ("I spent 500 Rs on groceries", "INR"),
            ("I paid 12 CHF", "CHF"),
        ],
    )
    def test_capitalized_word_after_number(self, usd, text, expected):
        result = extract_amount_and_currency(text, usd, max_amount=CEILING)
        assert result.currency.code == expected
        assert result.currency_explicit is True

    @pytest.mark.parametrize("text", ["5 bahraini dinars", "5 Bahraini  Dinars", "5 bahraini dinar"])
    def test_two_word_keyword_after_number(self, aed, text):
        result = extract_amount_and_currency(text, aed, max_amount=CEILING)
        assert result.currency.code == "BHD"
        assert result.currency_explicit is True

    # === Default currency ===

    def test_adjacent_word_not_a_currency(self, aed):
        """spent 50 on lunch -> 50 in the default currency"""
        result = extract_amount_and_currency("spent 50 on lunch", aed, max_amount=CEILING)
        assert result.amount.value == Decimal("50")
        assert result.currency.code == "AED"
        assert result.currency_explicit is False

    def test_currency_mentioned_away_from_number(self, aed):
        """spent 50 today in dollars -> USD, not the default"""
        result = extract_amount_and_currency("spent 50 today in dollars", aed, max_amount=CEILING)
        assert result.amount.value == Decimal("50")
        assert result.currency.code == "USD"
        assert result.currency_explicit is True

    def test_bare_number(self, usd):
        result = extract_amount_and_currency("50", usd, max_amount=CEILING)
        assert result.amount.value == Decimal("50")
        assert result.currency.code == "USD"
        assert result.currency_explicit is False

    def test_source_span(self, usd):
        result = extract_amount_and_currency("I spent 50 dirhams", usd, max_amount=CEILING)
        assert result.amount.source_span == (8, 10)

    # === No amount ===

    @pytest.mark.parametrize("text", ["", "I spent fifty dollars", "coffee at Starbucks"])
    def test_no_digits_returns_none(self, usd, text):
        assert extract_amount_and_currency(text, usd) is None

    # === Invalid amounts ===

    def test_zero_is_non_positive(self, usd):
        result = extract_amount_and_currency("I paid 0.00 dollars", usd, max_amount=CEILING)
        assert result.amount is None
        assert result.invalid_reason == InvalidAmountReason.NON_POSITIVE
        assert result.currency.code == "USD"

    def test_negative_is_non_positive(self, usd):
        result = extract_amount_and_currency("-5 dollars", usd, max_amount=CEILING)
        assert result.amount is None
        assert result.literal == "-5"
        assert result.invalid_reason == InvalidAmountReason.NON_POSITIVE

    def test_hyphen_inside_word_is_not_a_sign(self, usd):
        result = extract_amount_and_currency("covid-19 test", usd, max_amount=CEILING)
        assert result.literal == "19"
        assert result.amount.value == Decimal("19")

    def test_exceeds_ceiling(self, usd):
        result = extract_amount_and_currency("I spent 1000000 dollars", usd, max_amount=CEILING)
        assert result.amount is None
        assert result.invalid_reason == InvalidAmountReason.EXCEEDS_CEILING

    def test_custom_ceiling(self, usd):
        result = extract_amount_and_currency("I spent 150 dollars", usd, max_amount=Decimal("100"))
        assert result.invalid_reason == InvalidAmountReason.EXCEEDS_CEILING


class TestExtractSpokenAmount:
    """Amounts written in words"""

    def test_words_with_currency(self, usd):
        result = extract_spoken_amount("I spent twenty five dollars on lunch", usd, max_amount=CEILING)
        assert result.amount.value == Decimal("25")
        assert result.currency.code == "USD"
        assert result.currency_explicit is True
        assert result.amount.source_span is None

    def test_indian_scale(self, usd):
        result = extract_spoken_amount("five lakh rupees for the car", usd, max_amount=CEILING)
        assert result.amount.value == Decimal("500000")
        assert result.currency.code == "INR"

    def test_default_currency(self, aed):
        result = extract_spoken_amount("paid forty for parking", aed, max_amount=CEILING)
        assert result.amount.value == Decimal("40")
        assert result.currency.code == "AED"
        assert result.currency_explicit is False

    def test_no_number_words(self, usd):
        assert extract_spoken_amount("coffee at Starbucks", usd) is None

    def test_spoken_amount_over_ceiling(self, usd):
        result = extract_spoken_amount("two million dollars", usd, max_amount=CEILING)
        assert result.amount is None
        assert result.invalid_reason == InvalidAmountReason.EXCEEDS_CEILING


def test_parse_decimal_strips_grouping():
    assert parse_decimal("12,345.60") == Decimal("12345.60")


def test_spoken_zero_is_non_positive(catalog):
    result = extract_spoken_amount("I paid zero dollars for coffee", catalog.lookup("USD"), max_amount=CEILING)
    assert result.amount is None
    assert result.literal == "0"
    assert result.invalid_reason == InvalidAmountReason.NON_POSITIVE
