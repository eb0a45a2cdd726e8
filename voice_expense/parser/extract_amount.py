# -*- coding: utf-8 -*-
"""
Amount and Currency Extraction

Finds the spending amount in a transcript and the currency attached to it.

Strategy (first success wins):
1. Number followed by a currency-like token: "50 dirhams", "20€"
2. Currency-like token followed by a number: "$50", "AED 25"
3. Otherwise the first number, with the currency resolved from the whole
   text or the default currency: "spent 50 on lunch"

Numbers are parsed without locale: "." is the decimal point and "," only
groups thousands ("1,250.50"). Values are Decimal, never float.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Optional

from voice_expense import config
from voice_expense.parser.errors import InvalidAmountReason
from voice_expense.parser.number_phrase import extract_amount_from_command
from voice_expense.shared.currency_catalog import CurrencyDefinition
from voice_expense.shared.currency_resolver import CurrencyResolver, default_resolver, symbol_pattern

logger = logging.getLogger(__name__)

# Optional sign (only at a word start), grouped or plain integer part,
# optional decimal part.
NUMBER_PATTERN = r"(?:(?<![\w.,])-)?(?<![0-9])(?<![0-9][.,])(?:[0-9]{1,3}(?:,[0-9]{3})+|[0-9]+)(?:\.[0-9]+)?(?![0-9])"

_NUMBER_RE = re.compile(NUMBER_PATTERN)


@dataclass(frozen=True)
class ExtractedAmount:
    """A validated positive amount and where it was found in the transcript."""

    value: Decimal
    source_span: Optional[tuple[int, int]] = None


@dataclass(frozen=True)
class AmountExtraction:
    """
    Outcome of amount extraction.

    `amount` is None when the literal was found but rejected; `invalid_reason`
    then says why. `currency_explicit` is True when the currency came from a
    keyword or symbol in the text rather than the default.
    """

    amount: Optional[ExtractedAmount]
    currency: CurrencyDefinition
    currency_explicit: bool
    literal: str
    span: Optional[tuple[int, int]] = None
    invalid_reason: Optional[InvalidAmountReason] = None

    @property
    def is_valid(self) -> bool:
        return self.amount is not None


def _phrase_pattern(phrase: str) -> str:
    # "bahraini dinars" also matches "Bahraini  Dinars".
    words = r"\s+".join(re.escape(word) for word in phrase.split())
    return f"(?i:(?<![^\\W_]){words}(?![^\\W_]))"


def _token_pattern(resolver: CurrencyResolver) -> str:
    """Symbols, then multi-word keywords, then a plain run of letters."""
    alternatives = [symbol_pattern(s) for s in resolver.symbols()]
    alternatives += [_phrase_pattern(p) for p in resolver.phrase_keywords()]
    alternatives.append(r"[^\W\d_]+")
    return "(?:" + "|".join(alternatives) + ")"


@lru_cache(maxsize=8)
def _directional_patterns(resolver: CurrencyResolver) -> tuple[re.Pattern[str], re.Pattern[str]]:
    """(number-then-token, token-then-number) patterns for a resolver's symbols."""
    token = _token_pattern(resolver)
    number_first = re.compile(rf"(?P<number>{NUMBER_PATTERN})\s*(?P<token>{token})")
    token_first = re.compile(rf"(?P<token>{token})\s*(?P<number>{NUMBER_PATTERN})")
    return number_first, token_first


def parse_decimal(literal: str) -> Decimal:
    """
    Parse a numeric literal, stripping "," thousands separators.

    Raises:
        InvalidOperation: literal is not a decimal number
    """
    return Decimal(literal.replace(",", ""))


def validate_amount(
    value: Decimal, max_amount: Optional[Decimal] = None
) -> Optional[InvalidAmountReason]:
    """Return the rejection reason for an amount, or None if it is acceptable."""
    ceiling = config.MAX_AMOUNT if max_amount is None else max_amount
    if value <= 0:
        return InvalidAmountReason.NON_POSITIVE
    if ceiling is not None and value > ceiling:
        return InvalidAmountReason.EXCEEDS_CEILING
    return None


def _build(
    literal: str,
    span: tuple[int, int],
    currency: CurrencyDefinition,
    explicit: bool,
    max_amount: Optional[Decimal],
) -> AmountExtraction:
    try:
        value = parse_decimal(literal)
    except InvalidOperation:
        logger.debug(f"Unparseable amount literal: {literal!r}")
        return AmountExtraction(None, currency, explicit, literal, span, InvalidAmountReason.UNPARSEABLE)

    reason = validate_amount(value, max_amount)
    if reason is not None:
        return AmountExtraction(None, currency, explicit, literal, span, reason)
    return AmountExtraction(ExtractedAmount(value, span), currency, explicit, literal, span)


def extract_amount_and_currency(
    text: str,
    default_currency: CurrencyDefinition,
    *,
    resolver: Optional[CurrencyResolver] = None,
    max_amount: Optional[Decimal] = None,
) -> Optional[AmountExtraction]:
    """
    Extract the amount literal and its currency.

    Args:
        text: transcript (e.g. "I spent 50 dirhams on groceries")
        default_currency: used when no currency is attached to the amount
        resolver: currency resolver (default: catalog from configuration)
        max_amount: ceiling for valid amounts (default: MAX_AMOUNT)

    Returns:
        AmountExtraction, or None when the text contains no numeric literal.
        A literal that fails validation still returns an AmountExtraction
        with `amount=None` and `invalid_reason` set.

    Examples:
        >>> extract_amount_and_currency("50 dirhams", usd).currency.code
        'AED'
        >>> extract_amount_and_currency("$12.50 coffee", aed).literal
        '12.50'
    """
    if not text:
        return None

    resolver = resolver or default_resolver()
    number_first, token_first = _directional_patterns(resolver)

    directional = []
    for pattern in (number_first, token_first):
        match = pattern.search(text)
        if match is None:
            continue
        directional.append(match)
        token = match.group("token")
        currency = resolver.lookup_symbol(token) or resolver.resolve(" ".join(token.split()))
        if currency is not None:
            return _build(match.group("number"), match.span("number"), currency, True, max_amount)

    if directional:
        # An adjacent word that is not a currency ("50 on lunch").
        match = directional[0]
        literal, span = match.group("number"), match.span("number")
    else:
        match = _NUMBER_RE.search(text)
        if match is None:
            return None
        literal, span = match.group(0), match.span()

    mentioned = resolver.resolve(text)
    currency = mentioned or default_currency
    return _build(literal, span, currency, mentioned is not None, max_amount)


def extract_spoken_amount(
    text: str,
    default_currency: CurrencyDefinition,
    *,
    resolver: Optional[CurrencyResolver] = None,
    max_amount: Optional[Decimal] = None,
) -> Optional[AmountExtraction]:
    """
    Extract an amount written in words ("twenty five dollars", "five lakh").

    The currency is resolved from the whole text. Returns None when no number
    phrase is found.
    """
    value = extract_amount_from_command(text or "")
    if value is None:
        return None

    resolver = resolver or default_resolver()
    mentioned = resolver.resolve(text)
    currency = mentioned or default_currency
    literal = format(value, "f")

    reason = validate_amount(value, max_amount)
    if reason is not None:
        return AmountExtraction(None, currency, mentioned is not None, literal, None, reason)
    return AmountExtraction(ExtractedAmount(value), currency, mentioned is not None, literal)
