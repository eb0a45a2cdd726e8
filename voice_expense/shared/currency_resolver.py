# -*- coding: utf-8 -*-
"""
Currency resolution from free text.

Matches voice keywords ("dirham", "usd", "$", "د.إ") of the catalog against
a transcript:

- Keywords of two characters or fewer that contain a symbol ("$", "€") match
  anywhere in the text.
- Every other keyword must stand as a whole word: the characters around it
  must not be letters or digits ("aud" does not match "audio").
- Common currencies are checked first; within a pass the longest matching
  keyword wins and ties go to the earlier currency in catalog order.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Callable, Optional, Sequence

from voice_expense.shared.currency_catalog import (
    CurrencyCatalog,
    CurrencyDefinition,
    default_catalog,
)

# A letter or digit in any script (\w without the underscore).
_ALNUM = r"[^\W_]"


def is_symbol_keyword(keyword: str) -> bool:
    """Short keyword containing a non-alphanumeric character, e.g. "$" or "€"."""
    return len(keyword) <= 2 and any(not ch.isalnum() for ch in keyword)


def word_pattern(keyword: str) -> re.Pattern[str]:
    """Whole-word pattern: no letter or digit directly before or after."""
    return re.compile(rf"(?<!{_ALNUM}){re.escape(keyword)}(?!{_ALNUM})")


def _keyword_matcher(keyword: str) -> Callable[[str], bool]:
    if is_symbol_keyword(keyword):
        return lambda text: keyword in text
    pattern = word_pattern(keyword)
    return lambda text: pattern.search(text) is not None


def symbol_pattern(symbol: str) -> str:
    """
    Regex source for a symbol. Alphanumeric edges ("R", "CHF", "Mex$") only
    match at word boundaries, so "R" never matches the start of "Riyals".
    """
    prefix = f"(?<!{_ALNUM})" if symbol[0].isalnum() else ""
    suffix = f"(?!{_ALNUM})" if symbol[-1].isalnum() else ""
    return f"{prefix}{re.escape(symbol)}{suffix}"


class CurrencyResolver:
    """Resolves currency mentions against an immutable catalog."""

    def __init__(self, catalog: CurrencyCatalog):
        self.catalog = catalog
        self._common = self._compile(catalog.common())
        self._others = self._compile(catalog.others())

        symbols: dict[str, str] = {}
        for currency in catalog.all():
            if currency.symbol and currency.symbol not in symbols:
                symbols[currency.symbol] = currency.code
        self._symbol_codes = symbols
        ordered = sorted(symbols, key=len, reverse=True)
        self._symbol_regex = (
            re.compile("|".join(symbol_pattern(s) for s in ordered)) if ordered else None
        )

    @staticmethod
    def _compile(
        currencies: Sequence[CurrencyDefinition],
    ) -> list[tuple[CurrencyDefinition, str, Callable[[str], bool]]]:
        compiled = []
        for currency in currencies:
            for keyword in currency.voice_keywords:
                lowered = keyword.lower()
                compiled.append((currency, lowered, _keyword_matcher(lowered)))
        return compiled

    @staticmethod
    def _best_match(
        text: str,
        candidates: list[tuple[CurrencyDefinition, str, Callable[[str], bool]]],
    ) -> Optional[CurrencyDefinition]:
        best: Optional[CurrencyDefinition] = None
        best_length = 0
        for currency, keyword, matches in candidates:
            # Strictly longer only: ties keep the earlier catalog entry.
            if len(keyword) > best_length and matches(text):
                best = currency
                best_length = len(keyword)
        return best

    def resolve(self, text: Optional[str]) -> Optional[CurrencyDefinition]:
        """
        Detect the currency mentioned in text.

        Args:
            text: transcript or fragment (e.g. "25 AED for lunch")

        Returns:
            CurrencyDefinition, or None if no keyword matches
        """
        if not text:
            return None
        lowered = text.lower()
        return self._best_match(lowered, self._common) or self._best_match(lowered, self._others)

    def contains_currency(self, text: Optional[str]) -> bool:
        return self.resolve(text) is not None

    def normalize_symbols(self, text: Optional[str]) -> str:
        """Replace each currency symbol with its code ("$50" -> "USD50")."""
        if not text or self._symbol_regex is None:
            return text or ""
        return self._symbol_regex.sub(lambda m: self._symbol_codes[m.group(0)], text)

    def lookup_symbol(self, symbol: str) -> Optional[CurrencyDefinition]:
        """Exact symbol lookup ("CN¥" -> CNY, where resolve() would see "¥")."""
        code = self._symbol_codes.get(symbol)
        return self.catalog.lookup(code) if code else None

    def symbols(self) -> list[str]:
        """All catalog symbols, longest first (for building token patterns)."""
        return sorted(self._symbol_codes, key=len, reverse=True)

    def phrase_keywords(self) -> list[str]:
        """Keywords of more than one word ("bahraini dinars"), longest first."""
        phrases = {keyword for _, keyword, _ in self._common + self._others if " " in keyword}
        return sorted(phrases, key=lambda k: (-len(k), k))


@lru_cache(maxsize=1)
def default_resolver() -> CurrencyResolver:
    return CurrencyResolver(default_catalog())


def resolve(text: Optional[str]) -> Optional[CurrencyDefinition]:
    """Resolve a currency using the default catalog."""
    return default_resolver().resolve(text)


def contains_currency(text: Optional[str]) -> bool:
    return default_resolver().contains_currency(text)


def normalize_symbols(text: Optional[str]) -> str:
    return default_resolver().normalize_symbols(text)
