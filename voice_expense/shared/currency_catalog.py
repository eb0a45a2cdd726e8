# -*- coding: utf-8 -*-
"""
Currency catalog.

Loads currency definitions (code, symbol, voice keywords, ...) from the YAML
data file into an immutable catalog. The catalog is built once and only read
afterwards, so concurrent readers need no locking.

If the data file is missing or malformed, `load_catalog` raises
`CatalogLoadError`; callers that must keep running use
`load_catalog_or_fallback`, which substitutes a single-currency USD catalog.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

import yaml

from voice_expense import config

logger = logging.getLogger(__name__)

# Checked first during currency resolution.
COMMON_CURRENCY_CODES: tuple[str, ...] = ("AED", "USD", "EUR", "GBP", "INR", "SAR")


class CatalogLoadError(Exception):
    """Currency source data is unreadable, malformed or empty."""

    def __init__(self, reason: str, source: Optional[str] = None):
        self.reason = reason
        self.source = source
        message = f"{reason} ({source})" if source else reason
        super().__init__(message)


@dataclass(frozen=True)
class CurrencyDefinition:
    """A single currency and the keywords used to detect it in free text."""

    code: str
    symbol: str
    display_name: str
    short_name: str = ""
    locale_identifier: str = "en_US"
    decimal_separator: str = "."
    grouping_separator: str = ","
    decimal_places: int = 2
    is_right_to_left: bool = False
    voice_keywords: tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"{self.symbol} {self.code}"

    def format_amount(self, value: Decimal) -> str:
        """
        Render an amount with this currency's symbol and separators.

        Examples:
            >>> USD.format_amount(Decimal("1234.5"))
            '$1,234.50'
        """
        exponent = Decimal(1).scaleb(-self.decimal_places)
        quantized = Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)
        sign = "-" if quantized < 0 else ""
        whole, _, fraction = f"{abs(quantized):f}".partition(".")

        groups = []
        while len(whole) > 3:
            groups.insert(0, whole[-3:])
            whole = whole[:-3]
        groups.insert(0, whole)
        text = self.grouping_separator.join(groups)
        if fraction:
            text = f"{text}{self.decimal_separator}{fraction}"

        if self.is_right_to_left:
            return f"{sign}{text} {self.symbol}"
        return f"{sign}{self.symbol}{text}"


class CurrencyCatalog:
    """Read-only mapping from currency code to definition."""

    def __init__(
        self,
        currencies: Iterable[CurrencyDefinition],
        common_codes: Iterable[str] = COMMON_CURRENCY_CODES,
    ):
        ordered = tuple(currencies)
        if not ordered:
            raise CatalogLoadError("currency catalog is empty")

        by_code: dict[str, CurrencyDefinition] = {}
        for currency in ordered:
            key = currency.code.upper()
            if key in by_code:
                raise CatalogLoadError(f"duplicate currency code: {key}")
            by_code[key] = currency

        common = {code.upper() for code in common_codes}
        self._currencies = ordered
        self._by_code = MappingProxyType(by_code)
        self._common = tuple(c for c in ordered if c.code.upper() in common)
        self._others = tuple(c for c in ordered if c.code.upper() not in common)

    def lookup(self, code: Optional[str]) -> Optional[CurrencyDefinition]:
        if not code:
            return None
        return self._by_code.get(code.strip().upper())

    def all(self) -> tuple[CurrencyDefinition, ...]:
        return self._currencies

    def common(self) -> tuple[CurrencyDefinition, ...]:
        return self._common

    def others(self) -> tuple[CurrencyDefinition, ...]:
        """Currencies outside the common subset, in catalog order."""
        return self._others

    def codes(self) -> list[str]:
        return [c.code for c in self._currencies]

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.strip().upper() in self._by_code

    def __iter__(self) -> Iterator[CurrencyDefinition]:
        return iter(self._currencies)

    def __len__(self) -> int:
        return len(self._currencies)


_FALLBACK_USD = CurrencyDefinition(
    code="USD",
    symbol="$",
    display_name="US Dollar",
    short_name="Dollar",
    locale_identifier="en_US",
    voice_keywords=("$", "usd", "dollar", "dollars"),
)


def fallback_catalog() -> CurrencyCatalog:
    """Minimal built-in catalog used when the data file cannot be loaded."""
    return CurrencyCatalog([_FALLBACK_USD])


def _parse_currency(item: object, index: int, source: str) -> CurrencyDefinition:
    if not isinstance(item, dict):
        raise CatalogLoadError(f"entry #{index} is not a mapping", source)

    missing = [key for key in ("code", "symbol", "displayName") if not item.get(key)]
    if missing:
        raise CatalogLoadError(f"entry #{index} is missing {', '.join(missing)}", source)

    code = str(item["code"]).strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise CatalogLoadError(f"entry #{index} has an invalid code: {item['code']!r}", source)

    keywords = item.get("voiceKeywords") or []
    if not isinstance(keywords, list):
        raise CatalogLoadError(f"{code}: voiceKeywords must be a list", source)

    # Ordered set: keep first occurrence, compare case-insensitively.
    seen: set[str] = set()
    ordered_keywords: list[str] = []
    for keyword in keywords:
        keyword = str(keyword).strip()
        if keyword and keyword.lower() not in seen:
            seen.add(keyword.lower())
            ordered_keywords.append(keyword)

    try:
        decimal_places = int(item.get("decimalPlaces", 2))
    except (TypeError, ValueError):
        raise CatalogLoadError(f"{code}: decimalPlaces must be an integer", source)

    return CurrencyDefinition(
        code=code,
        symbol=str(item["symbol"]),
        display_name=str(item["displayName"]),
        short_name=str(item.get("shortName") or ""),
        locale_identifier=str(item.get("localeIdentifier") or "en_US"),
        decimal_places=decimal_places,
        is_right_to_left=bool(item.get("isRTL", False)),
        voice_keywords=tuple(ordered_keywords),
    )


def load_catalog(path: Optional[str] = None) -> CurrencyCatalog:
    """
    Load the currency catalog from a YAML file.

    Args:
        path: YAML file path (default: CURRENCY_CATALOG_PATH)

    Returns:
        CurrencyCatalog

    Raises:
        CatalogLoadError: file missing/unreadable, invalid YAML, empty or
            malformed currency list
    """
    source = str(path or config.CURRENCY_CATALOG_PATH)
    catalog_path = Path(source)

    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise CatalogLoadError(f"cannot read currency data: {e}", source) from e
    except yaml.YAMLError as e:
        raise CatalogLoadError(f"invalid YAML: {e}", source) from e

    if not isinstance(data, dict) or not isinstance(data.get("currencies"), list):
        raise CatalogLoadError("missing 'currencies' list", source)

    currencies = [_parse_currency(item, idx, source) for idx, item in enumerate(data["currencies"], start=1)]
    if not currencies:
        raise CatalogLoadError("currency catalog is empty", source)

    try:
        catalog = CurrencyCatalog(currencies)
    except CatalogLoadError as e:
        raise CatalogLoadError(e.reason, source) from e

    logger.debug(f"Loaded {len(catalog)} currencies from {source} (version {data.get('version', '?')})")
    return catalog


def load_catalog_or_fallback(path: Optional[str] = None) -> CurrencyCatalog:
    """Load the catalog; on failure log the error and use the USD-only fallback."""
    try:
        return load_catalog(path)
    except CatalogLoadError as e:
        logger.error(f"Currency catalog unavailable, using built-in USD fallback: {e}")
        return fallback_catalog()


@lru_cache(maxsize=1)
def default_catalog() -> CurrencyCatalog:
    """Process-wide catalog built from configuration (loaded once)."""
    return load_catalog_or_fallback(config.CURRENCY_CATALOG_PATH)
