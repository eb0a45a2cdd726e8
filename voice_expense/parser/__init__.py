# -*- coding: utf-8 -*-
"""
Expense Command Interpreter

Turns a free-form sentence into a structured expense proposal. Extraction
steps run in a fixed order (amount and currency, category, merchant and note,
date) and their results are combined and scored. A missing or invalid amount
does not stop the other steps; it is reported as a ValidationIssue so the
caller can still show a partial confirmation.

Main entry point:
- interpret(transcript, default_currency_code) -> ExtractedExpense

Usage:
    from voice_expense.parser import interpret
    expense = interpret("I spent 50 dirhams on groceries", "USD")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from functools import lru_cache
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from voice_expense import config
from voice_expense.parser.confidence import contains_action_verb, score
from voice_expense.parser.errors import InvalidAmountReason, ValidationCode, ValidationIssue
from voice_expense.parser.extract_amount import (
    AmountExtraction,
    ExtractedAmount,
    extract_amount_and_currency,
    extract_spoken_amount,
)
from voice_expense.parser.extract_category import (
    CategoryClassifier,
    default_classifier,
    load_action_verbs,
)
from voice_expense.parser.extract_date import extract_transaction_date
from voice_expense.parser.extract_merchant import extract_merchant, extract_note
from voice_expense.parser.types import Category
from voice_expense.shared.currency_catalog import CurrencyCatalog, CurrencyDefinition, default_catalog
from voice_expense.shared.currency_resolver import CurrencyResolver, default_resolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedExpense:
    """Expense proposal produced by one interpretation call"""

    amount: Optional[ExtractedAmount]      # None when missing or invalid
    currency_code: str                     # always a catalog code
    category: Category
    merchant: Optional[str]
    note: Optional[str]
    confidence: float                      # 0.0 - 1.0
    raw_transcript: str
    transaction_date: datetime
    currency_explicit: bool = False        # currency named in the text
    issues: tuple[ValidationIssue, ...] = field(default_factory=tuple)

    @property
    def missing_amount(self) -> bool:
        return any(i.code is ValidationCode.MISSING_AMOUNT for i in self.issues)

    @property
    def invalid_amount_reason(self) -> Optional[InvalidAmountReason]:
        for issue in self.issues:
            if issue.code is ValidationCode.INVALID_AMOUNT:
                return issue.reason
        return None

    @property
    def is_valid(self) -> bool:
        return self.amount is not None and not self.issues

    def to_dict(self) -> dict:
        """JSON-friendly representation (amount as a decimal string)"""
        return {
            "amount": str(self.amount.value) if self.amount else None,
            "currency_code": self.currency_code,
            "category": self.category.value,
            "merchant": self.merchant,
            "note": self.note,
            "confidence": self.confidence,
            "raw_transcript": self.raw_transcript,
            "transaction_date": self.transaction_date.isoformat(),
            "currency_explicit": self.currency_explicit,
            "issues": [issue.to_dict() for issue in self.issues],
            "is_valid": self.is_valid,
        }


class CommandInterpreter:
    """
    Combines the extractors over one catalog.

    Every collaborator can be injected; anything left as None comes from the
    configured defaults.
    """

    def __init__(
        self,
        catalog: Optional[CurrencyCatalog] = None,
        resolver: Optional[CurrencyResolver] = None,
        classifier: Optional[CategoryClassifier] = None,
        action_verbs: Optional[Iterable[str]] = None,
        *,
        default_currency_code: Optional[str] = None,
        parse_number_words: Optional[bool] = None,
        max_amount: Optional[Decimal] = None,
        timezone: Optional[str] = None,
    ):
        if resolver is not None and catalog is None:
            catalog = resolver.catalog
        self.catalog = catalog or default_catalog()
        self.resolver = resolver or (
            default_resolver() if self.catalog is default_catalog() else CurrencyResolver(self.catalog)
        )
        self.classifier = classifier or default_classifier()
        self.action_verbs = tuple(action_verbs) if action_verbs is not None else load_action_verbs()
        self.default_currency_code = (default_currency_code or config.DEFAULT_CURRENCY).upper()
        self.parse_number_words = config.PARSE_NUMBER_WORDS if parse_number_words is None else parse_number_words
        self.max_amount = config.MAX_AMOUNT if max_amount is None else max_amount
        self.timezone = ZoneInfo(timezone or config.TIMEZONE)

    def default_currency(self, code: Optional[str] = None) -> CurrencyDefinition:
        """Requested code -> configured default -> first catalog entry."""
        currency = self.catalog.lookup(code) or self.catalog.lookup(self.default_currency_code)
        if currency is None:
            currency = self.catalog.all()[0]
            logger.warning(
                f"Default currency {code or self.default_currency_code} not in catalog, using {currency.code}"
            )
        elif code and currency.code != code.strip().upper():
            logger.info(f"Unknown default currency {code!r}, using {currency.code}")
        return currency

    def _extract_amount(self, text: str, default: CurrencyDefinition) -> Optional[AmountExtraction]:
        extraction = extract_amount_and_currency(
            text, default, resolver=self.resolver, max_amount=self.max_amount
        )
        if extraction is None and self.parse_number_words:
            extraction = extract_spoken_amount(
                text, default, resolver=self.resolver, max_amount=self.max_amount
            )
        return extraction

    def interpret(
        self,
        transcript: Optional[str],
        default_currency_code: Optional[str] = None,
        *,
        context_date: Optional[datetime] = None,
        raw_transcript: Optional[str] = None,
    ) -> ExtractedExpense:
        """
        Interpret one transcript.

        Args:
            transcript: e.g. "I paid 99.99 dollars at Amazon"
            default_currency_code: currency used when none is mentioned
            context_date: reference time for "yesterday" etc. (default: now in
                the configured timezone)
            raw_transcript: text as received, when `transcript` was already
                normalized (default: transcript)

        Returns:
            ExtractedExpense; never raises for string input
        """
        text = transcript or ""
        default = self.default_currency(default_currency_code)
        mentioned = self.resolver.resolve(text)

        issues: list[ValidationIssue] = []
        extraction = self._extract_amount(text, default)
        if extraction is None:
            amount = None
            currency = mentioned or default
            currency_explicit = mentioned is not None
            issues.append(ValidationIssue.from_code(ValidationCode.MISSING_AMOUNT))
        else:
            amount = extraction.amount
            currency = extraction.currency
            currency_explicit = extraction.currency_explicit
            if amount is None:
                issues.append(
                    ValidationIssue.from_code(
                        ValidationCode.INVALID_AMOUNT,
                        extraction.invalid_reason or InvalidAmountReason.UNPARSEABLE,
                        literal=extraction.literal,
                        ceiling=self.max_amount,
                    )
                )

        category = self.classifier.classify(text)
        merchant = extract_merchant(text)
        note = extract_note(text)
        transaction_date = extract_transaction_date(text, context_date or datetime.now(self.timezone))

        confidence = score(
            has_amount=amount is not None,
            has_explicit_currency=mentioned is not None,
            has_category=category is not Category.OTHER,
            has_action_verb=contains_action_verb(text, self.action_verbs),
        )

        expense = ExtractedExpense(
            amount=amount,
            currency_code=currency.code,
            category=category,
            merchant=merchant,
            note=note,
            confidence=confidence,
            raw_transcript=text if raw_transcript is None else raw_transcript,
            transaction_date=transaction_date,
            currency_explicit=currency_explicit,
            issues=tuple(issues),
        )
        logger.debug(
            f"Interpreted {text!r}: amount={amount.value if amount else None} "
            f"{currency.code} {category.value} confidence={confidence}"
        )
        return expense


@lru_cache(maxsize=1)
def default_interpreter() -> CommandInterpreter:
    return CommandInterpreter()


def interpret(
    transcript: Optional[str],
    default_currency_code: Optional[str] = None,
    *,
    context_date: Optional[datetime] = None,
) -> ExtractedExpense:
    """Interpret a transcript with the configured catalog and keyword tables."""
    return default_interpreter().interpret(
        transcript, default_currency_code, context_date=context_date
    )


# Export
__all__ = [
    "interpret",
    "default_interpreter",
    "CommandInterpreter",
    "ExtractedExpense",
    "ExtractedAmount",
    "Category",
    "ValidationCode",
    "ValidationIssue",
    "InvalidAmountReason",
]
