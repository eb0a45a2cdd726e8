# -*- coding: utf-8 -*-
"""
Transcript Processor

Entry point for the outer surfaces (CLI, HTTP): normalizes a transcript,
interprets it and renders a confirmation or error message.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from voice_expense.parser import CommandInterpreter, ExtractedExpense, default_interpreter
from voice_expense.parser.normalize_input import normalize_transcript

logger = logging.getLogger(__name__)

EMPTY_TRANSCRIPT_MESSAGE = "I didn't catch that. Please speak clearly and include the amount, e.g. \"I spent 25 dollars on lunch\""
UNEXPECTED_ERROR_MESSAGE = "Something went wrong while processing the expense. Please try again"


@dataclass
class ProcessingResult:
    """Interpreted expense plus the message shown to the user"""

    expense: Optional[ExtractedExpense]
    message: str
    is_error: bool = False

    def to_dict(self) -> dict:
        return {
            "expense": self.expense.to_dict() if self.expense else None,
            "message": self.message,
            "is_error": self.is_error,
        }


def format_confirmation_message(expense: ExtractedExpense, interpreter: CommandInterpreter) -> str:
    """
    Format the confirmation for a valid expense.

    Example:
        ✅ Expense ready: $99.99 · Shopping
        🏪 Merchant: Amazon
    """
    currency = interpreter.catalog.lookup(expense.currency_code)
    amount_text = (
        currency.format_amount(expense.amount.value)
        if currency
        else f"{expense.amount.value} {expense.currency_code}"
    )

    message = f"✅ Expense ready: {amount_text} · {expense.category.value}"
    if expense.merchant:
        message += f"\n🏪 Merchant: {expense.merchant}"
    if expense.note:
        message += f"\n📝 Note: {expense.note}"
    message += f"\n📅 Date: {expense.transaction_date:%Y-%m-%d}"
    if expense.confidence < 0.5:
        message += "\n⚠️ Please double-check the details"
    return message


def format_issue_message(expense: ExtractedExpense) -> str:
    lines = [f"❌ {issue.message}" for issue in expense.issues]
    return "\n".join(lines)


def process_transcript(
    transcript: Optional[str],
    default_currency_code: Optional[str] = None,
    *,
    context_date: Optional[datetime] = None,
    interpreter: Optional[CommandInterpreter] = None,
) -> ProcessingResult:
    """
    Normalize, interpret and describe a transcript.

    Args:
        transcript: raw speech-to-text or typed text
        default_currency_code: user's default currency (e.g. "AED")
        context_date: reference time (default: now)
        interpreter: injected interpreter (default: configured one)

    Returns:
        ProcessingResult; is_error is True for blank input, a missing or
        invalid amount, or an unexpected failure
    """
    interpreter = interpreter or default_interpreter()
    text = normalize_transcript(transcript)

    try:
        expense = interpreter.interpret(
            text, default_currency_code, context_date=context_date, raw_transcript=transcript or ""
        )
    except Exception as e:
        logger.error(f"Unexpected error while interpreting transcript: {e}", exc_info=True)
        return ProcessingResult(expense=None, message=UNEXPECTED_ERROR_MESSAGE, is_error=True)

    if not text:
        logger.info("Empty transcript received")
        return ProcessingResult(expense=expense, message=EMPTY_TRANSCRIPT_MESSAGE, is_error=True)

    if not expense.is_valid:
        logger.info(f"Transcript needs correction: {[i.code.value for i in expense.issues]}")
        return ProcessingResult(expense=expense, message=format_issue_message(expense), is_error=True)

    logger.info(
        f"Expense interpreted: {expense.amount.value} {expense.currency_code} "
        f"{expense.category.value} (confidence {expense.confidence})"
    )
    return ProcessingResult(expense=expense, message=format_confirmation_message(expense, interpreter))
