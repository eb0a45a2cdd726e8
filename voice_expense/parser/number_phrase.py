# -*- coding: utf-8 -*-
"""
Spoken Number Parsing

Speech-to-text often writes amounts as words. Parses the first run of number
words in a sentence into a Decimal:
- "twenty five" -> 25
- "two thousand five hundred and fifty" -> 2550
- "five lakh", "three crore" -> 500000, 30000000 (Indian scale)
- "two point five million" -> 2500000
- "fifty cents" -> 0.50
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Optional

_ONES = {
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
    "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14, "fifteen": 15,
    "sixteen": 16, "seventeen": 17, "eighteen": 18, "nineteen": 19,
}

_TENS = {
    "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50,
    "sixty": 60, "seventy": 70, "eighty": 80, "ninety": 90,
}

_SCALES = {
    "thousand": 1_000, "thousands": 1_000,
    "lakh": 100_000, "lakhs": 100_000, "lac": 100_000, "lacs": 100_000,
    "million": 1_000_000, "millions": 1_000_000,
    "crore": 10_000_000, "crores": 10_000_000,
    "billion": 1_000_000_000, "billions": 1_000_000_000,
    "trillion": 1_000_000_000_000, "trillions": 1_000_000_000_000,
}

_CENT_WORDS = {"cent", "cents", "paise", "paisa"}
_ARTICLES = {"a", "an"}

_TOKEN_PATTERN = re.compile(r"[a-z]+")


def _is_number_word(word: str) -> bool:
    return word in _ONES or word in _TENS or word == "hundred" or word in _SCALES


def _first_number_run(words: list[str]) -> list[str]:
    """Longest run of number words starting at the first number word."""
    run: list[str] = []
    for idx, word in enumerate(words):
        following = words[idx + 1] if idx + 1 < len(words) else ""
        starts_scale = following == "hundred" or following in _SCALES

        if _is_number_word(word):
            run.append(word)
        elif word in _ARTICLES and starts_scale:
            # "a hundred" == "one hundred"; a bare "a" is not a number.
            run.append("one")
        elif run and word in ("and", "point") and _is_number_word(following):
            run.append(word)
        elif run and word in _CENT_WORDS:
            run.append(word)
            break
        elif run:
            break
    return run


def _parse_run(run: list[str]) -> Decimal:
    total = Decimal(0)
    current = Decimal(0)
    fraction_digits: Optional[str] = None
    cents: Optional[Decimal] = None

    for word in run:
        if word == "and":
            continue

        if word == "point":
            total += current
            current = Decimal(0)
            fraction_digits = ""
            continue

        if word in _CENT_WORDS:
            cents = current
            current = Decimal(0)
            continue

        if word in _ONES or word in _TENS:
            value = _ONES.get(word, _TENS.get(word, 0))
            if fraction_digits is not None:
                # "point two five" -> .25, "point twenty" -> .2
                fraction_digits += str(value // 10) if word in _TENS else str(value)
            else:
                current += value
            continue

        if word == "hundred":
            current = (current or Decimal(1)) * 100
            continue

        scale = _SCALES[word]
        if fraction_digits is not None:
            # "two point five million": the decimal applies to the scale.
            whole = total + current + (Decimal(f"0.{fraction_digits}") if fraction_digits else 0)
            total = whole * scale
            fraction_digits = None
        else:
            total += (current or Decimal(1)) * scale
        current = Decimal(0)

    total += current
    if fraction_digits:
        total += Decimal(f"0.{fraction_digits}")
    if cents is not None:
        total += cents / 100
    return total


def parse_number_phrase(text: str) -> Optional[Decimal]:
    """
    Parse the first spoken number in text.

    Args:
        text: e.g. "I spent two thousand dirhams on rent"

    Returns:
        Decimal value (e.g. Decimal("2000")), or None if there is no number
        phrase. "zero" parses to Decimal(0); rejecting it is up to the caller.
    """
    if not text:
        return None

    words = _TOKEN_PATTERN.findall(text.lower().replace("-", " "))
    run = _first_number_run(words)
    if not run:
        return None

    return _parse_run(run)


def contains_number_phrase(text: str) -> bool:
    """True if text contains at least one number word ("five", "lakh", ...)."""
    words = _TOKEN_PATTERN.findall((text or "").lower().replace("-", " "))
    return any(_is_number_word(word) for word in words)


_ACTION_PREFIX = re.compile(
    r"^.*?\b(?:spent|spend|paid|pay|cost|costs|bought|charged)\b\s*",
    re.IGNORECASE,
)


def extract_amount_from_command(command: str) -> Optional[Decimal]:
    """
    Parse the spoken amount of an expense command.

    Looks after the action verb first ("I spent fifty on two coffees" -> 50),
    then falls back to the first number phrase anywhere in the command.
    """
    if not command:
        return None

    tail = _ACTION_PREFIX.sub("", command, count=1)
    if tail != command:
        amount = parse_number_phrase(tail)
        if amount is not None:
            return amount
    return parse_number_phrase(command)
