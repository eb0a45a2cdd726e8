# -*- coding: utf-8 -*-
"""
Confidence Scoring

Heuristic 0-1 score of how complete an expense proposal is. Each signal adds
a fixed weight; the sum is clamped to [0, 1].
"""

from typing import Iterable

from voice_expense.shared.currency_resolver import word_pattern

AMOUNT_WEIGHT = 0.3
CURRENCY_WEIGHT = 0.2
CATEGORY_WEIGHT = 0.3
ACTION_VERB_WEIGHT = 0.2


def contains_action_verb(text: str, verbs: Iterable[str]) -> bool:
    """True if any verb appears as a whole word ("spent", not "misspent")."""
    lowered = (text or "").lower()
    return any(word_pattern(verb).search(lowered) for verb in verbs)


def score(
    *,
    has_amount: bool,
    has_explicit_currency: bool,
    has_category: bool,
    has_action_verb: bool,
) -> float:
    total = 0.0
    if has_amount:
        total += AMOUNT_WEIGHT
    if has_explicit_currency:
        total += CURRENCY_WEIGHT
    if has_category:
        total += CATEGORY_WEIGHT
    if has_action_verb:
        total += ACTION_VERB_WEIGHT
    # Round away float noise (0.3 + 0.2 + 0.3 + 0.2 != 1.0 exactly).
    return min(1.0, max(0.0, round(total, 4)))
