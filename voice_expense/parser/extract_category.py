# -*- coding: utf-8 -*-
"""
Category Classification

Keyword table lookup: the first category (in table order) with a keyword
contained in the lowercased text wins, otherwise Other. Table order resolves
overlapping keywords, so "taxi" lands in Transportation even if a later
category also lists it.

The table and the action verbs live in data/keywords.yaml.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional, Sequence

import yaml

from voice_expense import config
from voice_expense.parser.types import Category

logger = logging.getLogger(__name__)

CategoryRule = tuple[frozenset[str], Category]


@lru_cache(maxsize=4)
def _load_keywords_yaml(path: str) -> dict:
    with open(Path(path), "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_category_rules(path: Optional[str] = None) -> list[CategoryRule]:
    """
    Load the ordered (keywords, category) table.

    Raises:
        ValueError: unknown category name, "Other" listed explicitly, or an
            empty keyword list
    """
    data = _load_keywords_yaml(str(path or config.KEYWORDS_PATH))
    entries = data.get("categories")
    if not isinstance(entries, list) or not entries:
        raise ValueError("keywords file has no 'categories' list")

    rules: list[CategoryRule] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"invalid category entry: {entry!r}")
        category = Category.from_string(str(entry.get("category", "")))
        if category is Category.OTHER:
            raise ValueError("'Other' is the fallback category and takes no keywords")

        keywords = frozenset(str(k).strip().lower() for k in entry.get("keywords") or [] if str(k).strip())
        if not keywords:
            raise ValueError(f"category {category.value!r} has no keywords")
        rules.append((keywords, category))

    return rules


def load_action_verbs(path: Optional[str] = None) -> tuple[str, ...]:
    """Verbs that mark a sentence as an expense statement ("spent", "paid", ...)."""
    data = _load_keywords_yaml(str(path or config.KEYWORDS_PATH))
    return tuple(str(v).strip().lower() for v in data.get("action_verbs") or [] if str(v).strip())


class CategoryClassifier:
    """Ordered keyword table classifier."""

    def __init__(self, rules: Iterable[CategoryRule]):
        self.rules: Sequence[CategoryRule] = tuple(rules)
        for keywords, category in self.rules:
            if not keywords:
                raise ValueError(f"category {category.value!r} has no keywords")

    def classify(self, text: Optional[str]) -> Category:
        lowered = (text or "").lower()
        if not lowered:
            return Category.OTHER

        for keywords, category in self.rules:
            # frozenset iteration order is arbitrary; any hit selects the category.
            if any(keyword in lowered for keyword in keywords):
                return category
        return Category.OTHER

    def matched_keyword(self, text: Optional[str]) -> Optional[str]:
        """The shortest-first keyword that selected the category, for diagnostics."""
        lowered = (text or "").lower()
        for keywords, _ in self.rules:
            hits = sorted((k for k in keywords if k in lowered), key=lambda k: (len(k), k))
            if hits:
                return hits[0]
        return None


@lru_cache(maxsize=1)
def default_classifier() -> CategoryClassifier:
    return CategoryClassifier(load_category_rules())


def classify(text: Optional[str]) -> Category:
    """
    Classify text into an expense category.

    Examples:
        >>> classify("Took a taxi home")
        <Category.TRANSPORTATION: 'Transportation'>
        >>> classify("something unrelated")
        <Category.OTHER: 'Other'>
    """
    category = default_classifier().classify(text)
    logger.debug(f"Classified {text!r} as {category.value}")
    return category
