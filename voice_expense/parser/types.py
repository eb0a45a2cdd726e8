# -*- coding: utf-8 -*-
"""
Expense Category Enum

Closed set of categories shared by the classifier, the interpreter and the
outer surfaces. Not user-extensible.
"""

from enum import Enum


class Category(Enum):
    """Expense category"""

    FOOD_DINING = "Food & Dining"
    GROCERY = "Grocery"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    OTHER = "Other"

    @classmethod
    def from_string(cls, value: str) -> "Category":
        """Look up a category by its display name (case-insensitive)."""
        normalized = (value or "").strip().lower()
        for category in cls:
            if category.value.lower() == normalized:
                return category
        raise ValueError(f"Unknown category: {value}")

    @classmethod
    def keyword_categories(cls) -> list["Category"]:
        """Every category that is selected by keywords (all but Other)."""
        return [c for c in cls if c is not cls.OTHER]
