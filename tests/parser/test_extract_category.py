# -*- coding: utf-8 -*-
"""
Unit tests for extract_category module.
"""

import pytest

from voice_expense.parser.extract_category import (
    CategoryClassifier,
    classify,
    load_action_verbs,
    load_category_rules,
)
from voice_expense.parser.types import Category


class TestClassify:

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Took a taxi home", Category.TRANSPORTATION),
            ("I spent 50 dirhams on groceries at Carrefour", Category.GROCERY),
            ("coffee with friends", Category.FOOD_DINING),
            ("netflix subscription", Category.ENTERTAINMENT),
            ("electricity bill", Category.BILLS_UTILITIES),
            ("pharmacy", Category.HEALTHCARE),
            ("university tuition", Category.EDUCATION),
            ("new shoes", Category.SHOPPING),
        ],
    )
    def test_keyword_categories(self, text, expected):
        assert classify(text) == expected

    def test_case_insensitive(self):
        assert classify("TAXI") == Category.TRANSPORTATION

    def test_table_order_resolves_overlap(self):
        """parking (Transportation) is listed before park (Entertainment)"""
        assert classify("parking at the park") == Category.TRANSPORTATION

    @pytest.mark.parametrize("text", ["", None, "qwerty zxcv"])
    def test_no_match_is_other(self, text):
        assert classify(text) == Category.OTHER


class TestCategoryClassifier:

    def test_injected_rules(self):
        classifier = CategoryClassifier([(frozenset({"foo"}), Category.SHOPPING)])
        assert classifier.classify("FOO bar") == Category.SHOPPING
        assert classifier.classify("bar") == Category.OTHER

    def test_first_rule_wins(self):
        classifier = CategoryClassifier([
            (frozenset({"ticket"}), Category.ENTERTAINMENT),
            (frozenset({"ticket", "bus"}), Category.TRANSPORTATION),
        ])
        assert classifier.classify("bus ticket") == Category.ENTERTAINMENT

    def test_empty_keywords_rejected(self):
        with pytest.raises(ValueError):
            CategoryClassifier([(frozenset(), Category.SHOPPING)])

    def test_matched_keyword(self):
        classifier = CategoryClassifier([(frozenset({"taxi", "uber"}), Category.TRANSPORTATION)])
        assert classifier.matched_keyword("uber to the airport") == "uber"
        assert classifier.matched_keyword("walk") is None


class TestLoadCategoryRules:

    def test_default_table_covers_every_category_but_other(self):
        rules = load_category_rules()
        assert [category for _, category in rules] == Category.keyword_categories()
        assert all(keywords for keywords, _ in rules)

    def test_unknown_category(self, tmp_path):
        path = tmp_path / "keywords.yaml"
        path.write_text("categories:\n  - category: Pets\n    keywords: [dog]\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_category_rules(str(path))

    def test_other_is_not_listed(self, tmp_path):
        path = tmp_path / "keywords.yaml"
        path.write_text("categories:\n  - category: Other\n    keywords: [misc]\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_category_rules(str(path))

    def test_empty_keyword_list(self, tmp_path):
        path = tmp_path / "keywords.yaml"
        path.write_text("categories:\n  - category: Grocery\n    keywords: []\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_category_rules(str(path))

    def test_missing_categories(self, tmp_path):
        path = tmp_path / "keywords.yaml"
        path.write_text("action_verbs: [spent]\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_category_rules(str(path))


def test_load_action_verbs():
    verbs = load_action_verbs()
    assert {"spent", "paid", "bought", "logged"} <= set(verbs)
