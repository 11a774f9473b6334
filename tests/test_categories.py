"""Tests for the income/expense classifier and dropdown choices."""

from __future__ import annotations

import json

import pytest

from ptaledger.config import load_category_sets
from ptaledger.constants.categories import (
    DEFAULT_CATEGORIES,
    EXPENSE_ITEM_NAMES,
    FILTER_ALL,
    FILTER_EXPENSES_ONLY,
    FILTER_INCOME_ONLY,
    INCOME_ITEM_NAMES,
    CategorySets,
    filter_label,
    get_filter_choices,
    get_item_choices,
    is_income_category,
)


@pytest.mark.parametrize("name", INCOME_ITEM_NAMES)
def test_income_names_classify_as_income(name):
    assert is_income_category(name)
    assert DEFAULT_CATEGORIES.is_income(name)
    assert not DEFAULT_CATEGORIES.is_expense(name)


def test_expense_and_unknown_names_are_not_income():
    assert not is_income_category("通信費")
    assert DEFAULT_CATEGORIES.is_expense("通信費")
    # Unknown names are neither, so totals treat them as expense
    assert not DEFAULT_CATEGORIES.is_income("謎の項目")
    assert not DEFAULT_CATEGORIES.is_expense("謎の項目")


def test_classifier_is_exact_match():
    assert not is_income_category("本年度会費 ")
    assert not is_income_category("")


def test_custom_income_list_overrides_default():
    assert is_income_category("寄付", income_names=("寄付",))
    assert not is_income_category("本年度会費", income_names=("寄付",))


def test_overlapping_lists_are_rejected():
    with pytest.raises(ValueError):
        CategorySets(income_names=("会費",), expense_names=("会費", "通信費"))


def test_filter_choices_start_with_sentinels_then_categories():
    choices = get_filter_choices()
    keys = [key for key, _ in choices]

    assert keys[:3] == [FILTER_ALL, FILTER_INCOME_ONLY, FILTER_EXPENSES_ONLY]
    assert keys[3 : 3 + len(INCOME_ITEM_NAMES)] == list(INCOME_ITEM_NAMES)
    assert keys[-len(EXPENSE_ITEM_NAMES) :] == list(EXPENSE_ITEM_NAMES)
    assert dict(choices)[FILTER_ALL] == "全項目"


def test_filter_label_falls_back_to_category_name():
    assert filter_label(FILTER_INCOME_ONLY) == "収入のみ"
    assert filter_label(FILTER_EXPENSES_ONLY) == "支出のみ"
    assert filter_label("通信費") == "通信費"


def test_item_choices_list_income_before_expense():
    items = get_item_choices()
    assert items[0] == INCOME_ITEM_NAMES[0]
    assert items[-1] == EXPENSE_ITEM_NAMES[-1]
    assert len(items) == len(INCOME_ITEM_NAMES) + len(EXPENSE_ITEM_NAMES)


def test_load_category_sets_from_file(tmp_path):
    path = tmp_path / "categories.json"
    path.write_text(json.dumps({"income": ["会費"], "expense": ["印刷代", "雑費"]}), encoding="utf-8")

    sets = load_category_sets(path)

    assert sets.income_names == ("会費",)
    assert sets.expense_names == ("印刷代", "雑費")


def test_load_category_sets_defaults_without_path():
    assert load_category_sets(None) == DEFAULT_CATEGORIES


@pytest.mark.parametrize("content", ["not json", "[]", '{"income": ["a"]}'])
def test_load_category_sets_rejects_bad_files(tmp_path, content):
    path = tmp_path / "categories.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        load_category_sets(path)
