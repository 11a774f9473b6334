"""Tests for the row shaping shared by the screen table and the printout."""

from __future__ import annotations

from decimal import Decimal

import pytest

from ptaledger.constants.categories import FILTER_ALL, FILTER_EXPENSES_ONLY, FILTER_INCOME_ONLY, SORT_ASC, SORT_DESC
from ptaledger.services.ledger_service import SelectionTotals
from ptaledger.services.presentation import (
    EXPENSE_COLOR,
    INCOME_COLOR,
    build_ledger_rows,
    detail_print_title,
    format_amount,
    format_print_total,
    input_heading,
    summary_heading,
    summary_print_title,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(Decimal("0"), "0"), (Decimal("5000"), "5,000"), (Decimal("1234567"), "1,234,567"), (Decimal("1500.5"), "1,500.5")],
)
def test_format_amount_groups_thousands(value, expected):
    assert format_amount(value) == expected


def test_rows_carry_view_and_print_dates(record_factory):
    rows = build_ledger_rows(
        [record_factory(row_number=4, occurred_on="2024-05-09", item="通信費", amount="12000", payee="郵便局")],
        FILTER_ALL,
        SORT_ASC,
    )

    row = rows[0]
    assert row.view_cells == ("5/9", "通信費", "", "12,000", "郵便局", "")
    assert row.print_cells == ("2024/5/9", "通信費", "", "12,000", "郵便局", "")
    assert row.row_number == 4


def test_rows_are_colored_by_side(scenario_records):
    rows = build_ledger_rows(scenario_records, FILTER_ALL, SORT_ASC)

    assert rows[0].is_income and rows[0].amount_color == INCOME_COLOR
    assert not rows[1].is_income and rows[1].amount_color == EXPENSE_COLOR


def test_rows_follow_filter_and_sort(scenario_records):
    assert [r.row_number for r in build_ledger_rows(scenario_records, FILTER_ALL, SORT_DESC)] == [2, 1]
    assert [r.row_number for r in build_ledger_rows(scenario_records, FILTER_INCOME_ONLY, SORT_ASC)] == [1]


def test_rows_are_deletable_only_when_editable(scenario_records):
    assert not any(r.deletable for r in build_ledger_rows(scenario_records, FILTER_ALL, SORT_ASC))
    assert all(r.deletable for r in build_ledger_rows(scenario_records, FILTER_ALL, SORT_ASC, editable=True))


TOTALS = SelectionTotals(income_total=Decimal("5000"), expense_total=Decimal("7000"))


def test_print_total_for_all_shows_both_sides_and_balance():
    assert format_print_total(TOTALS, FILTER_ALL) == "選択計 収入: 5,000円 / 支出: 7,000円 (残高: -2,000円)"


@pytest.mark.parametrize("key", [FILTER_INCOME_ONLY, "本年度会費"])
def test_print_total_for_income_filters(key):
    assert format_print_total(TOTALS, key) == "選択収入合計: 5,000円"


@pytest.mark.parametrize("key", [FILTER_EXPENSES_ONLY, "通信費", "謎の項目"])
def test_print_total_for_expense_filters(key):
    assert format_print_total(TOTALS, key) == "選択支出合計: 7,000円"


def test_titles_and_headings():
    assert input_heading("2024") == "2024年度 収支入力"
    assert summary_heading("2024") == "2024年度 収支報告書"
    assert summary_print_title("2024") == "2024年度_収支報告書"
    assert detail_print_title("2024", FILTER_ALL) == "2024年度_全項目"
    assert detail_print_title("2024", FILTER_EXPENSES_ONLY) == "2024年度_支出のみ"
    assert detail_print_title("2024", "通信費") == "2024年度_通信費"
