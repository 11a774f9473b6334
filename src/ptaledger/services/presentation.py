"""Display shaping shared by the on-screen table and the printed report.

Both surfaces are filled from the same ``LedgerRow`` list so their rows and
tallies always agree for a given filter, sort and selection.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from ..constants.categories import (
    DEFAULT_CATEGORIES,
    FILTER_ALL,
    FILTER_INCOME_ONLY,
    CategorySets,
    filter_label,
)
from ..models.record import LedgerRecord
from .ledger_service import SelectionTotals, filter_and_sort_records

INCOME_COLOR = "#0000ff"
EXPENSE_COLOR = "#d32f2f"

TABLE_HEADERS = ("日付", "項目", "内訳", "金額", "支払先", "備考")


def format_amount(value: Decimal) -> str:
    """Group thousands; whole yen amounts drop the fractional part."""

    if value == value.to_integral_value():
        return f"{int(value):,}"
    return f"{value:,}"


@dataclass(frozen=True)
class LedgerRow:
    record: LedgerRecord
    is_income: bool
    view_cells: tuple[str, ...]
    print_cells: tuple[str, ...]
    deletable: bool

    @property
    def row_number(self) -> int | str:
        return self.record.row_number

    @property
    def amount_color(self) -> str:
        return INCOME_COLOR if self.is_income else EXPENSE_COLOR


def build_ledger_rows(
    records: Iterable[LedgerRecord],
    filter_key: str,
    sort_order: str,
    categories: CategorySets = DEFAULT_CATEGORIES,
    editable: bool = False,
) -> list[LedgerRow]:
    """Filter, sort and format records for both surfaces in one pass."""

    rows: list[LedgerRow] = []
    for record in filter_and_sort_records(records, filter_key, sort_order, categories):
        day = record.occurred_on
        amount = format_amount(record.amount)
        shared = (record.item, record.details, amount, record.payee, record.memo)
        rows.append(
            LedgerRow(
                record=record,
                is_income=categories.is_income(record.item),
                view_cells=(f"{day.month}/{day.day}",) + shared,
                print_cells=(f"{day.year}/{day.month}/{day.day}",) + shared,
                deletable=editable,
            )
        )
    return rows


def is_income_filter(filter_key: str, categories: CategorySets = DEFAULT_CATEGORIES) -> bool:
    return filter_key == FILTER_INCOME_ONLY or categories.is_income(filter_key)


def format_print_total(
    totals: SelectionTotals,
    filter_key: str,
    categories: CategorySets = DEFAULT_CATEGORIES,
) -> str:
    """Footer line of the printed detail report."""

    income = format_amount(totals.income_total)
    expense = format_amount(totals.expense_total)
    if filter_key == FILTER_ALL:
        balance = format_amount(totals.balance)
        return f"選択計 収入: {income}円 / 支出: {expense}円 (残高: {balance}円)"
    if is_income_filter(filter_key, categories):
        return f"選択収入合計: {income}円"
    return f"選択支出合計: {expense}円"


def input_heading(fiscal_year: str) -> str:
    return f"{fiscal_year}年度 収支入力"


def detail_print_title(fiscal_year: str, filter_key: str) -> str:
    """Window/document title used as the file name of the detail printout."""
    return f"{fiscal_year}年度_{filter_label(filter_key)}"


def summary_heading(fiscal_year: str) -> str:
    return f"{fiscal_year}年度 収支報告書"


def summary_print_title(fiscal_year: str) -> str:
    return f"{fiscal_year}年度_収支報告書"
