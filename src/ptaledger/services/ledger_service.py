"""Ledger-specific helpers for filtering, totals, and summaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Sequence

from ..constants.categories import (
    DEFAULT_CATEGORIES,
    FILTER_ALL,
    FILTER_EXPENSES_ONLY,
    FILTER_INCOME_ONLY,
    SORT_ASC,
    CategorySets,
)
from ..models.record import LedgerRecord, NewRecord

ZERO = Decimal("0")


class RecordValidationError(ValueError):
    """Raised when input form values cannot become a write request."""


@dataclass(frozen=True)
class SelectionEntry:
    """One checkbox row: whether it is ticked, its amount and its side."""

    checked: bool
    amount: Decimal
    is_income: bool


@dataclass(frozen=True)
class SelectionTotals:
    income_total: Decimal = ZERO
    expense_total: Decimal = ZERO

    @property
    def balance(self) -> Decimal:
        return self.income_total - self.expense_total


@dataclass(frozen=True)
class CategoryTotal:
    item_name: str
    total_amount: Decimal


@dataclass
class SummaryReport:
    """Per-category totals in configuration order plus grand totals."""

    income_summary: list[CategoryTotal] = field(default_factory=list)
    expense_summary: list[CategoryTotal] = field(default_factory=list)
    total_income: Decimal = ZERO
    total_expense: Decimal = ZERO

    @property
    def final_balance(self) -> Decimal:
        return self.total_income - self.total_expense


def matches_filter(
    record: LedgerRecord, filter_key: str, categories: CategorySets = DEFAULT_CATEGORIES
) -> bool:
    """Return True when ``record`` passes ``filter_key``."""

    if filter_key == FILTER_ALL:
        return True
    if filter_key == FILTER_INCOME_ONLY:
        return categories.is_income(record.item)
    if filter_key == FILTER_EXPENSES_ONLY:
        # Complement of the income list, so unknown names land here too.
        return not categories.is_income(record.item)
    return record.item == filter_key


def filter_and_sort_records(
    records: Iterable[LedgerRecord],
    filter_key: str,
    sort_order: str,
    categories: CategorySets = DEFAULT_CATEGORIES,
) -> list[LedgerRecord]:
    """Filter by category key and sort by date into a new list.

    ``sort_order`` of ``"asc"`` sorts oldest first; anything else newest first.
    The input collection is never reordered.
    """

    filtered = [r for r in records if matches_filter(r, filter_key, categories)]
    return sorted(filtered, key=lambda r: r.occurred_on, reverse=sort_order != SORT_ASC)


def selection_entries(
    records: Iterable[LedgerRecord],
    checked_rows: Optional[Iterable[object]] = None,
    categories: CategorySets = DEFAULT_CATEGORIES,
) -> list[SelectionEntry]:
    """Pair each record with its checkbox state; ``None`` means every row is ticked."""

    checked = None if checked_rows is None else set(checked_rows)
    return [
        SelectionEntry(
            checked=checked is None or r.row_number in checked,
            amount=r.amount,
            is_income=categories.is_income(r.item),
        )
        for r in records
    ]


def calculate_selection_totals(entries: Iterable[SelectionEntry]) -> SelectionTotals:
    """Sum ticked entries into income and expense totals."""

    income_total = ZERO
    expense_total = ZERO
    for entry in entries:
        if not entry.checked:
            continue
        if entry.is_income:
            income_total += entry.amount
        else:
            expense_total += entry.amount
    return SelectionTotals(income_total=income_total, expense_total=expense_total)


def calculate_summary(
    records: Iterable[LedgerRecord], categories: CategorySets = DEFAULT_CATEGORIES
) -> SummaryReport:
    """Roll up all records into per-category buckets.

    Buckets follow the configured order and start at zero, so every configured
    category gets a row. Records whose category is in neither list are left
    out of the summary.
    """

    income_map: dict[str, Decimal] = {name: ZERO for name in categories.income_names}
    expense_map: dict[str, Decimal] = {name: ZERO for name in categories.expense_names}

    for record in records:
        if record.item in income_map:
            income_map[record.item] += record.amount
        elif record.item in expense_map:
            expense_map[record.item] += record.amount

    income_summary = [CategoryTotal(name, total) for name, total in income_map.items()]
    expense_summary = [CategoryTotal(name, total) for name, total in expense_map.items()]
    return SummaryReport(
        income_summary=income_summary,
        expense_summary=expense_summary,
        total_income=sum((c.total_amount for c in income_summary), ZERO),
        total_expense=sum((c.total_amount for c in expense_summary), ZERO),
    )


def validate_new_record(
    *,
    occurred_on: Optional[str],
    item: Optional[str],
    amount: Optional[str],
    details: Optional[str] = None,
    payee: Optional[str] = None,
    memo: Optional[str] = None,
) -> NewRecord:
    """Turn raw form values into a ``NewRecord`` or raise ``RecordValidationError``.

    A category and a non-zero numeric amount are required; the amount is
    stored as its absolute value. An empty date means today.
    """

    item_name = (item or "").strip()
    raw_amount = (amount or "").strip().replace(",", "")
    if not item_name or not raw_amount:
        raise RecordValidationError("項目と金額は必須です")
    try:
        value = Decimal(raw_amount)
    except InvalidOperation as exc:
        raise RecordValidationError("項目と金額は必須です") from exc
    if not value.is_finite() or value == 0:
        raise RecordValidationError("項目と金額は必須です")

    raw_date = (occurred_on or "").strip()
    try:
        when = date.fromisoformat(raw_date) if raw_date else date.today()
    except ValueError as exc:
        raise RecordValidationError("日付は YYYY-MM-DD 形式で入力してください") from exc

    return NewRecord(
        occurred_on=when,
        item=item_name,
        details=(details or "").strip(),
        amount=abs(value),
        payee=(payee or "").strip(),
        memo=(memo or "").strip(),
    )


def find_record(records: Sequence[LedgerRecord], row_number: object) -> Optional[LedgerRecord]:
    """Look up a cached record by its server row number."""

    for record in records:
        if record.row_number == row_number:
            return record
    return None
