"""
Centralized category definitions for the PTA ledger.
Income/expense names match the sheet's 項目 column so filters and the summary
report line up with what the remote service stores.
"""

from __future__ import annotations

from dataclasses import dataclass

# Transaction Categories - Income
INCOME_ITEM_NAMES: tuple[str, ...] = (
    "前年度繰越金",
    "本年度会費",
    "資源回収収益",
    "決算利息",
    "その他収入",
)

# Transaction Categories - Expenses
EXPENSE_ITEM_NAMES: tuple[str, ...] = (
    "備品・消耗品費",
    "交流会",
    "お楽しみ会",
    "お泊り会おみやげ",
    "運動会景品",
    "卒園進級記念品代",
    "学年末お礼代",
    "クラス担任アルバム",
    "慶弔費",
    "札幌私立幼稚園PTA連合会会費",
    "日本スポーツ振興センター負担金",
    "幼稚園寄付金",
    "用紙・印刷代",
    "通信費",
    "予備費",
)

# Filter sentinels understood by the filter/sort engine
FILTER_ALL = "ALL"
FILTER_INCOME_ONLY = "_INCOME_ONLY_"
FILTER_EXPENSES_ONLY = "_EXPENSES_ONLY_"

FILTER_LABELS = {
    FILTER_ALL: "全項目",
    FILTER_INCOME_ONLY: "収入のみ",
    FILTER_EXPENSES_ONLY: "支出のみ",
}

SORT_ASC = "asc"
SORT_DESC = "desc"

SORT_LABELS = {
    SORT_ASC: "日付の古い順",
    SORT_DESC: "日付の新しい順",
}


@dataclass(frozen=True)
class CategorySets:
    """Configured income and expense names, in report order."""

    income_names: tuple[str, ...] = INCOME_ITEM_NAMES
    expense_names: tuple[str, ...] = EXPENSE_ITEM_NAMES

    def __post_init__(self) -> None:
        overlap = set(self.income_names) & set(self.expense_names)
        if overlap:
            raise ValueError(f"Categories listed as both income and expense: {sorted(overlap)}")

    def is_income(self, item_name: str) -> bool:
        return is_income_category(item_name, self.income_names)

    def is_expense(self, item_name: str) -> bool:
        """True only for names in the configured expense list."""
        return item_name in self.expense_names

    @property
    def all_names(self) -> tuple[str, ...]:
        return self.income_names + self.expense_names


DEFAULT_CATEGORIES = CategorySets()


def is_income_category(item_name: str, income_names: tuple[str, ...] = INCOME_ITEM_NAMES) -> bool:
    """Check if a category name is an income category."""
    return item_name in income_names


def filter_label(filter_key: str) -> str:
    """Human label for a filter key; category names label themselves."""
    return FILTER_LABELS.get(filter_key, filter_key)


def get_filter_choices(categories: CategorySets = DEFAULT_CATEGORIES) -> list[tuple[str, str]]:
    """
    Get (key, label) pairs for the ledger filter dropdown.

    Sentinels come first, then income names, then expense names.
    """
    choices = [(key, label) for key, label in FILTER_LABELS.items()]
    choices.extend((name, name) for name in categories.income_names)
    choices.extend((name, name) for name in categories.expense_names)
    return choices


def get_item_choices(categories: CategorySets = DEFAULT_CATEGORIES) -> list[str]:
    """Category names offered on the input form."""
    return list(categories.all_names)
