"""Ledger view: input form and the filterable, selectable record table."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import flet as ft

from ...constants.categories import SORT_LABELS, get_filter_choices, get_item_choices
from ...logging_config import get_logger
from ...services.ledger_service import calculate_selection_totals, selection_entries
from ...services.presentation import (
    TABLE_HEADERS,
    build_ledger_rows,
    format_amount,
    format_print_total,
    input_heading,
)
from .. import controllers
from ..components import build_app_bar, build_card, build_stat_card, empty_state

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

AMOUNT_COLUMN = TABLE_HEADERS.index("金額")


def _refresh(control: ft.Control) -> None:
    if control.page:
        control.update()


def build_ledger_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the ledger page with the input tab and the list tab."""

    session = ctx.require_session()

    # ---- input tab -------------------------------------------------------
    date_field = ft.TextField(
        label="日付", hint_text="YYYY-MM-DD", value=date.today().isoformat(), width=180
    )
    item_field = ft.Dropdown(
        label="項目",
        options=[ft.dropdown.Option(name) for name in get_item_choices(ctx.categories)],
        width=300,
    )
    details_field = ft.TextField(label="内訳", width=300)
    amount_field = ft.TextField(
        label="金額", keyboard_type=ft.KeyboardType.NUMBER, suffix_text="円", width=180
    )
    payee_field = ft.TextField(label="支払先", width=300)
    memo_field = ft.TextField(label="備考", width=300, multiline=True)

    def reset_form() -> None:
        for field in (item_field, details_field, amount_field, payee_field, memo_field):
            field.value = None if field is item_field else ""
        date_field.value = date.today().isoformat()
        page.update()

    def on_saved() -> None:
        reset_form()
        render_table()

    def save(_e):
        controllers.save_new_record(
            ctx,
            page,
            occurred_on=date_field.value,
            item=item_field.value,
            amount=amount_field.value,
            details=details_field.value,
            payee=payee_field.value,
            memo=memo_field.value,
            on_saved=on_saved,
        )

    save_button = ft.FilledButton("保存", icon=ft.Icons.SAVE, on_click=save, visible=session.editable)
    readonly_note = ft.Text(
        "この合言葉では閲覧のみ可能です", color=ft.Colors.ON_SURFACE_VARIANT, visible=not session.editable
    )
    input_tab = ft.Container(
        content=build_card(
            "収支の入力",
            ft.Column(
                [date_field, item_field, details_field, amount_field, payee_field, memo_field, readonly_note],
                spacing=12,
            ),
            actions=[save_button],
        ),
        padding=16,
    )

    # ---- list tab --------------------------------------------------------
    filter_field = ft.Dropdown(
        label="表示項目",
        options=[ft.dropdown.Option(key, label) for key, label in get_filter_choices(ctx.categories)],
        value=ctx.filter_key,
        width=280,
    )
    sort_field = ft.Dropdown(
        label="並び順",
        options=[ft.dropdown.Option(key, label) for key, label in SORT_LABELS.items()],
        value=ctx.sort_order,
        width=200,
    )
    income_text = ft.Text("0")
    expense_text = ft.Text("0")
    balance_text = ft.Text("0")
    print_total_text = ft.Text("", color=ft.Colors.ON_SURFACE_VARIANT)
    table = ft.DataTable(
        columns=[ft.DataColumn(ft.Text("選択"))]
        + [
            ft.DataColumn(ft.Text(header), numeric=index == AMOUNT_COLUMN)
            for index, header in enumerate(TABLE_HEADERS)
        ]
        + [ft.DataColumn(ft.Text(""))],
        rows=[],
    )
    empty_placeholder = empty_state("該当するデータがありません")

    def update_totals() -> None:
        rows = build_ledger_rows(session.records, ctx.filter_key, ctx.sort_order, ctx.categories)
        checked = [row.row_number for row in rows if row.row_number not in ctx.unchecked_rows]
        totals = calculate_selection_totals(
            selection_entries([row.record for row in rows], checked, ctx.categories)
        )
        income_text.value = format_amount(totals.income_total)
        expense_text.value = format_amount(totals.expense_total)
        balance_text.value = format_amount(totals.balance)
        print_total_text.value = format_print_total(totals, ctx.filter_key, ctx.categories)
        for control in (income_text, expense_text, balance_text, print_total_text):
            _refresh(control)

    def on_toggle(row_number, checked: bool) -> None:
        controllers.toggle_row(ctx, row_number, checked)
        update_totals()

    def _build_row(row) -> ft.DataRow:
        checkbox = ft.Checkbox(
            value=row.row_number not in ctx.unchecked_rows,
            on_change=lambda e, rn=row.row_number: on_toggle(rn, bool(e.control.value)),
        )
        cells = [ft.DataCell(checkbox)]
        for index, value in enumerate(row.view_cells):
            if index == AMOUNT_COLUMN:
                text = ft.Text(value, color=row.amount_color, weight=ft.FontWeight.BOLD)
            else:
                text = ft.Text(value)
            cells.append(ft.DataCell(text))
        if row.deletable:
            cells.append(
                ft.DataCell(
                    ft.IconButton(
                        icon=ft.Icons.DELETE_OUTLINE,
                        tooltip="削除",
                        icon_color=ft.Colors.ERROR,
                        on_click=lambda _, rn=row.row_number: controllers.request_delete(
                            ctx, page, rn, on_deleted=render_table
                        ),
                    )
                )
            )
        else:
            cells.append(ft.DataCell(ft.Text("")))
        return ft.DataRow(cells=cells)

    def render_table() -> None:
        rows = build_ledger_rows(
            session.records, ctx.filter_key, ctx.sort_order, ctx.categories, editable=session.editable
        )
        table.rows = [_build_row(row) for row in rows]
        empty_placeholder.visible = not rows
        logger.debug("Ledger table rendered", extra={"rows": len(rows), "filter": ctx.filter_key})
        _refresh(table)
        _refresh(empty_placeholder)
        update_totals()

    def on_filter_change(_e):
        ctx.filter_key = filter_field.value or ctx.filter_key
        ctx.sort_order = sort_field.value or ctx.sort_order
        ctx.reset_selection()
        render_table()

    filter_field.on_change = on_filter_change
    sort_field.on_change = on_filter_change

    def run_print(action) -> None:
        try:
            action(ctx, page)
        except OSError as exc:
            logger.error("Printable report could not be written", exc_info=True)
            controllers.notify_error(page, f"印刷用ファイルを書き出せませんでした: {exc}")

    list_tab = ft.Container(
        content=ft.Column(
            [
                ft.Row(
                    [
                        filter_field,
                        sort_field,
                        ft.FilledButton(
                            "明細を印刷",
                            icon=ft.Icons.PRINT,
                            on_click=lambda _: run_print(controllers.print_detail_report),
                        ),
                        ft.OutlinedButton(
                            "収支報告書を印刷",
                            icon=ft.Icons.SUMMARIZE,
                            on_click=lambda _: run_print(controllers.print_summary_report),
                        ),
                    ],
                    wrap=True,
                    spacing=12,
                ),
                ft.ResponsiveRow(
                    [
                        ft.Container(build_stat_card("選択収入", income_text, color=ft.Colors.BLUE), col={"md": 4}),
                        ft.Container(build_stat_card("選択支出", expense_text, color=ft.Colors.RED), col={"md": 4}),
                        ft.Container(build_stat_card("残高", balance_text), col={"md": 4}),
                    ]
                ),
                print_total_text,
                ft.Row([table], scroll=ft.ScrollMode.AUTO),
                empty_placeholder,
            ],
            spacing=12,
            scroll=ft.ScrollMode.AUTO,
            expand=True,
        ),
        padding=16,
        expand=True,
    )

    def on_tab_change(e):
        if e.control.selected_index == 1:
            render_table()

    tabs = ft.Tabs(
        selected_index=1,
        on_change=on_tab_change,
        tabs=[
            ft.Tab(text="入力", icon=ft.Icons.EDIT, content=input_tab),
            ft.Tab(text="一覧", icon=ft.Icons.LIST, content=list_tab),
        ],
        expand=True,
    )

    render_table()

    return ft.View(
        route="/ledger",
        appbar=build_app_bar(ctx, input_heading(session.fiscal_year), page),
        controls=[tabs],
        padding=0,
    )
