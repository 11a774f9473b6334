"""Summary (収支報告書) view with print and export actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...services.ledger_service import CategoryTotal, calculate_summary
from ...services.presentation import format_amount, summary_heading
from ...services.reports import SUMMARY_HEADERS
from .. import controllers
from ..components import build_app_bar, build_card, build_stat_card

if TYPE_CHECKING:
    from ..context import AppContext


def _summary_table(totals: list[CategoryTotal], total_label: str, total) -> ft.DataTable:
    rows = [
        ft.DataRow(
            cells=[
                ft.DataCell(ft.Text(entry.item_name)),
                ft.DataCell(ft.Text(format_amount(entry.total_amount))),
            ]
        )
        for entry in totals
    ]
    rows.append(
        ft.DataRow(
            cells=[
                ft.DataCell(ft.Text(total_label, weight=ft.FontWeight.BOLD)),
                ft.DataCell(ft.Text(format_amount(total), weight=ft.FontWeight.BOLD)),
            ]
        )
    )
    return ft.DataTable(
        columns=[
            ft.DataColumn(ft.Text(SUMMARY_HEADERS[0])),
            ft.DataColumn(ft.Text(SUMMARY_HEADERS[1]), numeric=True),
        ],
        rows=rows,
    )


def build_summary_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the category summary for the logged-in fiscal year."""

    session = ctx.require_session()
    summary = calculate_summary(session.records, ctx.categories)

    def run_print(_e):
        try:
            controllers.print_summary_report(ctx, page)
        except OSError as exc:
            controllers.notify_error(page, f"印刷用ファイルを書き出せませんでした: {exc}")

    def run_export(fmt: str):
        try:
            controllers.export_summary(ctx, page, fmt)
        except OSError as exc:
            controllers.notify_error(page, f"書き出しに失敗しました: {exc}")

    balance_color = ft.Colors.BLUE if summary.final_balance >= 0 else ft.Colors.RED

    content = ft.Column(
        [
            ft.Row(
                [
                    ft.FilledButton(
                        "印刷",
                        icon=ft.Icons.PRINT,
                        on_click=run_print,
                    ),
                    ft.OutlinedButton("CSV出力", icon=ft.Icons.TABLE_VIEW, on_click=lambda _: run_export("csv")),
                    ft.OutlinedButton("グラフ出力", icon=ft.Icons.BAR_CHART, on_click=lambda _: run_export("png")),
                ],
                wrap=True,
                spacing=12,
            ),
            ft.ResponsiveRow(
                [
                    ft.Container(
                        build_stat_card(
                            "収入合計", ft.Text(format_amount(summary.total_income)), color=ft.Colors.BLUE
                        ),
                        col={"md": 4},
                    ),
                    ft.Container(
                        build_stat_card(
                            "支出合計", ft.Text(format_amount(summary.total_expense)), color=ft.Colors.RED
                        ),
                        col={"md": 4},
                    ),
                    ft.Container(
                        build_stat_card(
                            "差引残高", ft.Text(format_amount(summary.final_balance)), color=balance_color
                        ),
                        col={"md": 4},
                    ),
                ]
            ),
            ft.ResponsiveRow(
                [
                    ft.Container(
                        build_card(
                            "収入の部",
                            _summary_table(summary.income_summary, "収入合計", summary.total_income),
                        ),
                        col={"md": 6},
                    ),
                    ft.Container(
                        build_card(
                            "支出の部",
                            _summary_table(summary.expense_summary, "支出合計", summary.total_expense),
                        ),
                        col={"md": 6},
                    ),
                ]
            ),
        ],
        spacing=16,
        scroll=ft.ScrollMode.AUTO,
        expand=True,
    )

    return ft.View(
        route="/summary",
        appbar=build_app_bar(ctx, summary_heading(session.fiscal_year), page),
        controls=[ft.Container(content=content, padding=16, expand=True)],
        padding=0,
    )
