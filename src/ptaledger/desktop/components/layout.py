"""Layout components for the desktop app."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import flet as ft

if TYPE_CHECKING:
    from ..context import AppContext

from .. import controllers


def build_app_bar(ctx: AppContext, title: str, page: ft.Page) -> ft.AppBar:
    """Build the app bar with navigation, reload and logout actions."""

    def _reload(_e):
        if controllers.reload_records(ctx, page):
            controllers.show_snack(page, "最新のデータを読み込みました")
            page.go(getattr(page, "route", "/ledger"))

    quick_actions: List[ft.Control] = [
        ft.IconButton(
            icon=ft.Icons.TABLE_ROWS,
            tooltip="収支入力・一覧",
            on_click=lambda _: controllers.navigate(page, "/ledger"),
        ),
        ft.IconButton(
            icon=ft.Icons.SUMMARIZE,
            tooltip="収支報告書",
            on_click=lambda _: controllers.navigate(page, "/summary"),
        ),
        ft.IconButton(icon=ft.Icons.REFRESH, tooltip="再読み込み", on_click=_reload),
    ]
    if ctx.session:
        quick_actions.append(
            ft.Chip(
                label=ft.Text(
                    f"{ctx.session.fiscal_year}年度" + ("" if ctx.session.editable else " (閲覧のみ)")
                ),
                leading=ft.Icon(ft.Icons.CALENDAR_MONTH),
            )
        )
    quick_actions.append(
        ft.IconButton(
            icon=ft.Icons.LOGOUT,
            tooltip="ログアウト",
            on_click=lambda _: controllers.logout(ctx, page),
        )
    )

    return ft.AppBar(
        leading=ft.Icon(ft.Icons.ACCOUNT_BALANCE_WALLET),
        title=ft.Text(title, size=20, weight=ft.FontWeight.BOLD),
        center_title=False,
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        actions=quick_actions,
    )
