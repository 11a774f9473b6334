"""Login view: passcode plus fiscal year."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from .. import controllers

if TYPE_CHECKING:  # pragma: no cover
    from ..context import AppContext


def build_auth_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the login view with the passcode field and year selector."""

    # Already logged in: go straight to the ledger
    if ctx.session is not None:
        page.go("/ledger")
        return ft.View(
            route="/login",
            controls=[ft.Container(content=ft.Text("Redirecting..."), padding=20)],
            padding=0,
        )

    years = ctx.config.FISCAL_YEARS
    year_field = ft.Dropdown(
        label="年度",
        options=[ft.dropdown.Option(year, f"{year}年度") for year in years],
        value=years[0] if years else None,
        width=300,
    )
    passcode_field = ft.TextField(
        label="合言葉",
        password=True,
        can_reveal_password=True,
        autofocus=True,
        width=300,
    )

    def do_login(_e):
        controllers.login(ctx, page, passcode_field.value or "", year_field.value or "")

    passcode_field.on_submit = do_login

    return ft.View(
        route="/login",
        controls=[
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Container(
                            content=ft.Icon(
                                ft.Icons.ACCOUNT_BALANCE_WALLET,
                                size=64,
                                color=ft.Colors.PRIMARY,
                            ),
                            alignment=ft.alignment.center,
                        ),
                        ft.Text(
                            "PTA会計",
                            size=32,
                            weight=ft.FontWeight.BOLD,
                            text_align=ft.TextAlign.CENTER,
                        ),
                        ft.Text(
                            "年度と合言葉を入力してください",
                            size=16,
                            color=ft.Colors.ON_SURFACE_VARIANT,
                            text_align=ft.TextAlign.CENTER,
                        ),
                        ft.Container(height=32),
                        year_field,
                        passcode_field,
                        ft.Container(height=16),
                        ft.FilledButton("ログイン", width=300, on_click=do_login),
                    ],
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    spacing=8,
                ),
                alignment=ft.alignment.center,
                expand=True,
            )
        ],
        padding=20,
    )
