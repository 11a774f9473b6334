"""Dialog components for the desktop app."""

from __future__ import annotations

from typing import Callable, Optional

import flet as ft


def safe_open_dialog(page: ft.Page, dialog: ft.AlertDialog) -> None:
    """Open a dialog and best-effort refresh without raising when detached."""

    if callable(getattr(page, "open", None)):
        page.open(dialog)
        return
    page.dialog = dialog
    dialog.open = True
    try:
        page.update()
    except AssertionError:
        # Headless/preview contexts may not attach the dialog to a live page
        pass


def _close(page: ft.Page, dialog: ft.AlertDialog) -> None:
    dialog.open = False
    try:
        page.update()
    except AssertionError:
        pass


def show_error_dialog(page: ft.Page, title: str, message: str) -> ft.AlertDialog:
    """Show a blocking error/notice dialog."""

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
    )
    dialog.actions = [ft.TextButton("OK", on_click=lambda _: _close(page, dialog))]
    safe_open_dialog(page, dialog)
    return dialog


def show_confirm_dialog(
    page: ft.Page,
    title: str,
    message: str,
    on_confirm: Callable[[], None],
    on_cancel: Optional[Callable[[], None]] = None,
) -> ft.AlertDialog:
    """Show a confirmation dialog."""

    def handle_confirm(_e):
        _close(page, dialog)
        on_confirm()

    def handle_cancel(_e):
        _close(page, dialog)
        if on_cancel:
            on_cancel()

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
        actions=[
            ft.TextButton("キャンセル", on_click=handle_cancel),
            ft.FilledButton("OK", on_click=handle_confirm),
        ],
    )
    safe_open_dialog(page, dialog)
    return dialog
