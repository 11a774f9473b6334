"""Reusable widget components for the desktop app."""

from __future__ import annotations

from typing import Optional

import flet as ft


def build_card(
    title: str,
    content: ft.Control,
    actions: Optional[list[ft.Control]] = None,
) -> ft.Card:
    """Build a standard card with title and content."""

    header = ft.Container(
        content=ft.Text(title, size=18, weight=ft.FontWeight.BOLD),
        padding=ft.padding.only(left=16, right=16, top=16, bottom=8),
    )

    card_content = ft.Column(
        [
            header,
            ft.Divider(height=1),
            ft.Container(content=content, padding=16),
        ],
        spacing=0,
    )

    if actions:
        card_content.controls.append(
            ft.Container(
                content=ft.Row(actions, alignment=ft.MainAxisAlignment.END),
                padding=ft.padding.only(left=16, right=16, bottom=16),
            )
        )

    return ft.Card(content=card_content, elevation=2)


def build_stat_card(
    label: str,
    value_text: ft.Text,
    icon: Optional[str] = None,
    color: Optional[str] = None,
) -> ft.Card:
    """Build a statistic card around a live ``ft.Text`` the caller keeps updating."""

    value_text.size = 24
    value_text.weight = ft.FontWeight.BOLD
    value_text.color = color

    content_column = ft.Column(
        [value_text, ft.Text(label, size=14, color=ft.Colors.ON_SURFACE_VARIANT)],
        spacing=4,
        horizontal_alignment=ft.CrossAxisAlignment.START,
    )

    card_content: ft.Control = content_column
    if icon:
        card_content = ft.Row(
            [
                ft.Icon(icon, size=32, color=color or ft.Colors.PRIMARY),
                ft.Container(width=12),
                content_column,
            ],
            alignment=ft.MainAxisAlignment.START,
        )

    return ft.Card(content=ft.Container(content=card_content, padding=16), elevation=2)


def empty_state(message: str) -> ft.Container:
    """Simple empty-state placeholder."""

    return ft.Container(
        content=ft.Column(
            [
                ft.Icon(ft.Icons.INBOX, size=40, color=ft.Colors.ON_SURFACE_VARIANT),
                ft.Text(message, color=ft.Colors.ON_SURFACE_VARIANT),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        padding=20,
    )
