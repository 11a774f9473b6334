"""Reusable UI components for the desktop app."""

from .dialogs import safe_open_dialog, show_confirm_dialog, show_error_dialog
from .layout import build_app_bar
from .widgets import build_card, build_stat_card, empty_state

__all__ = [
    "build_app_bar",
    "safe_open_dialog",
    "show_error_dialog",
    "show_confirm_dialog",
    "build_card",
    "build_stat_card",
    "empty_state",
]
