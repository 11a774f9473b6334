"""Main Flet desktop application entry point."""

from __future__ import annotations

import time

import flet as ft

from ..devtools import dev_log
from ..logging_config import session_log_path, setup_logging
from .context import create_app_context
from .navigation import Router
from .views.auth import build_auth_view
from .views.ledger import build_ledger_view
from .views.summary import build_summary_view


def main(page: ft.Page) -> None:
    """Main entry point for the Flet desktop app."""

    ctx = create_app_context()

    logger = setup_logging(ctx.config)
    logger.info("PTA ledger desktop application starting", extra={"api_url": ctx.config.API_URL})

    def on_page_close(_):
        logger.info("Application closing")
        ctx.end_session()
        slp = session_log_path()
        if slp:
            logger.info(f"Debug session log saved to: {slp}")

    page.on_close = on_page_close

    ctx.page = page
    page.title = f"{ctx.config.APP_NAME} (DEV)" if ctx.dev_mode else ctx.config.APP_NAME
    if ctx.dev_mode:
        dev_log(ctx.config, "Dev mode enabled", context={"data_dir": ctx.config.DATA_DIR})

    page.theme_mode = ft.ThemeMode.LIGHT
    page.padding = 0
    page.window_width = 1200
    page.window_height = 800
    page.window_min_width = 900
    page.window_min_height = 600
    transitions = ft.PageTransitionsTheme(
        android=ft.PageTransitionTheme.NONE,
        ios=ft.PageTransitionTheme.NONE,
        macos=ft.PageTransitionTheme.NONE,
        windows=ft.PageTransitionTheme.NONE,
    )
    page.theme = ft.Theme(page_transitions=transitions)

    router = Router(page, ctx)
    route_builders = {
        "/login": build_auth_view,
        "/": build_ledger_view,
        "/ledger": build_ledger_view,
        "/summary": build_summary_view,
    }
    for route, builder in route_builders.items():
        router.register(route, builder)

    page.on_route_change = router.route_change
    page.on_view_pop = router.view_pop

    # Flet can repeat the same error event many times per second
    _last_err_msg: str | None = None
    _last_err_ts: float = 0.0
    _suppress_count: int = 0

    def _on_error(e: ft.ControlEvent):  # pragma: no cover (UI callback)
        nonlocal _last_err_msg, _last_err_ts, _suppress_count
        msg = getattr(e, "data", None) or "<no-data>"
        now = time.time()
        if _last_err_msg == msg and (now - _last_err_ts) < 0.5:
            _suppress_count += 1
            _last_err_ts = now
            if _suppress_count % 100 == 0:
                logger.warning(
                    "Repeated Flet errors suppressed",
                    extra={"event": "error_suppressed", "error_message": msg, "suppressed": _suppress_count},
                )
            return
        _last_err_msg = msg
        _last_err_ts = now
        _suppress_count = 0
        logger.error("Flet page error", extra={"event": "error", "data": msg})

    page.on_error = _on_error

    page.go("/login")


if __name__ == "__main__":
    ft.app(target=main)
