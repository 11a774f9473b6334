"""Navigation and routing for Flet desktop app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

import flet as ft

if TYPE_CHECKING:
    from .context import AppContext

from ..devtools import dev_log
from ..logging_config import get_logger
from .components.dialogs import show_error_dialog

logger = get_logger(__name__)

# View builder type
ViewBuilder = Callable[["AppContext", ft.Page], ft.View]

DEFAULT_ROUTE = "/ledger"
LOGIN_ROUTE = "/login"


class Router:
    """Handles routing and navigation for the Flet app."""

    def __init__(self, page: ft.Page, context: AppContext):
        self.page = page
        self.context = context
        self.routes: Dict[str, ViewBuilder] = {}

    def register(self, route: str, builder: ViewBuilder) -> None:
        """Register a route with its view builder."""
        logger.debug("Registering route: %s", route)
        self.routes[route] = builder

    def route_change(self, e: ft.RouteChangeEvent) -> None:
        """Handle route change events."""
        route = e.route or "/"
        logger.info("Route change requested: %s", route, extra={"logged_in": self.context.session is not None})

        # Every screen except the login needs a session
        if route != LOGIN_ROUTE and self.context.session is None:
            logger.info("Route blocked - not logged in")
            route = LOGIN_ROUTE

        if route not in self.routes:
            logger.warning("Route not registered: %s, defaulting to %s", route, DEFAULT_ROUTE)
            route = DEFAULT_ROUTE

        builder = self.routes.get(route)
        if not builder:
            logger.error("No builder found for route: %s", route)
            return

        try:
            view = builder(self.context, self.page)
            if self.page.views:
                self.page.views[-1] = view
            else:
                self.page.views.append(view)
            self.page.update()
            logger.info("Loaded view for route: %s", route)
        except Exception as ex:
            logger.error("Failed to build view for route %s: %s", route, ex, exc_info=True)
            dev_log(self.context.config, "Route load failed", exc=ex, context={"route": route})
            self.show_error(f"画面を表示できませんでした: {ex}")

    def view_pop(self, e: ft.ViewPopEvent) -> None:
        """Handle back button navigation."""
        if len(self.page.views) <= 1:
            return
        self.page.views.pop()
        top_view = self.page.views[-1]
        self.page.go(top_view.route)

    def show_error(self, message: str) -> None:
        """Display an error dialog."""
        show_error_dialog(self.page, "エラー", message)
