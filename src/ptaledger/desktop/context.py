"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

import flet as ft

from ..config import BaseConfig
from ..constants.categories import FILTER_ALL, SORT_ASC, CategorySets
from ..models.session import LedgerSession
from ..services.api_client import LedgerApiClient

ClientFactory = Callable[[BaseConfig, LedgerSession], LedgerApiClient]


def default_client_factory(config: BaseConfig, session: LedgerSession) -> LedgerApiClient:
    return LedgerApiClient(config, session)


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    # Configuration
    config: BaseConfig
    categories: CategorySets
    client_factory: ClientFactory = default_client_factory

    # Session state, created by a successful login
    session: Optional[LedgerSession] = None
    api_client: Optional[LedgerApiClient] = None

    # UI State
    filter_key: str = FILTER_ALL
    sort_order: str = SORT_ASC
    unchecked_rows: set = field(default_factory=set)

    # Page reference (set after initialization)
    page: Optional[ft.Page] = None
    dev_mode: bool = False

    def require_session(self) -> LedgerSession:
        """Return the active session or raise if nobody is logged in."""

        if self.session is None:
            raise RuntimeError("Not logged in")
        return self.session

    def require_client(self) -> LedgerApiClient:
        if self.api_client is None:
            raise RuntimeError("Not logged in")
        return self.api_client

    def reset_selection(self) -> None:
        """Tick every row again, as a freshly rendered table does."""
        self.unchecked_rows.clear()

    def end_session(self) -> None:
        if self.api_client is not None:
            self.api_client.close()
        self.session = None
        self.api_client = None
        self.filter_key = FILTER_ALL
        self.sort_order = SORT_ASC
        self.reset_selection()


def create_app_context(
    config: Optional[BaseConfig] = None,
    client_factory: Optional[ClientFactory] = None,
) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    return AppContext(
        config=config,
        categories=config.CATEGORIES,
        client_factory=client_factory or default_client_factory,
        dev_mode=config.DEV_MODE,
    )
