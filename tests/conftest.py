"""Pytest configuration and shared fixtures for PTA ledger tests.

Provides an isolated configuration, record factories and fake transport
objects so client, controller and view tests never touch the network.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import flet as ft
import pytest
import requests

from ptaledger.config import BaseConfig
from ptaledger.models import LedgerRecord, LedgerSession

# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> BaseConfig:
    """Configuration rooted in a temporary data directory."""

    monkeypatch.setenv("PTALEDGER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("PTALEDGER_API_URL", "https://ledger.example.test/exec")
    monkeypatch.setenv("PTALEDGER_FISCAL_YEARS", "2024,2023")
    monkeypatch.setenv("PTALEDGER_DEV_MODE", "false")
    monkeypatch.delenv("PTALEDGER_CATEGORIES_FILE", raising=False)
    monkeypatch.delenv("PTALEDGER_TIMEZONE", raising=False)
    return BaseConfig()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def record_factory() -> Callable[..., LedgerRecord]:
    """Factory for ledger records built through the wire parser."""

    def _create(
        row_number: int = 1,
        occurred_on: str = "2024-05-01",
        item: str = "本年度会費",
        amount: Any = "1000",
        details: str = "",
        payee: str = "",
        memo: str = "",
    ) -> LedgerRecord:
        return LedgerRecord.from_row([row_number, occurred_on, item, details, amount, payee, memo])

    return _create


@pytest.fixture
def scenario_rows() -> list[list[Any]]:
    """One income row and one expense row, as the service sends them."""

    return [
        [1, "2024-05-01", "本年度会費", "", "5000", "", ""],
        [2, "2024-05-02", "備品・消耗品費", "", "2000", "", ""],
    ]


@pytest.fixture
def scenario_records(scenario_rows) -> list[LedgerRecord]:
    return [LedgerRecord.from_row(row) for row in scenario_rows]


@pytest.fixture
def session(scenario_records) -> LedgerSession:
    ledger_session = LedgerSession(passcode="secret", fiscal_year="2024")
    ledger_session.replace_records(scenario_records, editable=True)
    return ledger_session


# =============================================================================
# Fake transport
# =============================================================================


class FakeResponse:
    """Stand-in for ``requests.Response`` with a fixed status and body."""

    def __init__(self, payload: Any = None, *, status_code: int = 200, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload, ensure_ascii=False)

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error", response=self)

    def json(self) -> Any:
        try:
            return json.loads(self.text)
        except json.JSONDecodeError as exc:
            raise requests.JSONDecodeError(exc.msg, exc.doc, exc.pos) from exc


class FakeHttp:
    """Records POSTs and replays queued responses (or raises queued errors)."""

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def post(self, url: str, *, data: bytes, headers: dict[str, str], timeout: float) -> FakeResponse:
        self.calls.append(
            {"url": url, "body": json.loads(data.decode("utf-8")), "headers": headers, "timeout": timeout}
        )
        if not self.responses:
            raise AssertionError("unexpected request")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, FakeResponse):
            return response
        return FakeResponse(response)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_http() -> FakeHttp:
    return FakeHttp()


# =============================================================================
# Page stub
# =============================================================================


class PageStub:
    """Minimal stand-in for flet.Page used by controllers, views and the router."""

    def __init__(self):
        self.views: list[ft.View] = []
        self.route: str = "/"
        self.title: str = "PTA Ledger"
        self.snack_bar = None
        self.dialog = None
        self.overlay: list[ft.Control] = []
        self.launched: list[str] = []
        self.updates = 0
        self.padding = 0
        self.theme_mode = ft.ThemeMode.LIGHT

    def go(self, route: str):
        self.route = route

    def update(self):
        self.updates += 1

    def launch_url(self, url: str):
        self.launched.append(url)


@pytest.fixture
def page() -> PageStub:
    return PageStub()
