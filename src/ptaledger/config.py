"""Application configuration objects and helpers."""

from __future__ import annotations

import json
import os
from datetime import date
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from .constants.categories import CategorySets

load_dotenv()

DEFAULT_API_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbzT6TAja9-u1ShiuioVlvxLZSoQxMUCpSR5tTSHDfnDCnjHqhmc7VWZbdojP7b3uFJIMw/exec"
)


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


def load_category_sets(path: str | os.PathLike[str] | None) -> CategorySets:
    """Return configured income/expense names, falling back to the PTA defaults.

    The file is JSON shaped as ``{"income": [...], "expense": [...]}``.
    """

    if not path:
        return CategorySets()
    source = Path(path).expanduser()
    try:
        payload: Any = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read category file {source}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Category file {source} must contain a JSON object")
    income = payload.get("income")
    expense = payload.get("expense")
    if not isinstance(income, list) or not isinstance(expense, list):
        raise ValueError(f"Category file {source} needs 'income' and 'expense' lists")
    return CategorySets(
        income_names=tuple(str(name) for name in income),
        expense_names=tuple(str(name) for name in expense),
    )


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "PTA Ledger"
    LOG_FILENAME = "ptaledger.log"
    EXPORT_DIRNAME = "exports"
    PRINT_TITLE_RESTORE_SECONDS = 1.0

    def __init__(self) -> None:
        self.API_URL = os.getenv("PTALEDGER_API_URL", DEFAULT_API_URL)
        self.API_TIMEOUT = _env_float("PTALEDGER_API_TIMEOUT", 15.0)
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("PTALEDGER_DEV_MODE", default=True)
        self.TIMEZONE = os.getenv("PTALEDGER_TIMEZONE") or "Asia/Tokyo"
        try:
            ZoneInfo(self.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"PTALEDGER_TIMEZONE is not a known time zone: {self.TIMEZONE!r}") from exc
        self.FISCAL_YEARS = self._resolve_fiscal_years()
        self.CATEGORIES = load_category_sets(os.getenv("PTALEDGER_CATEGORIES_FILE"))
        if not self.API_URL.startswith(("http://", "https://")):
            raise ValueError("PTALEDGER_API_URL must be an http(s) URL.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and exported reports live."""

        data_root = os.getenv("PTALEDGER_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            local_app_data = os.getenv("LOCALAPPDATA") or (Path.home() / "AppData" / "Local")
            fallback_path = Path(local_app_data).expanduser() / "ptaledger"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _resolve_fiscal_years(self) -> list[str]:
        raw = os.getenv("PTALEDGER_FISCAL_YEARS", "")
        years = [part.strip() for part in raw.split(",") if part.strip()]
        if years:
            return years
        # Japanese fiscal years start in April.
        today = date.today()
        current = today.year if today.month >= 4 else today.year - 1
        return [str(current - offset) for offset in range(3)]

    @property
    def exports_dir(self) -> Path:
        path = Path(self.DATA_DIR) / self.EXPORT_DIRNAME
        path.mkdir(parents=True, exist_ok=True)
        return path


class DevConfig(BaseConfig):
    """Development configuration with verbose diagnostics."""

    DEBUG = True
    TESTING = False
