"""Logging for the ledger app.

The ``ptaledger`` logger gets three handlers: a console handler (INFO in dev
mode, WARNING otherwise), a rotating JSON-lines file under
``<DATA_DIR>/logs`` and an in-memory session buffer that is written to a
timestamped file at interpreter exit. Modules log through ``get_logger``.
"""

from __future__ import annotations

import atexit
import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .config import BaseConfig

PACKAGE_LOGGER = "ptaledger"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

# Never written to any handler, even when passed through ``extra``
SENSITIVE_FIELDS = frozenset({"passcode"})

_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}

_started_at = datetime.now()
_session_handler: Optional["SessionBufferHandler"] = None
_exit_hook_installed = False


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: ("***" if key in SENSITIVE_FIELDS else value)
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line; ``extra=`` values land under ``"extra"``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": self.formatException(record.exc_info),
            }
        extra = _extra_fields(record)
        if extra:
            entry["extra"] = extra
        return json.dumps(entry, default=str, ensure_ascii=False)


class SessionBufferHandler(logging.Handler):
    """Keeps every formatted line of this run so it can be saved on exit."""

    def __init__(self, formatter: logging.Formatter):
        super().__init__(level=logging.DEBUG)
        self.setFormatter(formatter)
        self.lines: list[str] = []
        self.target: Optional[Path] = None

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.lines.append(self.format(record))
        except Exception:
            self.handleError(record)

    def flush_to_disk(self) -> Optional[Path]:
        """Write the buffered lines to ``target``; returns the path written."""

        if self.target is None or not self.lines:
            return None
        self.target.parent.mkdir(parents=True, exist_ok=True)
        header = [
            "# PTA Ledger session log",
            f"# Started: {_started_at.isoformat()}",
            f"# Entries: {len(self.lines)}",
            "",
        ]
        self.target.write_text("\n".join(header + self.lines) + "\n", encoding="utf-8")
        return self.target


def _flush_session_at_exit() -> None:
    if _session_handler is None:
        return
    try:
        _session_handler.flush_to_disk()
    except OSError as exc:
        logging.getLogger(PACKAGE_LOGGER).warning("Failed to write session log: %s", exc)


def _console_handler(dev_mode: bool) -> logging.StreamHandler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO if dev_mode else logging.WARNING)
    if dev_mode:
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s", "%H:%M:%S"
        )
    else:
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", "%Y-%m-%d %H:%M:%S")
    handler.setFormatter(formatter)
    return handler


def _json_file_handler(path: Path) -> logging.handlers.RotatingFileHandler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(config: BaseConfig) -> logging.Logger:
    """(Re)configure the package logger from ``config`` and return it.

    Calling it again replaces the handlers instead of stacking new ones.
    """
    global _session_handler, _exit_hook_installed

    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.INFO)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console = _console_handler(bool(config.DEV_MODE))
    log_file = logs_dir / config.LOG_FILENAME
    session = SessionBufferHandler(console.formatter)
    session.target = logs_dir / _started_at.strftime("session_%Y%m%d_%H%M%S.log")
    if _session_handler is not None:
        session.lines = _session_handler.lines

    for handler in (console, _json_file_handler(log_file), session):
        package_logger.addHandler(handler)

    _session_handler = session
    if not _exit_hook_installed:
        atexit.register(_flush_session_at_exit)
        _exit_hook_installed = True

    package_logger.info(
        "Logging initialized",
        extra={"dev_mode": config.DEV_MODE, "log_file": str(log_file), "data_dir": str(config.DATA_DIR)},
    )
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``ptaledger`` namespace (``__name__`` is accepted as-is)."""

    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def session_log_path() -> Optional[Path]:
    """Where the session buffer will be written at exit, once logging is set up."""

    return _session_handler.target if _session_handler is not None else None
