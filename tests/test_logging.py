"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from ptaledger.devtools import dev_log
from ptaledger.logging_config import JSONFormatter, SessionBufferHandler, get_logger, session_log_path, setup_logging


def _record(level=logging.INFO, msg="Test message", exc_info=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    return record


def test_json_formatter():
    """JSONFormatter emits the standard fields."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(logging.ERROR, "Error occurred", exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_keeps_extra_fields_and_japanese_text():
    record = _record(msg="保存しました")
    record.year = "2024"

    line = JSONFormatter().format(record)
    log_data = json.loads(line)

    assert "保存しました" in line
    assert log_data["extra"] == {"year": "2024"}


def test_setup_logging(config, tmp_path):
    """Setup creates the rotating JSON log plus console and session handlers."""
    config.DATA_DIR = str(tmp_path)
    config.DEV_MODE = True

    logger = setup_logging(config)

    assert logger.name == "ptaledger"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 3  # Console + File + Session buffer
    assert any(isinstance(h, SessionBufferHandler) for h in logger.handlers)

    log_file = tmp_path / "logs" / "ptaledger.log"
    assert log_file.exists()

    logger.info("Test info message")
    logger.warning("Test warning message")

    for line in log_file.read_text(encoding="utf-8").strip().splitlines():
        log_entry = json.loads(line)
        assert "timestamp" in log_entry
        assert "level" in log_entry
        assert "message" in log_entry


def test_setup_logging_twice_does_not_duplicate_handlers(config, tmp_path):
    config.DATA_DIR = str(tmp_path)
    setup_logging(config)
    logger = setup_logging(config)
    assert len(logger.handlers) == 3


def test_get_logger():
    """get_logger namespaces module loggers under the package logger."""
    assert get_logger("module1").name == "ptaledger.module1"
    assert get_logger("ptaledger.services.api_client").name == "ptaledger.services.api_client"
    assert get_logger("module1") is not get_logger("module2")


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(config, tmp_path, dev_mode):
    """Console logging level adjusts based on dev mode."""
    config.DATA_DIR = str(tmp_path)
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = next(
        h
        for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.handlers.RotatingFileHandler)
    )
    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handler.level == expected_level


def test_dev_log_only_logs_in_dev_mode(config, caplog):
    caplog.set_level(logging.INFO, logger="ptaledger")
    config.DEV_MODE = False
    dev_log(config, "hidden")
    assert not caplog.records

    config.DEV_MODE = True
    try:
        raise RuntimeError("boom")
    except RuntimeError as exc:
        dev_log(config, "Route load failed", exc=exc, context={"route": "/summary"})

    record = caplog.records[-1]
    assert record.name == "ptaledger.dev"
    assert record.getMessage() == "[DEV] Route load failed (route=/summary)"
    assert record.exc_info[0] is RuntimeError
    assert record.dev_context == {"route": "/summary"}


def test_json_formatter_masks_passcodes():
    record = _record()
    record.passcode = "secret"

    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["extra"] == {"passcode": "***"}


def test_session_buffer_writes_collected_lines(config, tmp_path):
    config.DATA_DIR = str(tmp_path)
    logger = setup_logging(config)
    session = next(h for h in logger.handlers if isinstance(h, SessionBufferHandler))

    logger.info("Ledger records fetched")
    written = session.flush_to_disk()

    assert written == session_log_path()
    assert written.parent == tmp_path / "logs"
    assert "Ledger records fetched" in written.read_text(encoding="utf-8")
