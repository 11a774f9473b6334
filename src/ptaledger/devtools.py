"""Dev-mode diagnostics routed through the package logger."""

from __future__ import annotations

from typing import Any, Mapping

from .config import BaseConfig
from .logging_config import get_logger

logger = get_logger("dev")


def in_dev_mode(config: BaseConfig | None) -> bool:
    return bool(getattr(config, "DEV_MODE", False)) if config is not None else False


def dev_log(
    config: BaseConfig | None,
    message: str,
    *,
    exc: BaseException | None = None,
    context: Mapping[str, Any] | None = None,
) -> None:
    """Log a ``[DEV]`` line with its context and traceback, only in dev mode.

    Context values are stringified into the message and also attached as
    ``extra`` so the JSON log keeps them as fields.
    """

    if not in_dev_mode(config):
        return

    details = " ".join(f"{key}={value}" for key, value in (context or {}).items())
    text = f"[DEV] {message} ({details})" if details else f"[DEV] {message}"
    exc_info = (type(exc), exc, exc.__traceback__) if exc is not None else None
    logger.info(text, exc_info=exc_info, extra={"dev_context": {k: str(v) for k, v in (context or {}).items()}})
