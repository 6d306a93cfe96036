# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Loguru setup with a per-request correlation id."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <lvl>{message}</lvl>"
)

_NO_CORRELATION = "-"
_correlation_id: ContextVar[str] = ContextVar("sharelink_correlation_id", default=_NO_CORRELATION)

# Records emitted before setup_logging() still need the extra key for the format
_logger.configure(extra={"correlation_id": _NO_CORRELATION})

_NOISY_LOGGERS = {
    "werkzeug": logging.INFO,
    "urllib3": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "cloudinary": logging.WARNING,
}


class _StdlibBridge(logging.Handler):
    """Route stdlib ``logging`` records (werkzeug, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.bind(correlation_id=_correlation_id.get()).opt(
            depth=6, exception=record.exc_info
        ).log(level, record.getMessage())


class _CorrelatedLogger:
    """Every attribute lookup returns loguru bound to the current correlation id."""

    def __getattr__(self, name: str) -> Any:
        return getattr(_logger.bind(correlation_id=_correlation_id.get()), name)


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or _NO_CORRELATION)


def get_correlation_id() -> str:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set(_NO_CORRELATION)


def _sink_options(level: str) -> dict[str, Any]:
    return {
        "level": level,
        "format": LOG_FORMAT,
        "filter": sanitize_record,
        "backtrace": False,
        "diagnose": False,
    }


def setup_logging(level: str = "INFO", *, log_file: str | None = None, debug_mode: bool = False) -> None:
    level = "DEBUG" if debug_mode else level.upper()

    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **_sink_options(level))
    if log_file:
        _logger.add(
            log_file,
            colorize=False,
            enqueue=True,
            encoding="utf-8",
            rotation="10 MB",
            retention=5,
            **_sink_options(level),
        )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name, noisy_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)


logger = _CorrelatedLogger()

__all__ = [
    "LOG_FORMAT",
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
