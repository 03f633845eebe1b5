"""Logging bootstrap for admin-panels.

The registry runs inside a host process, so by default only a stderr handler
is attached. A log file is written only when ADMIN_PANELS_LOG_FILE or
ADMIN_PANELS_LOG_DIR is set. Records logged with ``extra={"panel_id": ...}``
carry the panel they concern; others show ``panel=-``.

// [LAW:single-enforcer] Logger handler wiring is enforced in this module only.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "admin_panels"

_STREAM_FORMAT = "[%(name)s] %(levelname)s panel=%(panel_id)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s panel=%(panel_id)s %(message)s"


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""

    level_name: str
    level: int
    file_path: str | None


_RUNTIME: LoggingRuntime | None = None


class PanelContextFilter(logging.Filter):
    """Give every record a ``panel_id`` so the formats never fail."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "panel_id"):
            record.panel_id = "-"
        return True


def _parse_level(raw: str) -> tuple[str, int]:
    level = getattr(logging, str(raw or "INFO").strip().upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    return str(logging.getLevelName(level)), level


def _resolve_log_file(run_name: str) -> str | None:
    explicit = os.environ.get("ADMIN_PANELS_LOG_FILE")
    if explicit:
        return explicit
    log_dir = os.environ.get("ADMIN_PANELS_LOG_DIR")
    if not log_dir:
        return None
    safe = "".join(ch if ch.isalnum() else "-" for ch in run_name).strip("-") or "run"
    return str(Path(log_dir) / f"{safe}-{os.getpid()}.log")


def _make_handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%dT%H:%M:%S"))
    handler.addFilter(PanelContextFilter())
    return handler


def configure(run_name: str = "admin-panels", level: str | None = None) -> LoggingRuntime:
    """Configure the admin_panels logger. Idempotent."""
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level_value = _parse_level(level or os.environ.get("ADMIN_PANELS_LOG_LEVEL", "INFO"))
    file_path = _resolve_log_file(run_name)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_value)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(_make_handler(logging.StreamHandler(), level_value, _STREAM_FORMAT))
    if file_path is not None:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(file_path, maxBytes=1024 * 1024, backupCount=2, encoding="utf-8")
        logger.addHandler(_make_handler(file_handler, level_value, _FILE_FORMAT))

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level_value, file_path=file_path)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    """Return configured logging runtime, if configure() has run."""
    return _RUNTIME


def reset() -> None:
    """Detach handlers and forget the runtime so configure() can run again."""
    global _RUNTIME
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    _RUNTIME = None
