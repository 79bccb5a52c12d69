"""Runtime monitoring and logging helpers for romsift."""

from __future__ import annotations

import logging
import os
import sys
import threading
import traceback
from datetime import date
from pathlib import Path
from typing import Optional

LOGGER_NAME = "romsift"

_INITIALIZED = False
_SESSION_LOG_DATE: Optional[date] = None
_FORMATTER = logging.Formatter(
    fmt="%(asctime)s | %(levelname)s | %(threadName)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _default_log_path() -> Path:
    from .shared_config import LOGS_DIR

    base = Path(LOGS_DIR)
    base.mkdir(parents=True, exist_ok=True)
    session_day = _SESSION_LOG_DATE or date.today()
    return base / f"runtime-{session_day.isoformat()}.log"


def _default_events_path() -> Path:
    from .shared_config import LOGS_DIR

    return Path(LOGS_DIR) / "events.log"


def get_log_path() -> Path:
    """Return the active runtime log path for this session."""
    return _default_log_path()


def setup_runtime_monitor(app_name: str = LOGGER_NAME) -> logging.Logger:
    """Initialize global runtime monitoring/logging once per process."""
    global _INITIALIZED, _SESSION_LOG_DATE
    logger = logging.getLogger(app_name)

    if _INITIALIZED:
        return logger

    logger.setLevel(logging.INFO)
    logger.propagate = False

    if _SESSION_LOG_DATE is None:
        _SESSION_LOG_DATE = date.today()

    log_path = _default_log_path()
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(_FORMATTER)
    logger.addHandler(file_handler)

    logger.info("Runtime monitor initialized")
    logger.info("Log file: %s", log_path)

    _install_exception_hooks(logger)

    _INITIALIZED = True
    return logger


def _install_exception_hooks(logger: logging.Logger) -> None:
    def _print_to_terminal(exc_type, exc_value, exc_tb, *, prefix: str | None = None) -> None:
        stream = getattr(sys, "__stderr__", None) or sys.stderr
        if stream is None:
            return
        if prefix:
            print(prefix, file=stream)
        traceback.print_exception(exc_type, exc_value, exc_tb, file=stream)
        stream.flush()

    def _sys_hook(exc_type, exc_value, exc_tb):
        if exc_type and issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        logger.critical("Unhandled exception", exc_info=(exc_type, exc_value, exc_tb))
        _print_to_terminal(exc_type, exc_value, exc_tb, prefix="[romsift] Unhandled exception")

    def _thread_hook(args: threading.ExceptHookArgs):
        thread_name = args.thread.name if args.thread else "<unknown>"
        logger.critical(
            "Unhandled thread exception in %s",
            thread_name,
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )
        _print_to_terminal(
            args.exc_type,
            args.exc_value,
            args.exc_traceback,
            prefix=f"[romsift] Unhandled thread exception ({thread_name})",
        )

    sys.excepthook = _sys_hook
    threading.excepthook = _thread_hook


def setup_monitoring(log_file: Optional[str] = None, echo: bool = False,
                     level: int = logging.INFO) -> logging.Logger:
    """
    Attach an event log file (and optionally stderr echo) to the romsift logger.

    Calling it again with the same file does not add a second handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    path = Path(log_file) if log_file else _default_events_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    target = os.path.abspath(str(path))

    has_file = any(
        isinstance(h, logging.FileHandler) and h.baseFilename == target
        for h in logger.handlers
    )
    if not has_file:
        file_handler = logging.FileHandler(target, encoding="utf-8")
        file_handler.setFormatter(_FORMATTER)
        logger.addHandler(file_handler)

    has_echo = any(getattr(h, "_romsift_echo", False) for h in logger.handlers)
    if echo and not has_echo:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(_FORMATTER)
        stream_handler._romsift_echo = True
        logger.addHandler(stream_handler)

    return logger


def log_event(event: str, message: str, level: int = logging.INFO) -> None:
    """Emit a named event record, e.g. log_event('filter.done', 'kept 12 of 40')."""
    logging.getLogger(LOGGER_NAME).log(level, "%s | %s", event, message)


def monitor_action(action: str, *, logger: Optional[logging.Logger] = None) -> None:
    """Emit a real-time action event."""
    (logger or logging.getLogger(LOGGER_NAME)).info("action: %s", action)


class _Monitor:
    """Category-tagged logging used by the persistence layers."""

    def _log(self, level: int, category: str, message: str) -> None:
        logging.getLogger(LOGGER_NAME).log(level, "[%s] %s", category, message)

    def info(self, category: str, message: str) -> None:
        self._log(logging.INFO, category, message)

    def warning(self, category: str, message: str) -> None:
        self._log(logging.WARNING, category, message)

    def error(self, category: str, message: str) -> None:
        self._log(logging.ERROR, category, message)


monitor = _Monitor()
