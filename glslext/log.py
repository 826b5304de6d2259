"""
glslext.log - Logging module with proper Python exception handling.

Usage:
    from glslext import log

    log.info("Hello")
    log.warn("Something wrong")

    try:
        do_something()
    except Exception as e:
        log.error(e, "Failed to do something")  # includes traceback

Records go to the "glslext" logger. A callback installed with
set_callback() receives every record as (level, message).
"""

from __future__ import annotations

import logging
import sys
import traceback
from enum import IntEnum
from typing import Callable

_logger = logging.getLogger("glslext")


class Level(IntEnum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR


_callback: Callable[[Level, str], None] | None = None


def _emit(level: Level, msg: str) -> None:
    _logger.log(level, msg)
    if _callback is not None and _logger.isEnabledFor(level):
        _callback(level, msg)


def debug(msg_or_exc, context: str = ""):
    """Log debug message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.DEBUG, msg_or_exc, context)
    else:
        _emit(Level.DEBUG, str(msg_or_exc))


def info(msg_or_exc, context: str = ""):
    """Log info message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.INFO, msg_or_exc, context)
    else:
        _emit(Level.INFO, str(msg_or_exc))


def warn(msg_or_exc, context: str = ""):
    """Log warning message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.WARN, msg_or_exc, context)
    else:
        _emit(Level.WARN, str(msg_or_exc))


def warning(msg_or_exc, context: str = ""):
    """Alias for warn()."""
    warn(msg_or_exc, context)


def error(msg_or_exc, context: str = ""):
    """Log error message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.ERROR, msg_or_exc, context)
    else:
        _emit(Level.ERROR, str(msg_or_exc))


def exception(msg: str = ""):
    """Log error with current exception traceback."""
    tb = traceback.format_exc()
    _emit(Level.ERROR, f"{msg}\n{tb}" if msg else tb)


def _log_exception(level: Level, exc: BaseException, context: str):
    """Format and log exception with traceback."""
    exc_type = type(exc).__name__
    exc_msg = str(exc)

    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    if context:
        full_msg = f"{context}: {exc_type}: {exc_msg}\n{tb}"
    else:
        full_msg = f"{exc_type}: {exc_msg}\n{tb}"

    _emit(level, full_msg)


def set_level(level: Level) -> None:
    """Set minimal level of records that are emitted."""
    _logger.setLevel(level)


class _ConsoleHandler(logging.StreamHandler):
    """StreamHandler bound to whatever sys.stderr is at emit time."""

    def __init__(self):
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stderr


def setup_console(level: Level = Level.INFO) -> None:
    """Print records to stderr. Used by command-line entry points."""
    handler = _ConsoleHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    _logger.handlers[:] = [handler]
    _logger.setLevel(level)
    _logger.propagate = False


def set_callback(callback: Callable[[Level, str], None] | None) -> None:
    """Install (or remove with None) a callback receiving every record."""
    global _callback
    _callback = callback
