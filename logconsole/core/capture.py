"""
Capture Module - Feeding host log events into a LogStore

Handles:
- Mapping host severity categories onto DEBUG/WARN/ERROR
- A logging.Handler that writes Python log records into the store
- Rendering Python tracebacks as call-site lines the stack parser reads
"""
import logging
import traceback
from typing import Optional

from .log_entry import LogLevel
from .log_store import LogStore
from .stack_parser import format_frame


# Records from the console itself are never captured
OWN_LOGGER_PREFIX = "logconsole"

ERROR_CATEGORIES = {"error", "exception", "assert", "assertion"}
WARN_CATEGORIES = {"warning", "warn"}


def classify(category: str) -> LogLevel:
    """
    Map a host log category to a console level

    Errors, exceptions and assertions are ERROR, warnings are WARN and
    every other category is DEBUG.
    """
    category = (category or "").strip().lower()
    if category in ERROR_CATEGORIES:
        return LogLevel.ERROR
    if category in WARN_CATEGORIES:
        return LogLevel.WARN
    return LogLevel.DEBUG


def level_for_record(record: logging.LogRecord) -> LogLevel:
    if record.levelno >= logging.ERROR:
        return LogLevel.ERROR
    if record.levelno >= logging.WARNING:
        return LogLevel.WARN
    return LogLevel.DEBUG


def stack_for_record(record: logging.LogRecord) -> str:
    """
    Build raw stack text for a record, innermost call first

    Uses the traceback of an attached exception, otherwise the call site
    that emitted the record.
    """
    if record.exc_info and record.exc_info[2] is not None:
        frames = traceback.extract_tb(record.exc_info[2])
        lines = [format_frame(frame.name, frame.filename, frame.lineno) for frame in reversed(frames)]
        return "\n".join(lines)

    return format_frame(record.funcName or record.module, record.pathname, record.lineno)


class ConsoleHandler(logging.Handler):
    """Logging handler that writes records into a LogStore"""

    def __init__(self, store: LogStore, level: int = logging.NOTSET):
        super().__init__(level)
        self.store = store
        self.previous_level: Optional[int] = None  # set by install()

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == OWN_LOGGER_PREFIX or record.name.startswith(OWN_LOGGER_PREFIX + "."):
            return False
        return super().filter(record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.store.write(
                level_for_record(record),
                record.getMessage(),
                stack_for_record(record),
                context=record.threadName
            )
        except Exception:
            self.handleError(record)


def install(store: LogStore, logger: Optional[logging.Logger] = None,
            level: int = logging.DEBUG) -> ConsoleHandler:
    """
    Attach a ConsoleHandler to a logger (the root logger by default)

    The logger level is lowered to `level` when needed; the previous level
    is kept on the handler and restored by uninstall().

    Returns:
        The installed handler, for uninstall()
    """
    logger = logger or logging.getLogger()
    handler = ConsoleHandler(store)
    handler.previous_level = logger.level
    logger.addHandler(handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    return handler


def uninstall(handler: ConsoleHandler, logger: Optional[logging.Logger] = None) -> None:
    """Detach a handler returned by install() and restore the logger level"""
    logger = logger or logging.getLogger()
    logger.removeHandler(handler)
    if handler.previous_level is not None:
        logger.setLevel(handler.previous_level)
        handler.previous_level = None
