"""
Log Entry Module - Immutable captured log events

Handles:
- Severity levels as single-bit flags (filterable with a bitmask)
- Process-wide entry ids
- Entry construction with parsed stack frames
"""
import itertools
from dataclasses import dataclass
from enum import IntFlag
from typing import Tuple

from .stack_parser import StackFrame, parse_stack


NO_FRAME = "(-)"


class LogLevel(IntFlag):
    """Log severity levels"""
    DEBUG = 1
    WARN = 2
    ERROR = 4
    ALL = 7

    @property
    def word(self) -> str:
        """One-letter label used in the level column"""
        words = {
            LogLevel.DEBUG: "D",
            LogLevel.WARN: "W",
            LogLevel.ERROR: "E",
        }
        return words.get(self, "?")

    @property
    def color(self) -> str:
        """Get color representation for this log level"""
        colors = {
            LogLevel.DEBUG: "white",
            LogLevel.WARN: "yellow",
            LogLevel.ERROR: "red",
        }
        return colors.get(self, "white")


# Shared by every store so ids stay unique for the whole process
_entry_ids = itertools.count(1)


@dataclass(frozen=True)
class LogEntry:
    """Captured log event with parsed stack"""
    id: int
    level: LogLevel
    timestamp_ms: int
    context: str
    message: str
    raw_stack: str
    frames: Tuple[StackFrame, ...] = ()
    top_method: str = NO_FRAME
    top_file_line: str = NO_FRAME

    @property
    def level_word(self) -> str:
        return self.level.word

    @property
    def time_text(self) -> str:
        """Elapsed time as shown in the table, e.g. "1,234ms" """
        return f"{self.timestamp_ms:,}ms"

    def __str__(self) -> str:
        return self.message


def new_entry(level: LogLevel, elapsed_ms: int, context: str,
              message: str, raw_stack: str) -> LogEntry:
    """
    Build a log entry and assign it the next process-wide id

    Args:
        level: Severity of the event
        elapsed_ms: Milliseconds since the owning store was cleared
        context: Label of the active scene/context
        message: Log text
        raw_stack: Unparsed stack trace (may be empty)

    Returns:
        New LogEntry
    """
    raw_stack = raw_stack or ""
    frames = tuple(parse_stack(raw_stack))

    if frames:
        top_method = frames[0].method
        top_file_line = frames[0].file_line
    else:
        top_method = NO_FRAME
        top_file_line = NO_FRAME

    return LogEntry(
        id=next(_entry_ids),
        level=LogLevel(level),
        timestamp_ms=int(elapsed_ms),
        context=context or "",
        message=message or "",
        raw_stack=raw_stack,
        frames=frames,
        top_method=top_method,
        top_file_line=top_file_line
    )
