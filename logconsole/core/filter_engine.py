"""
Filter Engine Module - Level/pattern predicate and view recomputation

Handles:
- Case-insensitive pattern compilation (regex or literal substring)
- Level bitmask matching
- Capped, newest-first recomputation of the filtered view
"""
import logging
import re
from itertools import islice
from typing import Iterable, List, Optional, Pattern

from .log_entry import LogEntry, LogLevel


logger = logging.getLogger(__name__)


class InvalidPatternError(ValueError):
    """Raised when a filter pattern does not compile"""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid filter pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class FilterEngine:
    """
    Evaluates the filter predicate and rebuilds the filtered view

    An entry matches when its level bit is set in the level mask and, for a
    non-empty pattern, the pattern is found in its message, top file:line
    or top method. The compiled pattern is kept so newly written entries
    can be tested without recompiling.
    """

    def __init__(self, shown_limit: int = 100, regex: bool = True):
        """
        Initialize the filter engine

        Args:
            shown_limit: Maximum number of entries in the filtered view
            regex: Treat patterns as regular expressions (False = literal text)
        """
        self.shown_limit = shown_limit
        self.regex = regex
        self._pattern = ""
        self._level_mask = int(LogLevel.ALL)
        self._matcher: Optional[Pattern] = None

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def level_mask(self) -> int:
        return self._level_mask

    @property
    def matcher(self) -> Optional[Pattern]:
        return self._matcher

    def compile(self, pattern: str) -> Optional[Pattern]:
        """
        Compile a pattern into a case-insensitive matcher

        Returns:
            Compiled pattern, or None for an empty pattern

        Raises:
            InvalidPatternError: If the pattern is not a valid expression
        """
        if not pattern:
            return None

        source = pattern if self.regex else re.escape(pattern)
        try:
            return re.compile(source, re.IGNORECASE)
        except re.error as e:
            raise InvalidPatternError(pattern, str(e)) from e

    @staticmethod
    def matches(entry: LogEntry, matcher: Optional[Pattern], level_mask: int) -> bool:
        """Test one entry against a matcher and level mask"""
        if not entry.level & level_mask:
            return False
        if matcher is None:
            return True
        return bool(
            matcher.search(entry.message)
            or matcher.search(entry.top_file_line)
            or matcher.search(entry.top_method)
        )

    def accepts(self, entry: LogEntry) -> bool:
        """Test an entry against the current predicate"""
        return self.matches(entry, self._matcher, self._level_mask)

    def recompute(self, entries: Iterable[LogEntry], pattern: str, level_mask: int) -> List[LogEntry]:
        """
        Rebuild the filtered view from the full history

        Args:
            entries: Full history, newest first
            pattern: Text pattern (empty = match everything)
            level_mask: Bitmask of enabled LogLevel flags

        Returns:
            Up to shown_limit matching entries, newest first

        Raises:
            InvalidPatternError: If the pattern does not compile. The
                current predicate is left untouched in that case.
        """
        matcher = self.compile(pattern)

        self._pattern = pattern or ""
        self._level_mask = int(level_mask)
        self._matcher = matcher

        if matcher is None:
            # Fast path: no pattern evaluation at all
            selected = (entry for entry in entries if entry.level & self._level_mask)
        else:
            selected = (entry for entry in entries if self.matches(entry, matcher, self._level_mask))

        filtered = list(islice(selected, self.shown_limit))
        logger.debug(f"Recomputed filter {self._pattern!r} mask={self._level_mask}: {len(filtered)} entries")
        return filtered

    def reset(self) -> None:
        """Forget the current pattern and enable every level"""
        self._pattern = ""
        self._level_mask = int(LogLevel.ALL)
        self._matcher = None
