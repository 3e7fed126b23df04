"""
Log Store Module - Bounded log history and the filtered view

Handles:
- Newest-first history capped at history_limit entries
- Incremental maintenance of the filtered view on every write
- Full recomputation of the filtered view on filter changes
- Clearing with an elapsed-time clock reset
- Per-level statistics

All mutable state is guarded by a single lock so writes coming from
logging handlers on other threads stay atomic (append + evict).
"""
import logging
import threading
import time
from collections import Counter, deque
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..settings import ConsoleSettings
from .filter_engine import FilterEngine, InvalidPatternError
from .log_entry import LogEntry, LogLevel, new_entry


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterStatus:
    """Outcome of applying a filter to the store"""
    pattern: str
    level_mask: int
    ok: bool = True
    error: Optional[str] = None
    matched: int = 0


class LogStore:
    """
    In-memory log history with a capped, filtered view

    Features:
    - O(1) writes (no history re-scan)
    - Newest-first ordering of both buffers
    - Filter state (pattern + level mask) survives clear() unless reset
    - Revision counter so a polling renderer can skip redraws
    """

    def __init__(self,
                 settings: Optional[ConsoleSettings] = None,
                 clock: Callable[[], float] = time.monotonic,
                 context_provider: Optional[Callable[[], str]] = None):
        """
        Initialize the log store

        Args:
            settings: Console settings (defaults are used when omitted)
            clock: Monotonic clock in seconds, used for elapsed times
            context_provider: Returns the current context label for writes
                that do not supply one
        """
        self.settings = settings or ConsoleSettings()
        self.clock = clock
        self.context_provider = context_provider or (lambda: threading.current_thread().name)

        self.engine = FilterEngine(self.settings.shown_limit, regex=self.settings.regex_search)

        self._all: deque = deque(maxlen=self.settings.history_limit)
        self._filtered: deque = deque(maxlen=self.settings.shown_limit)
        self._level_counts: Counter = Counter()
        self._started = self.clock()
        self._revision = 0
        self._last_status = FilterStatus(pattern="", level_mask=int(LogLevel.ALL))
        self._lock = threading.Lock()

    # Properties

    @property
    def history_limit(self) -> int:
        return self.settings.history_limit

    @property
    def shown_limit(self) -> int:
        return self.settings.shown_limit

    @property
    def filter_pattern(self) -> str:
        return self.engine.pattern

    @property
    def filter_level_mask(self) -> int:
        return self.engine.level_mask

    @property
    def matcher(self):
        """Compiled pattern of the current filter (None when unfiltered)"""
        return self.engine.matcher

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def last_status(self) -> FilterStatus:
        return self._last_status

    # Ingestion

    def elapsed_ms(self) -> int:
        """Milliseconds since the store was created or last cleared"""
        return int(round((self.clock() - self._started) * 1000))

    def write(self, level: LogLevel, message: str, raw_stack: str = "",
              context: Optional[str] = None) -> LogEntry:
        """
        Capture a log event

        Args:
            level: Severity of the event
            message: Log text
            raw_stack: Unparsed stack trace
            context: Scene/context label (context_provider when omitted)

        Returns:
            The stored LogEntry
        """
        if context is None:
            context = self.context_provider()

        with self._lock:
            entry = new_entry(level, self.elapsed_ms(), context, message, raw_stack)

            if len(self._all) == self._all.maxlen:
                evicted = self._all[-1]
                self._level_counts[evicted.level] -= 1
                # The view never outlives the history it was derived from
                if self._filtered and self._filtered[-1] is evicted:
                    self._filtered.pop()
            self._all.appendleft(entry)
            self._level_counts[entry.level] += 1

            if self.engine.accepts(entry):
                self._filtered.appendleft(entry)

            self._revision += 1

        return entry

    def debug(self, message: str, raw_stack: str = "") -> LogEntry:
        return self.write(LogLevel.DEBUG, message, raw_stack)

    def warn(self, message: str, raw_stack: str = "") -> LogEntry:
        return self.write(LogLevel.WARN, message, raw_stack)

    def error(self, message: str, raw_stack: str = "") -> LogEntry:
        return self.write(LogLevel.ERROR, message, raw_stack)

    # Filtering

    def apply_filter(self, pattern: str, level_mask: int) -> FilterStatus:
        """
        Replace the filtered view with a fresh recomputation

        An invalid pattern leaves the current view and filter untouched.

        Args:
            pattern: Text pattern (empty = match all)
            level_mask: Bitmask of enabled LogLevel flags

        Returns:
            FilterStatus describing the outcome
        """
        error = None
        with self._lock:
            try:
                filtered = self.engine.recompute(self._all, pattern, level_mask)
            except InvalidPatternError as e:
                error = e
                status = FilterStatus(
                    pattern=pattern,
                    level_mask=int(level_mask),
                    ok=False,
                    error=e.reason,
                    matched=len(self._filtered)
                )
            else:
                self._filtered.clear()
                self._filtered.extend(filtered)
                self._revision += 1
                status = FilterStatus(
                    pattern=self.engine.pattern,
                    level_mask=self.engine.level_mask,
                    matched=len(filtered)
                )
            self._last_status = status

        # Log after releasing the lock
        if error is not None:
            logger.warning(str(error))
        return status

    # Housekeeping

    def clear(self, reset_filter: bool = False) -> None:
        """
        Drop every entry and restart the elapsed-time clock

        Args:
            reset_filter: Also reset the pattern to empty and the mask to ALL
        """
        with self._lock:
            self._all.clear()
            self._filtered.clear()
            self._level_counts.clear()
            self._started = self.clock()
            if reset_filter:
                self.engine.reset()
                self._last_status = FilterStatus(pattern="", level_mask=int(LogLevel.ALL))
            self._revision += 1
        logger.debug(f"Log store cleared (reset_filter={reset_filter})")

    # Queries

    def count(self) -> int:
        """Number of entries in the filtered view"""
        return len(self._filtered)

    def view(self) -> List[LogEntry]:
        """Snapshot of the filtered view, newest first"""
        with self._lock:
            return list(self._filtered)

    def entries(self) -> List[LogEntry]:
        """Snapshot of the full history, newest first"""
        with self._lock:
            return list(self._all)

    def __len__(self) -> int:
        return len(self._all)

    def stats(self) -> Dict[str, int]:
        """
        Get statistics about current entries

        Returns:
            Dictionary with total/visible counts and counts by level
        """
        with self._lock:
            return {
                'total': len(self._all),
                'visible': len(self._filtered),
                'debug': self._level_counts[LogLevel.DEBUG],
                'warn': self._level_counts[LogLevel.WARN],
                'error': self._level_counts[LogLevel.ERROR],
            }
