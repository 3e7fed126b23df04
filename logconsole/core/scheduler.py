"""
Filter Scheduler Module - Debounced filter recomputation

Search edits arrive once per keystroke; recomputing the view on each of
them would dominate on a large history. The scheduler keeps only the most
recent request and runs it once the edits have been quiet for the
configured interval.
"""
import logging
import threading
import time
from typing import Callable, Optional

from .log_store import FilterStatus, LogStore


logger = logging.getLogger(__name__)


class FilterScheduler:
    """
    Debounces filter requests against a LogStore

    Deadline model: recompute deadline = last edit time + quiet interval.
    The owner calls tick() from its polling loop; a request runs at most
    once and is dropped if superseded before its deadline.
    """

    def __init__(self, store: LogStore,
                 quiet_interval_ms: Optional[int] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the scheduler

        Args:
            store: Store whose filtered view is recomputed
            quiet_interval_ms: Quiet period before a request runs
                (store settings when omitted)
            clock: Monotonic clock in seconds
        """
        self.store = store
        if quiet_interval_ms is None:
            quiet_interval_ms = store.settings.quiet_interval_ms
        self.quiet_interval_ms = int(quiet_interval_ms)
        self.clock = clock

        self._pattern = store.filter_pattern
        self._level_mask = store.filter_level_mask
        self._pending = False
        self._deadline: Optional[int] = None  # in clock milliseconds
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def deadline(self) -> Optional[int]:
        return self._deadline

    @property
    def requested_pattern(self) -> str:
        return self._pattern

    @property
    def requested_level_mask(self) -> int:
        return self._level_mask

    def request(self, pattern: Optional[str] = None, level_mask: Optional[int] = None) -> None:
        """
        Record a filter edit and restart the quiet period

        Args:
            pattern: New pattern (keeps the last requested one when None)
            level_mask: New level mask (keeps the last requested one when None)
        """
        with self._lock:
            if pattern is not None:
                self._pattern = pattern
            if level_mask is not None:
                self._level_mask = int(level_mask)
            self._pending = True
            self._deadline = self._now_ms() + self.quiet_interval_ms

    def tick(self) -> Optional[FilterStatus]:
        """
        Run the pending request if its quiet period has elapsed

        Returns:
            FilterStatus of the recomputation, or None if nothing ran
        """
        with self._lock:
            if not self._pending or self._now_ms() < self._deadline:
                return None
            pattern, level_mask = self._take()
        return self._run(pattern, level_mask)

    def flush(self) -> Optional[FilterStatus]:
        """Run the pending request now, ignoring the quiet period"""
        with self._lock:
            if not self._pending:
                return None
            pattern, level_mask = self._take()
        return self._run(pattern, level_mask)

    def cancel(self) -> None:
        """Drop the pending request, if any"""
        with self._lock:
            self._pending = False
            self._deadline = None

    def sync(self) -> None:
        """Adopt the store's current filter as the requested one"""
        with self._lock:
            self._pattern = self.store.filter_pattern
            self._level_mask = self.store.filter_level_mask
            self._pending = False
            self._deadline = None

    def _now_ms(self) -> int:
        return int(round(self.clock() * 1000))

    def _take(self) -> tuple:
        self._pending = False
        self._deadline = None
        return self._pattern, self._level_mask

    def _run(self, pattern: str, level_mask: int) -> FilterStatus:
        logger.debug(f"Applying debounced filter {pattern!r} mask={level_mask}")
        return self.store.apply_filter(pattern, level_mask)
