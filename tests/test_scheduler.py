"""
Unit tests for FilterScheduler debouncing
"""
from unittest.mock import patch

import pytest

from logconsole.core import FilterScheduler, LogLevel


@pytest.fixture
def scheduler(store, clock):
    return FilterScheduler(store, quiet_interval_ms=300, clock=clock)


class TestDebounce:

    def test_burst_of_edits_runs_once_with_last_pattern(self, store, scheduler, clock):
        store.write(LogLevel.DEBUG, "apple")
        store.write(LogLevel.DEBUG, "apricot")
        store.write(LogLevel.DEBUG, "banana")

        with patch.object(store, 'apply_filter', wraps=store.apply_filter) as apply_filter:
            for pattern in ["a", "ap", "apr"]:
                scheduler.request(pattern=pattern)
                assert scheduler.tick() is None
                clock.advance(50)

            # Quiet period measured from the last edit
            clock.advance(250)
            status = scheduler.tick()
            for _ in range(5):
                clock.advance(100)
                assert scheduler.tick() is None

        apply_filter.assert_called_once_with("apr", LogLevel.ALL)
        assert status.ok
        assert [e.message for e in store.view()] == ["apricot"]

    def test_nothing_runs_before_deadline(self, store, scheduler, clock):
        scheduler.request(pattern="x")
        clock.advance(299)

        assert scheduler.tick() is None
        assert scheduler.pending

        clock.advance(1)
        assert scheduler.tick() is not None
        assert not scheduler.pending

    def test_new_edit_restarts_timer(self, scheduler, clock):
        scheduler.request(pattern="a")
        clock.advance(200)
        scheduler.request(pattern="ab")
        clock.advance(200)

        assert scheduler.tick() is None

        clock.advance(100)
        status = scheduler.tick()
        assert status.pattern == "ab"

    def test_tick_without_request(self, store, scheduler, clock):
        with patch.object(store, 'apply_filter') as apply_filter:
            clock.advance(10_000)
            assert scheduler.tick() is None
        apply_filter.assert_not_called()

    def test_level_and_pattern_edits_merge(self, store, scheduler, clock):
        store.write(LogLevel.WARN, "disk warn")
        store.write(LogLevel.ERROR, "disk error")

        scheduler.request(pattern="disk")
        scheduler.request(level_mask=LogLevel.WARN)
        clock.advance(300)
        status = scheduler.tick()

        assert status.pattern == "disk"
        assert status.level_mask == LogLevel.WARN
        assert [e.message for e in store.view()] == ["disk warn"]

    def test_quiet_interval_from_settings(self, clock):
        from logconsole.settings import ConsoleSettings
        from logconsole.core import LogStore

        slow_store = LogStore(ConsoleSettings(quiet_interval_ms=1000), clock=clock)
        slow = FilterScheduler(slow_store, clock=clock)

        slow.request(pattern="x")
        clock.advance(999)
        assert slow.tick() is None
        clock.advance(1)
        assert slow.tick() is not None


class TestFlushAndCancel:

    def test_flush_runs_immediately(self, store, scheduler):
        store.write(LogLevel.DEBUG, "now")
        scheduler.request(pattern="now")

        status = scheduler.flush()

        assert status.ok
        assert not scheduler.pending
        assert scheduler.flush() is None

    def test_cancel_drops_pending(self, store, scheduler, clock):
        scheduler.request(pattern="never")
        scheduler.cancel()
        clock.advance(1000)

        assert scheduler.tick() is None
        assert store.filter_pattern == ""

    def test_invalid_pattern_reported(self, store, scheduler, clock):
        store.write(LogLevel.DEBUG, "kept")
        scheduler.request(pattern="[")
        clock.advance(300)

        status = scheduler.tick()

        assert not status.ok
        assert [e.message for e in store.view()] == ["kept"]

    def test_sync_adopts_store_filter(self, store, scheduler):
        scheduler.request(pattern="abc", level_mask=LogLevel.ERROR)
        store.clear(reset_filter=True)

        scheduler.sync()

        assert not scheduler.pending
        assert scheduler.requested_pattern == ""
        assert scheduler.requested_level_mask == LogLevel.ALL
