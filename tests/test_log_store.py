"""
Unit tests for LogStore
"""
import threading

import pytest

from logconsole.settings import ConsoleSettings
from logconsole.core import LogLevel, LogStore


LEVELS = [LogLevel.DEBUG, LogLevel.WARN, LogLevel.ERROR]


def fill(store, count, prefix="msg"):
    return [store.write(LEVELS[i % 3], f"{prefix} {i}") for i in range(count)]


class TestWrite:

    def test_bounds_hold_after_every_write(self, store):
        for i in range(120):
            store.write(LEVELS[i % 3], f"event {i}")
            assert len(store) <= store.history_limit
            assert store.count() <= store.shown_limit

        assert len(store) == 50
        assert store.count() == 10

    def test_history_is_newest_first_with_decreasing_ids(self, store):
        fill(store, 80)

        ids = [entry.id for entry in store.entries()]

        assert ids == sorted(ids, reverse=True)
        assert len(set(ids)) == len(ids)
        assert store.entries()[0].message == "msg 79"
        assert store.entries()[-1].message == "msg 30"

    def test_view_holds_most_recent_matches(self, store):
        fill(store, 25)

        assert [e.message for e in store.view()] == [f"msg {i}" for i in range(24, 14, -1)]

    def test_write_respects_current_filter(self, store):
        store.apply_filter("boss", LogLevel.WARN | LogLevel.ERROR)

        store.write(LogLevel.WARN, "boss appeared")
        store.write(LogLevel.DEBUG, "boss debug")
        store.write(LogLevel.ERROR, "minion died")
        store.write(LogLevel.ERROR, "x", "Game.Boss.Die () (at Assets/Boss.cs:9)")

        assert [e.message for e in store.view()] == ["x", "boss appeared"]
        assert len(store) == 4

    def test_timestamps_and_context(self, store, clock):
        first = store.write(LogLevel.DEBUG, "a")
        clock.advance(250)
        second = store.write(LogLevel.DEBUG, "b", context="Level2")

        assert first.timestamp_ms == 0
        assert second.timestamp_ms == 250
        assert first.context == "Main"
        assert second.context == "Level2"

    def test_level_shortcuts(self, store):
        store.debug("d")
        store.warn("w")
        store.error("e", "A.B () (at Assets/A.cs:1)")

        assert [e.level for e in store.entries()] == [LogLevel.ERROR, LogLevel.WARN, LogLevel.DEBUG]
        assert store.entries()[0].top_file_line == "A.cs:1"

    def test_view_never_outlives_history(self, clock):
        store = LogStore(ConsoleSettings(history_limit=5, shown_limit=5), clock=clock)
        store.apply_filter("rare", LogLevel.ALL)
        store.write(LogLevel.DEBUG, "rare event")

        for i in range(5):
            store.write(LogLevel.DEBUG, f"common {i}")

        history_ids = {e.id for e in store.entries()}
        assert store.view() == []
        assert all(e.id in history_ids for e in store.view())

    def test_revision_changes_on_mutation(self, store):
        start = store.revision
        store.write(LogLevel.DEBUG, "a")
        after_write = store.revision
        store.apply_filter("a", LogLevel.ALL)
        after_filter = store.revision
        store.clear()

        assert start < after_write < after_filter < store.revision

    def test_concurrent_writes(self, clock):
        store = LogStore(ConsoleSettings(history_limit=1000, shown_limit=100), clock=clock)

        def worker(n):
            for i in range(200):
                store.write(LogLevel.DEBUG, f"thread {n} event {i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [e.id for e in store.entries()]
        assert len(ids) == 800
        assert ids == sorted(ids, reverse=True)
        assert store.count() == 100


class TestClear:

    def test_clear_with_reset(self, store):
        fill(store, 20)
        store.apply_filter("msg 1", LogLevel.DEBUG)

        store.clear(reset_filter=True)

        assert store.count() == 0
        assert store.view() == []
        assert len(store) == 0
        assert store.filter_pattern == ""
        assert store.filter_level_mask == LogLevel.ALL

        store.write(LogLevel.WARN, "fresh")
        assert [e.message for e in store.view()] == ["fresh"]

    def test_clear_keeps_filter(self, store):
        store.apply_filter("keep", LogLevel.ERROR)

        store.clear()

        assert store.filter_pattern == "keep"
        assert store.filter_level_mask == LogLevel.ERROR
        store.write(LogLevel.ERROR, "drop me")
        store.write(LogLevel.ERROR, "keep me")
        assert [e.message for e in store.view()] == ["keep me"]

    def test_clear_resets_clock(self, store, clock):
        clock.advance(5000)
        store.write(LogLevel.DEBUG, "before")

        store.clear()
        clock.advance(40)
        entry = store.write(LogLevel.DEBUG, "after")

        assert entry.timestamp_ms == 40


class TestApplyFilter:

    def test_replaces_view(self, store):
        store.write(LogLevel.DEBUG, "alpha")
        store.write(LogLevel.WARN, "beta")
        store.write(LogLevel.ERROR, "alphabet")

        status = store.apply_filter("alpha", LogLevel.ALL)

        assert status.ok
        assert status.matched == 2
        assert [e.message for e in store.view()] == ["alphabet", "alpha"]
        assert store.matcher is not None

    def test_level_only_filter(self, store):
        store.write(LogLevel.DEBUG, "a")
        store.write(LogLevel.WARN, "b")
        store.write(LogLevel.ERROR, "c")

        store.apply_filter("", LogLevel.DEBUG | LogLevel.ERROR)

        assert [e.message for e in store.view()] == ["c", "a"]

    def test_invalid_pattern_keeps_last_good_view(self, store):
        store.write(LogLevel.DEBUG, "alpha")
        store.write(LogLevel.DEBUG, "beta")
        store.apply_filter("alpha", LogLevel.ALL)
        revision = store.revision

        status = store.apply_filter("(alpha", LogLevel.ALL)

        assert not status.ok
        assert status.error
        assert status.pattern == "(alpha"
        assert store.last_status is status
        assert [e.message for e in store.view()] == ["alpha"]
        assert store.filter_pattern == "alpha"
        assert store.revision == revision

        # Still usable after the bad input
        store.write(LogLevel.DEBUG, "alpha two")
        assert [e.message for e in store.view()] == ["alpha two", "alpha"]

    def test_stats_follow_evictions(self, clock):
        store = LogStore(ConsoleSettings(history_limit=4, shown_limit=2), clock=clock)
        store.write(LogLevel.ERROR, "e1")
        store.write(LogLevel.WARN, "w1")
        store.write(LogLevel.DEBUG, "d1")
        store.write(LogLevel.DEBUG, "d2")
        store.write(LogLevel.DEBUG, "d3")

        stats = store.stats()

        assert stats == {'total': 4, 'visible': 2, 'debug': 3, 'warn': 1, 'error': 0}

    def test_stats_reset_on_clear(self, store):
        fill(store, 9)
        store.clear()
        assert store.stats() == {'total': 0, 'visible': 0, 'debug': 0, 'warn': 0, 'error': 0}


def test_stores_are_independent(clock):
    first = LogStore(clock=clock)
    second = LogStore(clock=clock)

    first.write(LogLevel.DEBUG, "only in first")

    assert first.count() == 1
    assert second.count() == 0
    assert len(second) == 0
