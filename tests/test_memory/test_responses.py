"""Tests for replybot.memory.responses.ResponseMemory."""

from __future__ import annotations

import logging
import threading
from unittest.mock import MagicMock

import pytest

from replybot.memory.models import StoreResult
from replybot.memory.responses import ResponseMemory
from replybot.memory.store import InMemoryModelStore


@pytest.fixture
def memory() -> ResponseMemory:
    return ResponseMemory()


def _loaded(table: dict) -> ResponseMemory:
    mem = ResponseMemory(store=InMemoryModelStore(table))
    assert mem.load() is True
    return mem


# ──────────────────────────────────────────────────────────────────────
# TestRecord
# ──────────────────────────────────────────────────────────────────────


class TestRecord:
    def test_first_record_counts_one(self, memory) -> None:
        memory.record("hello", "Hi there!")
        assert memory.count("hello", "Hi there!") == 1
        assert "hello" in memory
        assert len(memory) == 1

    def test_second_record_same_reply(self, memory) -> None:
        """floor(1 * 0.95) + 1 == 1."""
        memory.record("hello", "Hi there!")
        memory.record("hello", "Hi there!")
        assert memory.count("hello", "Hi there!") == 1

    def test_decay_before_increment(self) -> None:
        mem = _loaded({"k": {"a": 10}})
        mem.record("k", "b")
        assert mem.replies("k") == {"a": 9, "b": 1}
        mem.record("k", "a")
        assert mem.replies("k") == {"a": 9, "b": 0}

    def test_zero_counts_are_kept(self, memory) -> None:
        memory.record("k", "old")
        memory.record("k", "new")
        assert memory.replies("k") == {"old": 0, "new": 1}

    def test_keys_are_independent(self, memory) -> None:
        memory.record("a", "x")
        memory.record("b", "y")
        assert memory.replies("a") == {"x": 1}
        assert memory.replies("b") == {"y": 1}

    def test_alternating_replies_are_bounded(self) -> None:
        mem = _loaded({"k": {"a": 40, "b": 25}})
        recorded = {"a": 0, "b": 0}
        seen_max = {"a": 40, "b": 25}
        for i in range(60):
            chosen, other = ("a", "b") if i % 2 else ("b", "a")
            before_other = mem.count("k", other)
            mem.record("k", chosen)
            recorded[chosen] += 1
            # Unchosen replies never grow.
            assert mem.count("k", other) <= before_other
            for reply in ("a", "b"):
                assert mem.count("k", reply) <= seen_max[reply] + recorded[reply]
        assert mem.count("k", "a") <= recorded["a"]
        assert mem.count("k", "b") <= recorded["b"]

    def test_custom_decay(self) -> None:
        mem = ResponseMemory(store=InMemoryModelStore({"k": {"a": 10}}), decay=0.5)
        mem.load()
        mem.record("k", "b")
        assert mem.replies("k") == {"a": 5, "b": 1}

    @pytest.mark.parametrize("decay", [0.0, 1.0, 2.0])
    def test_invalid_decay(self, decay) -> None:
        with pytest.raises(ValueError):
            ResponseMemory(decay=decay)


# ──────────────────────────────────────────────────────────────────────
# TestLookupBest
# ──────────────────────────────────────────────────────────────────────


class TestLookupBest:
    def test_unknown_key(self, memory) -> None:
        assert memory.lookup_best("nothing") is None

    def test_most_recent_reply_dominates(self, memory) -> None:
        memory.record("k", "first")
        memory.record("k", "second")
        assert memory.lookup_best("k") == "second"

    def test_highest_count_wins(self) -> None:
        mem = _loaded({"k": {"a": 2, "b": 7, "c": 3}})
        assert mem.lookup_best("k") == "b"

    def test_tie_goes_to_first_seen(self) -> None:
        mem = _loaded({"k": {"x": 4, "y": 4}})
        assert mem.lookup_best("k") == "x"

    def test_all_zero_still_returns_first(self) -> None:
        mem = _loaded({"k": {"x": 0, "y": 0}})
        assert mem.lookup_best("k") == "x"


# ──────────────────────────────────────────────────────────────────────
# TestSnapshot
# ──────────────────────────────────────────────────────────────────────


class TestSnapshot:
    def test_snapshot_is_a_copy(self, memory) -> None:
        memory.record("k", "a")
        snap = memory.snapshot()
        snap["k"]["a"] = 99
        snap["other"] = {}
        assert memory.count("k", "a") == 1
        assert "other" not in memory


# ──────────────────────────────────────────────────────────────────────
# TestPersistence
# ──────────────────────────────────────────────────────────────────────


class TestPersistence:
    def test_no_store(self, memory) -> None:
        assert memory.load() is False
        assert memory.save() is False

    def test_save_then_load(self) -> None:
        store = InMemoryModelStore()
        mem = ResponseMemory(store=store)
        mem.record("hello", "Hi there!")
        mem.record("bye", "Goodbye!")
        assert mem.save() is True

        fresh = ResponseMemory(store=store)
        assert fresh.load() is True
        assert fresh.snapshot() == mem.snapshot()

    def test_load_nothing_stored(self) -> None:
        mem = ResponseMemory(store=InMemoryModelStore())
        assert mem.load() is False
        assert len(mem) == 0

    def test_load_failure_degrades_to_empty(self, caplog) -> None:
        store = MagicMock()
        store.load.return_value = StoreResult.failure("corrupt")
        mem = ResponseMemory(store=store)
        mem.record("stale", "x")

        with caplog.at_level(logging.WARNING):
            assert mem.load() is False

        assert len(mem) == 0
        assert "corrupt" in caplog.text

    def test_save_failure_is_reported(self, caplog) -> None:
        store = MagicMock()
        store.save.return_value = StoreResult.failure("disk full")
        mem = ResponseMemory(store=store)
        mem.record("k", "a")

        with caplog.at_level(logging.ERROR):
            assert mem.save() is False

        assert "disk full" in caplog.text
        # Memory is untouched by the failed save.
        assert mem.count("k", "a") == 1

    def test_save_passes_snapshot(self) -> None:
        store = MagicMock()
        store.save.return_value = StoreResult.success()
        mem = ResponseMemory(store=store)
        mem.record("k", "a")
        mem.save()
        store.save.assert_called_once_with({"k": {"a": 1}})


# ──────────────────────────────────────────────────────────────────────
# TestLocking
# ──────────────────────────────────────────────────────────────────────


class TestLocking:
    def test_locked_blocks_other_writers(self, memory) -> None:
        started = threading.Event()

        def writer() -> None:
            started.set()
            memory.record("k", "from-thread")

        with memory.locked():
            memory.record("k", "mine")
            thread = threading.Thread(target=writer)
            thread.start()
            started.wait(timeout=1)
            thread.join(timeout=0.2)
            assert thread.is_alive()
            assert memory.replies("k") == {"mine": 1}

        thread.join(timeout=2)
        assert not thread.is_alive()
        assert memory.replies("k") == {"mine": 0, "from-thread": 1}

    def test_locked_is_reentrant(self, memory) -> None:
        with memory.locked():
            memory.record("k", "a")
            assert memory.lookup_best("k") == "a"

    def test_concurrent_records_keep_every_key(self, memory) -> None:
        def worker(n: int) -> None:
            for i in range(50):
                memory.record(f"key-{n}-{i}", "r")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(memory) == 8 * 50
