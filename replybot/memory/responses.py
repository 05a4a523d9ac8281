"""ResponseMemory — per-input reply counts with decay and best-of lookup."""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from replybot.memory.models import ResponseTable
    from replybot.memory.store import ModelStore

logger = logging.getLogger(__name__)

DEFAULT_DECAY = 0.95


class ResponseMemory:
    """Adaptive store mapping normalized input to reply counts.

    Every observation of an input first decays all of that input's existing
    counts (``floor(count * decay)``) and then increments the chosen reply.
    Replies decayed to zero are kept.

    All access goes through an internal re-entrant lock. Callers that need
    a lookup and a record to be one atomic step hold ``locked()`` around
    both.
    """

    def __init__(self, store: ModelStore | None = None, decay: float = DEFAULT_DECAY) -> None:
        if not 0.0 < decay < 1.0:
            raise ValueError(f"decay must be between 0 and 1 (exclusive), got {decay}")
        self._store = store
        self._decay = decay
        self._table: ResponseTable = {}
        self._lock = threading.RLock()
        self._save_lock = threading.Lock()

    @contextmanager
    def locked(self) -> Iterator[ResponseMemory]:
        """Hold the memory lock for a multi-step turn."""
        with self._lock:
            yield self

    def lookup_best(self, key: str) -> str | None:
        """Return the highest-count reply for ``key``, or None if the key is unknown.

        Ties go to the reply that was recorded first for this key.
        """
        with self._lock:
            counts = self._table.get(key)
            if not counts:
                return None
            best_reply: str | None = None
            best_count = -1
            for reply, count in counts.items():
                if count > best_count:
                    best_reply, best_count = reply, count
            return best_reply

    def record(self, key: str, reply: str) -> None:
        """Observe ``reply`` for ``key``: decay existing counts, then increment."""
        with self._lock:
            counts = self._table.setdefault(key, {})
            for existing in counts:
                counts[existing] = math.floor(counts[existing] * self._decay)
            counts[reply] = counts.get(reply, 0) + 1

    def count(self, key: str, reply: str) -> int:
        with self._lock:
            return self._table.get(key, {}).get(reply, 0)

    def replies(self, key: str) -> dict[str, int]:
        """Return a copy of the reply counts for ``key`` (empty if unknown)."""
        with self._lock:
            return dict(self._table.get(key, {}))

    def snapshot(self) -> ResponseTable:
        """Return a deep copy of the whole table."""
        with self._lock:
            return {key: dict(counts) for key, counts in self._table.items()}

    def __len__(self) -> int:
        with self._lock:
            return len(self._table)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._table

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """Replace the in-memory table with the stored one.

        A missing, unreadable or corrupt store leaves the memory empty.

        Returns:
            True if a stored table was loaded, False otherwise.
        """
        if self._store is None:
            return False
        result = self._store.load()
        with self._lock:
            self._table.clear()
            if not result.ok:
                logger.warning("Failed to load response model: %s", result.error)
                return False
            if result.data is None:
                logger.debug("No stored response model; starting empty")
                return False
            self._table.update({key: dict(counts) for key, counts in result.data.items()})
            logger.info("Loaded response model with %d inputs", len(self._table))
            return True

    def save(self) -> bool:
        """Persist a snapshot of the table; I/O happens outside the turn lock.

        Concurrent saves are serialized, so a newer snapshot is never
        overwritten by an older one.

        Returns:
            True on success, False if there is no store or the save failed.
        """
        if self._store is None:
            return False
        with self._save_lock:
            table = self.snapshot()
            result = self._store.save(table)
        if not result.ok:
            logger.error("Failed to save response model: %s", result.error)
            return False
        return True
