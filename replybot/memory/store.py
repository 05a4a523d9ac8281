"""Model stores — whole-table persistence for the response memory."""

from __future__ import annotations

import json
import logging
import tempfile
import threading
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from replybot.memory.models import ResponseTable, StoreResult, response_table_adapter

logger = logging.getLogger(__name__)


class ModelStore(Protocol):
    """Persistence collaborator for the response memory.

    Implementations never raise for I/O problems; they report them in the
    returned StoreResult.
    """

    def load(self) -> StoreResult: ...

    def save(self, table: ResponseTable) -> StoreResult: ...


class JsonModelStore:
    """Stores the response table as a single JSON document."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> StoreResult:
        """Read and validate the stored table.

        Returns:
            Success with ``data=None`` if no file exists, success with the
            table if it parses, failure if the file is unreadable or corrupt.
        """
        if not self._path.exists():
            return StoreResult.success(None)
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            table = response_table_adapter.validate_python(raw)
        except (
            OSError,
            UnicodeDecodeError,
            json.JSONDecodeError,
            RecursionError,
            ValidationError,
        ) as e:
            return StoreResult.failure(f"{type(e).__name__}: {e}")
        return StoreResult.success(table)

    def save(self, table: ResponseTable) -> StoreResult:
        """Write the table atomically (unique temp file, then rename).

        Saves are serialized, so concurrent callers never interleave writes.
        """
        tmp_path: Path | None = None
        with self._lock:
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=self._path.parent,
                    prefix=self._path.name + ".",
                    suffix=".tmp",
                    delete=False,
                ) as fh:
                    tmp_path = Path(fh.name)
                    json.dump(table, fh, indent=2)
                tmp_path.replace(self._path)
            except OSError as e:
                if tmp_path is not None:
                    tmp_path.unlink(missing_ok=True)
                return StoreResult.failure(f"{type(e).__name__}: {e}")
        logger.debug("Saved %d inputs to %s", len(table), self._path)
        return StoreResult.success()

    def delete(self) -> bool:
        """Remove the stored file.

        Returns:
            True if a file existed and was removed, False otherwise.
        """
        if not self._path.exists():
            return False
        self._path.unlink()
        return True


class InMemoryModelStore:
    """Keeps a deep copy of the last saved table; used for tests and dry runs."""

    def __init__(self, table: ResponseTable | None = None) -> None:
        self._table = _copy(table) if table is not None else None

    def load(self) -> StoreResult:
        return StoreResult.success(_copy(self._table) if self._table is not None else None)

    def save(self, table: ResponseTable) -> StoreResult:
        self._table = _copy(table)
        return StoreResult.success()


def _copy(table: ResponseTable) -> ResponseTable:
    return {key: dict(counts) for key, counts in table.items()}
