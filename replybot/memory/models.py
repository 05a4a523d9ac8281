"""Data models for the persisted response model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from pydantic import Field, TypeAdapter

# normalized input -> reply -> count
ResponseTable = dict[str, dict[str, Annotated[int, Field(ge=0)]]]

response_table_adapter: TypeAdapter[ResponseTable] = TypeAdapter(ResponseTable)


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a load or save against a model store.

    Attributes:
        ok: Whether the operation succeeded.
        data: Loaded table on a successful load; None when nothing was stored.
        error: Failure reason when ``ok`` is False.
    """

    ok: bool
    data: ResponseTable | None = None
    error: str | None = None

    @classmethod
    def success(cls, data: ResponseTable | None = None) -> StoreResult:
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> StoreResult:
        return cls(ok=False, error=error)
