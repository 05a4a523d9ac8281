"""Memory module — learned reply counts and their persistence."""

from replybot.memory.models import ResponseTable, StoreResult
from replybot.memory.responses import ResponseMemory
from replybot.memory.store import InMemoryModelStore, JsonModelStore, ModelStore

__all__ = [
    "InMemoryModelStore",
    "JsonModelStore",
    "ModelStore",
    "ResponseMemory",
    "ResponseTable",
    "StoreResult",
]
