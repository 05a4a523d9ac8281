"""ReplybotEngine -- central orchestrator that wires all components."""

from __future__ import annotations

import logging
import random
import threading

from replybot.core.config import ReplybotConfig
from replybot.core.responder import ResponseEngine
from replybot.intent.catalog import IntentCatalog
from replybot.intent.defaults import build_default_catalog
from replybot.memory.responses import ResponseMemory
from replybot.memory.store import JsonModelStore

logger = logging.getLogger(__name__)


def load_catalog(config: ReplybotConfig) -> IntentCatalog:
    """Build the configured catalog: the JSON catalog file if set, else the defaults."""
    if config.catalog_file is not None:
        return IntentCatalog.from_file(config.catalog_file)
    return build_default_catalog()


class ReplybotEngine:
    """Central engine that wires together all Replybot components.

    Builds the intent catalog, model store, response memory and response
    engine from a ReplybotConfig. The learned model is loaded on
    ``initialize()`` and saved on ``close()``.
    """

    def __init__(self, config: ReplybotConfig | None = None) -> None:
        self.config = config or ReplybotConfig()
        self._catalog = None
        self._memory = None
        self._responder = None
        self._turns = 0
        self._turn_lock = threading.Lock()
        self._initialized = False

    def initialize(self) -> None:
        """Initialize all components. Must be called before use."""
        if self._initialized:
            return

        cfg = self.config

        # Catalog
        self._catalog = load_catalog(cfg)

        # Memory
        store = JsonModelStore(cfg.model_path)
        self._memory = ResponseMemory(store=store, decay=cfg.decay_factor)
        self._memory.load()

        # Responder
        self._responder = ResponseEngine(
            catalog=self._catalog,
            memory=self._memory,
            fallback=cfg.fallback_reply,
            rng=random.Random(cfg.seed),
        )

        self._initialized = True
        logger.info(
            "Engine ready: %d intents, %d learned inputs", len(self._catalog), len(self._memory)
        )

    @property
    def catalog(self):
        self._ensure_initialized()
        return self._catalog

    @property
    def memory(self):
        self._ensure_initialized()
        return self._memory

    @property
    def responder(self):
        self._ensure_initialized()
        return self._responder

    def respond(self, text: str) -> str:
        """Run one turn and autosave every ``autosave_every`` turns."""
        reply = self.responder.generate_response(text)
        every = self.config.autosave_every
        if every:
            with self._turn_lock:
                self._turns += 1
                due = self._turns % every == 0
            if due:
                self._memory.save()
        return reply

    def save(self) -> bool:
        return self.memory.save()

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("ReplybotEngine not initialized. Call initialize() first.")

    def close(self) -> None:
        """Save the learned model and release all components."""
        if self._initialized and self._memory is not None:
            self._memory.save()
        self._catalog = None
        self._memory = None
        self._responder = None
        self._turns = 0
        self._initialized = False

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, *exc):
        self.close()
