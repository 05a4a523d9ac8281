"""ResponseEngine — precedent, intent or fallback, then tint and record."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from replybot.intent.sentiment import classify, tint

if TYPE_CHECKING:
    from replybot.intent.catalog import IntentCatalog
    from replybot.memory.responses import ResponseMemory

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK = "I'm not sure I understand. Could you rephrase that?"


def normalize(text: str) -> str:
    """Trim and lower-case raw input; this is the memory key."""
    return text.strip().lower()


class ResponseEngine:
    """Selects, tints and records the reply for one turn.

    Args:
        catalog: Intents tried when the memory has no precedent.
        memory: Learned reply counts, consulted and updated every turn.
        fallback: Reply used when nothing matches.
        rng: Random source for picking among an intent's responses.
    """

    def __init__(
        self,
        catalog: IntentCatalog,
        memory: ResponseMemory,
        fallback: str = DEFAULT_FALLBACK,
        rng: random.Random | None = None,
    ) -> None:
        self._catalog = catalog
        self._memory = memory
        self._fallback = fallback
        self._rng = rng or random.Random()

    def generate_response(self, raw_input: str) -> str:
        """Produce the reply for ``raw_input`` and learn from it.

        A precedent reply is tinted again, so a reply that already carries a
        suffix can receive a second one when the same sentiment recurs.
        """
        sentiment = classify(raw_input)
        normalized = normalize(raw_input)

        with self._memory.locked():
            reply = self._memory.lookup_best(normalized)
            if reply is not None:
                logger.debug("Precedent for %r: %r", normalized, reply)
            else:
                intent = self._catalog.match(normalized)
                reply = intent.pick(self._rng) if intent is not None else self._fallback

            final_reply = tint(reply, sentiment)
            self._memory.record(normalized, final_reply)

        return final_reply
