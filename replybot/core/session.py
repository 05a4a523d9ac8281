"""ChatSession -- line-oriented interactive loop around a ReplybotEngine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from collections.abc import Callable

    from replybot.core.engine import ReplybotEngine

logger = logging.getLogger(__name__)

BOT_PREFIX = "Chatbot: "
USER_PROMPT = "You: "


class ChatSession:
    """Reads one line per turn and writes one reply per turn.

    The exit command (compared trimmed and case-insensitively) or end of
    input ends the session with the farewell line. Saving the learned model
    is left to the engine's ``close()``.
    A failing turn is logged and answered with the configured apology; the
    session keeps running.

    Args:
        engine: Initialized engine answering each turn.
        input_fn: Reads one line given a prompt.
        output_fn: Writes one line.
    """

    def __init__(
        self,
        engine: ReplybotEngine,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = click.echo,
    ) -> None:
        self._engine = engine
        self._input = input_fn
        self._output = output_fn
        self.turns = 0

    def run(self) -> int:
        """Run until exit; return the number of turns answered."""
        cfg = self._engine.config
        exit_command = cfg.exit_command.strip().lower()
        self._output(BOT_PREFIX + cfg.welcome_message)

        while True:
            try:
                line = self._input(USER_PROMPT)
            except (EOFError, KeyboardInterrupt):
                self._output("")
                break
            if line.strip().lower() == exit_command:
                break
            self._output(BOT_PREFIX + self.handle(line))

        self._output(BOT_PREFIX + cfg.farewell_message)
        return self.turns

    def handle(self, line: str) -> str:
        """Answer one line, substituting the apology on any failure."""
        try:
            reply = self._engine.respond(line)
        except Exception:
            logger.exception("Turn failed for input %r", line)
            return self._engine.config.apology_reply
        self.turns += 1
        return reply
