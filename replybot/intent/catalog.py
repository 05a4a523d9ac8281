"""IntentCatalog — ordered whole-string regex intents with priority tie-breaking."""

from __future__ import annotations

import json
import logging
import random
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, ValidationError, field_validator

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "I don't have a response for that."


class CatalogError(ValueError):
    """Raised when an intent catalog cannot be built."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Intent:
    """A named category of user input recognized by a whole-string pattern.

    Attributes:
        name: Unique intent name. Two intents with the same name are equal.
        pattern: Compiled regex, matched against the entire normalized input.
        priority: Higher priorities are tried first.
        responses: Literal reply strings, one of which is picked per match.
    """

    name: str
    pattern: re.Pattern[str] = field(compare=False)
    priority: int = field(default=0, compare=False)
    responses: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def create(
        cls,
        name: str,
        pattern: str,
        priority: int = 0,
        responses: Iterable[str] = (),
    ) -> Intent:
        """Build an Intent from a raw regex string.

        Raises:
            CatalogError: If the pattern does not compile.
        """
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise CatalogError(f"Intent '{name}' has an invalid pattern: {e}") from e
        return cls(name=name, pattern=compiled, priority=priority, responses=tuple(responses))

    def matches(self, normalized: str) -> bool:
        return self.pattern.fullmatch(normalized) is not None

    def pick(self, rng: random.Random) -> str:
        """Pick one response uniformly at random."""
        if not self.responses:
            return NO_RESPONSE_TEXT
        return rng.choice(self.responses)


# ---------------------------------------------------------------------------
# Catalog file schema
# ---------------------------------------------------------------------------


class IntentModel(BaseModel):
    name: str = Field(min_length=1)
    pattern: str = Field(min_length=1)
    priority: int = 0
    responses: list[str] = Field(default_factory=list)

    @field_validator("pattern")
    @classmethod
    def pattern_compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid regex: {e}") from e
        return v


class CatalogFileModel(BaseModel):
    intents: list[IntentModel] = Field(min_length=1)


def time_stamps(now: datetime) -> dict[str, str]:
    """Return the clock and calendar renderings baked into time/date replies."""
    return {
        "time_24h": now.strftime("%H:%M"),
        "time_12h": now.strftime("%I:%M %p").lstrip("0"),
        "date_long": f"{now:%B} {now.day}, {now.year}",
        "date_short": now.strftime("%m/%d/%Y"),
    }


def _bake(template: str, stamps: dict[str, str]) -> str:
    for key, value in stamps.items():
        template = template.replace("{" + key + "}", value)
    return template


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class IntentCatalog:
    """Immutable, ordered collection of intents.

    Intents are evaluated from highest to lowest priority. Intents that
    share a priority keep the order in which they were registered.
    """

    def __init__(self, intents: Iterable[Intent]) -> None:
        registered = list(intents)
        seen: set[str] = set()
        for intent in registered:
            if intent.name in seen:
                raise CatalogError(f"Duplicate intent name: {intent.name}")
            seen.add(intent.name)
        # sorted() is stable, so registration order survives within a priority.
        self._intents: tuple[Intent, ...] = tuple(
            sorted(registered, key=lambda i: -i.priority)
        )

    def match(self, normalized: str) -> Intent | None:
        """Return the first intent in evaluation order whose pattern matches the whole input.

        Args:
            normalized: Lower-cased, trimmed user input.

        Returns:
            The matching Intent, or None if no pattern matches.
        """
        for intent in self._intents:
            if intent.matches(normalized):
                logger.debug("Input %r matched intent %s", normalized, intent.name)
                return intent
        return None

    def get(self, name: str) -> Intent | None:
        for intent in self._intents:
            if intent.name == name:
                return intent
        return None

    @property
    def names(self) -> list[str]:
        """Intent names in evaluation order."""
        return [i.name for i in self._intents]

    def __iter__(self) -> Iterator[Intent]:
        return iter(self._intents)

    def __len__(self) -> int:
        return len(self._intents)

    @classmethod
    def from_file(cls, path: Path, now: datetime | None = None) -> IntentCatalog:
        """Load a catalog from a JSON file.

        Response templates may contain ``{time_24h}``, ``{time_12h}``,
        ``{date_long}`` and ``{date_short}``; they are filled in once, here.

        Raises:
            CatalogError: If the file is unreadable or does not match the schema.
        """
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            parsed = CatalogFileModel.model_validate(raw)
        except (
            OSError,
            UnicodeDecodeError,
            json.JSONDecodeError,
            RecursionError,
            ValidationError,
        ) as e:
            raise CatalogError(f"Cannot load catalog from {path}: {e}") from e

        stamps = time_stamps(now or datetime.now())
        return cls(
            Intent.create(
                name=item.name,
                pattern=item.pattern,
                priority=item.priority,
                responses=[_bake(r, stamps) for r in item.responses],
            )
            for item in parsed.intents
        )
