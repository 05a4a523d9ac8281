"""Built-in knowledge base, word lists and intent table."""

from __future__ import annotations

from datetime import datetime
from types import MappingProxyType

from replybot.intent.catalog import Intent, IntentCatalog, time_stamps

GREETINGS: tuple[str, ...] = ("Hello!", "Hi there!", "Greetings!", "Nice to see you!")
FAREWELLS: tuple[str, ...] = ("Goodbye!", "See you later!", "Have a nice day!", "Bye bye!")

HOW_ARE_YOU_REPLY = "I'm just a chatbot, but I'm functioning well! How about you?"
IDENTITY_REPLY = "I'm an intelligent chatbot created to assist you!"

WEATHER_REPLIES: tuple[str, ...] = (
    "The weather is nice today!",
    "It looks like it might rain.",
    "Sunny and warm - perfect day!",
)


def knowledge_base(now: datetime) -> MappingProxyType[str, tuple[str, ...]]:
    """Build the knowledge base, baking time and date text from ``now``."""
    stamps = time_stamps(now)
    return MappingProxyType(
        {
            "weather": WEATHER_REPLIES,
            "time": (
                f"The current time is {stamps['time_24h']}",
                f"My clock shows {stamps['time_12h']}",
            ),
            "date": (
                f"Today is {stamps['date_long']}",
                f"The date is {stamps['date_short']}",
            ),
        }
    )


def build_default_catalog(now: datetime | None = None) -> IntentCatalog:
    """Build the default catalog.

    Time and date replies reflect ``now`` (process start by default), not
    the moment a reply is picked.
    """
    kb = knowledge_base(now or datetime.now())
    # (name, pattern, priority, responses) in registration order
    table: list[tuple[str, str, int, tuple[str, ...]]] = [
        ("greeting", r"(.*)(hello|hi|hey)(.*)", 0, GREETINGS),
        ("how_are_you", r"(.*)(how are you|how's it going)(.*)", 2, (HOW_ARE_YOU_REPLY,)),
        ("identity", r"(.*)(your name|who are you)(.*)", 2, (IDENTITY_REPLY,)),
        ("weather", r"(.*)(weather|temperature|forecast)(.*)", 1, kb["weather"]),
        ("time", r"(.*)(time|clock)(.*)", 1, kb["time"]),
        ("date", r"(.*)(date|day|today)(.*)", 1, kb["date"]),
        ("farewell", r"(.*)(bye|goodbye|see ya)(.*)", 3, FAREWELLS),
    ]
    return IntentCatalog(
        Intent.create(name, pattern, priority, responses)
        for name, pattern, priority, responses in table
    )
