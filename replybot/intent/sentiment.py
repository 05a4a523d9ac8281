"""Keyword sentiment detection and reply tinting."""

from __future__ import annotations

import re
from enum import Enum


class Sentiment(Enum):
    """Sentiment label derived from a single input."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


POSITIVE_WORDS: frozenset[str] = frozenset({"awesome", "great", "happy", "love", "wonderful"})
NEGATIVE_WORDS: frozenset[str] = frozenset({"bad", "terrible", "awful", "hate", "sad"})

POSITIVE_SUFFIX = " That's wonderful to hear!"
NEGATIVE_SUFFIX = " I'm sorry to hear that. Is there anything I can do to help?"


def _keyword_pattern(words: frozenset[str]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(w) for w in sorted(words))
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


_POSITIVE = _keyword_pattern(POSITIVE_WORDS)
_NEGATIVE = _keyword_pattern(NEGATIVE_WORDS)


def classify(text: str) -> Sentiment:
    """Classify text by keyword presence; positive wins over negative."""
    if _POSITIVE.search(text):
        return Sentiment.POSITIVE
    if _NEGATIVE.search(text):
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def tint(reply: str, sentiment: Sentiment) -> str:
    """Append the sentiment-dependent suffix to a reply."""
    if sentiment is Sentiment.POSITIVE:
        return reply + POSITIVE_SUFFIX
    if sentiment is Sentiment.NEGATIVE:
        return reply + NEGATIVE_SUFFIX
    return reply
