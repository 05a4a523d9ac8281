"""Intent module — catalog, built-in tables, sentiment."""

from replybot.intent.catalog import CatalogError, Intent, IntentCatalog
from replybot.intent.defaults import build_default_catalog
from replybot.intent.sentiment import Sentiment, classify, tint

__all__ = [
    "CatalogError",
    "Intent",
    "IntentCatalog",
    "Sentiment",
    "build_default_catalog",
    "classify",
    "tint",
]
