"""Core module — config, engine, responder, session, CLI."""

from replybot.core.config import ReplybotConfig
from replybot.core.engine import ReplybotEngine
from replybot.core.responder import ResponseEngine
from replybot.core.session import ChatSession

__all__ = ["ChatSession", "ReplybotConfig", "ReplybotEngine", "ResponseEngine"]
