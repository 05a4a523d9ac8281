"""Replybot — rule-based responder that learns from its own replies."""

__version__ = "0.1.0"
