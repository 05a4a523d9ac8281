"""Replybot configuration — Pydantic BaseSettings with env var support."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class ReplybotConfig(BaseSettings):
    """Central configuration for Replybot.

    All fields can be overridden via environment variables prefixed with REPLYBOT_.
    Example: REPLYBOT_DATA_DIR=/custom/path
    """

    model_config = {
        "env_prefix": "REPLYBOT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # Persistence
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".replybot")
    model_filename: str = "chatbot_model.json"
    autosave_every: int = Field(default=0, ge=0)

    # Learning
    decay_factor: float = Field(default=0.95, gt=0.0, lt=1.0)

    # Replies
    fallback_reply: str = "I'm not sure I understand. Could you rephrase that?"
    apology_reply: str = "Sorry, something went wrong. Please try again."
    catalog_file: Path | None = None
    seed: int | None = None

    # Session
    exit_command: str = "quit"
    welcome_message: str = "Hello! How can I assist you today? (Type 'quit' to exit)"
    farewell_message: str = "Goodbye! Have a great day!"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @property
    def model_path(self) -> Path:
        """Return the persisted response model file path."""
        return self.data_dir / self.model_filename
