"""Shared test fixtures for Replybot."""

from __future__ import annotations

import os
from datetime import datetime
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep REPLYBOT_* variables and a stray .env file out of every test."""
    for name in list(os.environ):
        if name.startswith("REPLYBOT_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Return a not-yet-created data directory inside tmp_path."""
    return tmp_path / ".replybot"


@pytest.fixture
def replybot_config(data_dir: Path):
    """Create a ReplybotConfig pointing to the temporary data directory."""
    from replybot.core.config import ReplybotConfig

    return ReplybotConfig(data_dir=data_dir, seed=7)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 5, 14, 7)


@pytest.fixture
def catalog(fixed_now: datetime):
    """The default catalog with time and date baked from fixed_now."""
    from replybot.intent.defaults import build_default_catalog

    return build_default_catalog(now=fixed_now)
