"""
Pytest configuration and shared fixtures for Palimpsest tests.
"""

import pytest
from loguru import logger

from palimpsest.config import TextConfig, reset_default_config
from palimpsest.constants import ENV_CACHE_THRESHOLD, ENV_DEBUG, ENV_THREAD_SAFE
from palimpsest.text.view import SourceTextView


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from PALIMPSEST_* variables and the cached default config."""
    for name in (ENV_CACHE_THRESHOLD, ENV_THREAD_SAFE, ENV_DEBUG, "DEBUG"):
        monkeypatch.delenv(name, raising=False)
    reset_default_config()
    yield
    reset_default_config()


@pytest.fixture
def make_view():
    """Factory fixture for SourceTextView with an explicit config."""

    def _make(text: str, cache_threshold: int = 50, file: str | None = "Test.swift") -> SourceTextView:
        return SourceTextView(text, file=file, config=TextConfig(cache_threshold=cache_threshold))

    return _make


@pytest.fixture
def log_messages():
    """Capture loguru output at DEBUG and above as a list of strings."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level}|{message}")
    yield messages
    logger.remove(handler_id)
