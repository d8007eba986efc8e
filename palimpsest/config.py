"""Configuration for source text views.

A TextConfig is passed to SourceTextView explicitly, or the process-wide
default is built once from the environment:

    PALIMPSEST_CACHE_THRESHOLD  Code-unit count at or below which the byte
                                offset cache is bypassed (default 50).
    PALIMPSEST_THREAD_SAFE      "true"/"false"; guard cache population with
                                a lock (default true).
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from typing import Mapping

from loguru import logger

from palimpsest.constants import (
    DEFAULT_CACHE_THRESHOLD,
    ENV_CACHE_THRESHOLD,
    ENV_THREAD_SAFE,
)
from palimpsest.types.errors import ConfigurationError, ErrorContext

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class TextConfig:
    """Tunables for a SourceTextView and its byte offset cache."""

    cache_threshold: int = DEFAULT_CACHE_THRESHOLD
    thread_safe: bool = True

    def __post_init__(self) -> None:
        if self.cache_threshold < 0:
            raise ConfigurationError(
                f"cache_threshold must be non-negative, got {self.cache_threshold}",
                context=ErrorContext(operation="TextConfig", component="config"),
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TextConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``).

        Raises:
            ConfigurationError: If a variable is set to an unparsable value.
        """
        env = os.environ if environ is None else environ
        threshold = DEFAULT_CACHE_THRESHOLD
        thread_safe = True

        raw_threshold = env.get(ENV_CACHE_THRESHOLD, "").strip()
        if raw_threshold:
            try:
                threshold = int(raw_threshold)
            except ValueError as e:
                logger.warning(f"Rejecting {ENV_CACHE_THRESHOLD}={raw_threshold!r}")
                raise ConfigurationError(
                    f"{ENV_CACHE_THRESHOLD} must be an integer, got {raw_threshold!r}",
                    context=ErrorContext(operation="from_env", component="config"),
                    original_error=e,
                ) from e

        raw_thread_safe = env.get(ENV_THREAD_SAFE, "").strip().lower()
        if raw_thread_safe:
            if raw_thread_safe in _TRUE_VALUES:
                thread_safe = True
            elif raw_thread_safe in _FALSE_VALUES:
                thread_safe = False
            else:
                logger.warning(f"Rejecting {ENV_THREAD_SAFE}={raw_thread_safe!r}")
                raise ConfigurationError(
                    f"{ENV_THREAD_SAFE} must be a boolean, got {raw_thread_safe!r}",
                    context=ErrorContext(operation="from_env", component="config"),
                )

        return cls(cache_threshold=threshold, thread_safe=thread_safe)


_default_lock = threading.Lock()
_default_config: TextConfig | None = None


def get_default_config() -> TextConfig:
    """Return the process-wide default config, built from the environment once."""
    global _default_config
    if _default_config is not None:
        return _default_config
    with _default_lock:
        # Re-check after acquiring lock (double-checked locking)
        if _default_config is None:  # pragma: no branch
            _default_config = TextConfig.from_env()
    return _default_config


def reset_default_config() -> None:
    """Forget the cached default so the next call re-reads the environment."""
    global _default_config
    with _default_lock:
        _default_config = None
