"""
Logging utility for Palimpsest.

Palimpsest logs through loguru. Messages are emitted only on the paths where
a range is skipped (misaligned or out-of-range offsets handed over by the
syntax service) and when configuration is rejected, never on the hot
success paths of the translator.

Embedding applications that do not want these messages can silence the
library with ``logger.disable("palimpsest")``.
"""

import os

from loguru import logger as loguru_logger

from palimpsest.constants import ENV_DEBUG


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    for name in (ENV_DEBUG, "DEBUG"):
        if os.environ.get(name, "").lower() == "true":
            return True
    return False


# Export loguru logger for direct use
logger = loguru_logger
