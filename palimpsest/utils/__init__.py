"""
Palimpsest utility modules.

- Logging (loguru re-export and debug switch)
"""

from .logger import is_debug_enabled, logger

__all__ = [
    "is_debug_enabled",
    "logger",
]
