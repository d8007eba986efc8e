"""
Palimpsest type definitions.

This module exports the coordinate value types and the error types.
"""

# Core types
from .core import ByteRange, CodeUnitRange, Line, LineColumn, LineRange

# Error types
from .errors import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    PalimpsestError,
    TranslationFailure,
    ValidationError,
)

__all__ = [
    # Core types
    "ByteRange",
    "CodeUnitRange",
    "Line",
    "LineColumn",
    "LineRange",
    # Error types
    "ErrorCode",
    "ErrorSeverity",
    "ErrorContext",
    "PalimpsestError",
    "ConfigurationError",
    "ValidationError",
    "TranslationFailure",
]
