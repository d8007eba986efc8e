"""
Phase 1 Tests: Error Types

Covers the exception hierarchy and the translation failure taxonomy:
- Error codes and severities per subclass
- Formatted messages and dictionary serialization
- TranslationFailure values
"""

import json

from palimpsest.types import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    PalimpsestError,
    TranslationFailure,
    ValidationError,
)


class TestPalimpsestError:
    """Tests for the base error class."""

    def test_is_exception(self):
        error = PalimpsestError(ErrorCode.VALIDATION_FAILED, "internal", "shown")
        assert isinstance(error, Exception)
        assert str(error) == "internal"

    def test_default_context(self):
        error = PalimpsestError(ErrorCode.VALIDATION_FAILED, "internal", "shown")
        assert error.context.operation is None
        assert error.context.timestamp.tzinfo is not None

    def test_formatted_message_includes_context(self):
        error = PalimpsestError(
            ErrorCode.INVALID_TEXT,
            "bad text",
            "Text is not valid Unicode.",
            context=ErrorContext(operation="SourceTextView", file_path="A.swift", component="text"),
        )
        formatted = error.get_formatted_message()
        assert "Text is not valid Unicode." in formatted
        assert "Code: 6004" in formatted
        assert "Operation: SourceTextView" in formatted
        assert "File: A.swift" in formatted
        assert "Component: text" in formatted

    def test_to_dict_is_json_serializable(self):
        original = ValueError("boom")
        error = PalimpsestError(
            ErrorCode.INVALID_CONFIG,
            "internal",
            "shown",
            context=ErrorContext(additional_info={"key": "value"}),
            original_error=original,
        )
        data = error.to_dict()
        assert data["name"] == "PalimpsestError"
        assert data["code"] == 4001
        assert data["message"] == "internal"
        assert data["user_message"] == "shown"
        assert data["context"]["additional_info"] == {"key": "value"}
        assert data["original_error"] == "boom"
        json.dumps(data)


class TestErrorSubclasses:
    """Tests for ConfigurationError and ValidationError."""

    def test_configuration_error(self):
        error = ConfigurationError("threshold negative")
        assert isinstance(error, PalimpsestError)
        assert error.code == ErrorCode.INVALID_CONFIG
        assert error.severity == ErrorSeverity.HIGH
        assert error.user_message == "Configuration error occurred."

    def test_validation_error_default_code(self):
        error = ValidationError("nope")
        assert error.code == ErrorCode.VALIDATION_FAILED
        assert error.severity == ErrorSeverity.MEDIUM

    def test_validation_error_custom_code(self):
        error = ValidationError("lone surrogate", code=ErrorCode.INVALID_TEXT)
        assert error.code == ErrorCode.INVALID_TEXT
        assert error.to_dict()["name"] == "ValidationError"


class TestTranslationFailure:
    """Tests for the per-call failure taxonomy."""

    def test_values(self):
        assert TranslationFailure.BOUNDARY_MISALIGNMENT == "boundary_misalignment"
        assert TranslationFailure.OUT_OF_RANGE == "out_of_range"
        assert TranslationFailure.NO_MATCH == "no_match"

    def test_str_formatting(self):
        assert f"{TranslationFailure.OUT_OF_RANGE}" == "out_of_range"
