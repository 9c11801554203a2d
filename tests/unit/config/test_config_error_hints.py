"""Unit tests for configuration error hints."""

import pytest

from stand.config.error_hints import (
    ERROR_HINTS,
    FIELD_HINTS,
    format_config_error,
    format_validation_error,
    get_error_hint,
)
from stand.config.errors import (
    CircularInheritanceError,
    ConfigError,
    InvalidEnvironmentError,
    MissingFieldError,
)


class TestGetErrorHint:
    """Tests for get_error_hint function."""

    @pytest.mark.unit
    def test_returns_hint_for_known_error_type(self) -> None:
        """Test that known error types return their hints."""
        hint = get_error_hint("missing")
        assert hint == ERROR_HINTS["missing"]
        assert "required" in hint.lower()

    @pytest.mark.unit
    def test_returns_default_for_unknown_error_type(self) -> None:
        """Test that unknown error types return default hint."""
        hint = get_error_hint("some_unknown_error_type")
        assert "documentation" in hint.lower()

    @pytest.mark.unit
    def test_field_specific_hint_takes_precedence(self) -> None:
        """Test that field-specific hints override error type hints."""
        hint = get_error_hint("enum", field_name="settings.nested_shell_behavior")
        assert hint == FIELD_HINTS["nested_shell_behavior"]
        assert "prevent" in hint

    @pytest.mark.unit
    def test_extracts_simple_field_name_from_path(self) -> None:
        """Test that field name is extracted from dotted path."""
        hint = get_error_hint("string_type", field_name="environments.dev.color")
        assert hint == FIELD_HINTS["color"]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "kind",
        [
            "missing_field",
            "invalid_environment",
            "circular_reference",
            "interpolation_error",
            "file_not_found",
        ],
    )
    def test_config_error_kinds_have_hints(self, kind: str) -> None:
        """Test every configuration error kind has a hint."""
        assert kind in ERROR_HINTS


class TestFormatValidationError:
    """Tests for format_validation_error function."""

    @pytest.mark.unit
    def test_includes_hint_by_default(self) -> None:
        """Test that hints are included by default."""
        result = format_validation_error(
            "environments.dev.requires_confirmation",
            "Input should be a valid boolean",
            "bool_type",
        )
        assert result.startswith("environments.dev.requires_confirmation:")
        assert "Hint:" in result

    @pytest.mark.unit
    def test_without_hint(self) -> None:
        """Test formatting without hint."""
        result = format_validation_error(
            "version", "Field required", "missing", include_hint=False
        )
        assert result == "version: Field required"


class TestFormatConfigError:
    """Tests for format_config_error function."""

    @pytest.mark.unit
    def test_uses_kind_hint(self) -> None:
        """Test the hint follows the error kind."""
        result = format_config_error(CircularInheritanceError(["a", "b", "a"]))
        assert "a -> b -> a" in result
        assert ERROR_HINTS["circular_reference"] in result

    @pytest.mark.unit
    def test_uses_field_hint(self) -> None:
        """Test a missing field gets its field-specific hint."""
        result = format_config_error(MissingFieldError("version"))
        assert FIELD_HINTS["version"] in result

    @pytest.mark.unit
    def test_without_hint(self) -> None:
        """Test the bare message is returned."""
        error = InvalidEnvironmentError("ghost")
        assert format_config_error(error, include_hint=False) == error.message

    @pytest.mark.unit
    def test_to_dict(self) -> None:
        """Test structured error details for logging."""
        assert InvalidEnvironmentError("ghost").to_dict() == {
            "kind": "invalid_environment",
            "message": "Invalid environment reference: ghost",
            "name": "ghost",
        }
        assert ConfigError("boom").to_dict() == {
            "kind": "config_error",
            "message": "boom",
        }
