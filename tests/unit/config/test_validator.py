"""Unit tests for configuration validation rules."""

import pytest

from stand.config.errors import (
    CircularInheritanceError,
    ConfigValidationError,
    InvalidEnvironmentError,
    MissingFieldError,
)
from stand.config.schemas import Configuration
from stand.config.validator import ConfigValidator, validate_config
from stand.observability.metrics import ResolutionMetrics


def make_config(**document: object) -> Configuration:
    """Build a configuration with sensible defaults."""
    document.setdefault("version", "2.0")
    document.setdefault("environments", {"dev": {"description": "Development"}})
    return Configuration.model_validate(document)


@pytest.fixture(autouse=True)
def reset_metrics() -> None:
    ResolutionMetrics.reset()


class TestRequiredFields:
    """Tests for required field checks."""

    @pytest.mark.unit
    def test_valid_config_passes(self) -> None:
        """Test a minimal valid configuration."""
        validate_config(make_config())

    @pytest.mark.unit
    def test_missing_version(self) -> None:
        """Test an empty version is rejected."""
        with pytest.raises(MissingFieldError) as exc_info:
            validate_config(make_config(version=""))
        assert exc_info.value.field == "version"

    @pytest.mark.unit
    def test_no_environments(self) -> None:
        """Test an empty environments table is rejected."""
        with pytest.raises(MissingFieldError) as exc_info:
            validate_config(make_config(environments={}))
        assert exc_info.value.field == "environments"

    @pytest.mark.unit
    def test_empty_description(self) -> None:
        """Test every environment needs a description."""
        config = make_config(environments={"dev": {"description": ""}})
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_config(config)
        assert "dev" in exc_info.value.reason
        assert exc_info.value.message.startswith("Configuration validation failed:")


class TestReferences:
    """Tests for environment reference checks."""

    @pytest.mark.unit
    def test_unknown_extends(self) -> None:
        """Test extends must name a declared environment."""
        config = make_config(
            environments={"dev": {"description": "Dev", "extends": "base"}}
        )
        with pytest.raises(InvalidEnvironmentError) as exc_info:
            validate_config(config)
        assert exc_info.value.name == "base"

    @pytest.mark.unit
    def test_unknown_default_environment(self) -> None:
        """Test the default environment must be declared."""
        config = make_config(settings={"default_environment": "prod"})
        with pytest.raises(InvalidEnvironmentError) as exc_info:
            validate_config(config)
        assert exc_info.value.name == "prod"

    @pytest.mark.unit
    def test_known_default_environment(self) -> None:
        """Test a declared default environment passes."""
        validate_config(make_config(settings={"default_environment": "dev"}))

    @pytest.mark.unit
    def test_cycle(self) -> None:
        """Test a cyclic extends graph is rejected."""
        config = make_config(
            environments={
                "A": {"description": "A", "extends": "B"},
                "B": {"description": "B", "extends": "A"},
            }
        )
        with pytest.raises(CircularInheritanceError) as exc_info:
            validate_config(config)
        assert exc_info.value.cycle == ["A", "B", "A"]


class TestCommon:
    """Tests for common variable checks."""

    @pytest.mark.unit
    def test_empty_common_value(self) -> None:
        """Test common values cannot be empty."""
        with pytest.raises(ConfigValidationError, match="APP"):
            validate_config(make_config(common={"APP": ""}))

    @pytest.mark.unit
    def test_empty_common_key(self) -> None:
        """Test common keys cannot be empty."""
        with pytest.raises(ConfigValidationError, match="keys cannot be empty"):
            validate_config(make_config(common={"": "value"}))

    @pytest.mark.unit
    def test_valid_common(self) -> None:
        """Test non-empty common variables pass."""
        validate_config(make_config(common={"APP": "demo"}))


class TestFailureRecording:
    """Tests for failure bookkeeping."""

    @pytest.mark.unit
    def test_failure_counted(self) -> None:
        """Test each failed validation is counted."""
        validator = ConfigValidator()
        for _ in range(2):
            with pytest.raises(MissingFieldError):
                validator.validate(make_config(version=""))
        assert ResolutionMetrics.get_instance().validation_errors_total == 2

    @pytest.mark.unit
    def test_validate_resolved_checks_descriptions(self) -> None:
        """Test the post-resolution pass re-checks required fields."""
        config = make_config(environments={"dev": {"description": ""}})
        with pytest.raises(ConfigValidationError):
            ConfigValidator().validate_resolved(config)
