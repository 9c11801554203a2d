"""Unit tests for configuration schemas."""

import pytest
from pydantic import ValidationError

from stand.config.schemas import (
    Configuration,
    Environment,
    NestedShellBehavior,
    Settings,
)


class TestEnvironment:
    """Tests for Environment model."""

    @pytest.mark.unit
    def test_sibling_keys_become_variables(self) -> None:
        """Test non-metadata keys are gathered into variables in order."""
        env = Environment.model_validate(
            {
                "description": "Development",
                "DATABASE_URL": "postgres://localhost/dev",
                "color": "green",
                "DEBUG": "true",
            }
        )
        assert env.description == "Development"
        assert env.color == "green"
        assert list(env.variables.items()) == [
            ("DATABASE_URL", "postgres://localhost/dev"),
            ("DEBUG", "true"),
        ]

    @pytest.mark.unit
    def test_nested_variables_table(self) -> None:
        """Test an explicit variables table is accepted."""
        env = Environment.model_validate(
            {"description": "Dev", "variables": {"A": "1"}, "B": "2"}
        )
        assert env.variables == {"A": "1", "B": "2"}

    @pytest.mark.unit
    def test_defaults(self) -> None:
        """Test optional metadata defaults to unset."""
        env = Environment.model_validate({"description": "Dev"})
        assert env.extends is None
        assert env.color is None
        assert env.requires_confirmation is None
        assert env.variables == {}

    @pytest.mark.unit
    def test_non_string_variable_rejected(self) -> None:
        """Test variable values must be strings."""
        with pytest.raises(ValidationError):
            Environment.model_validate({"description": "Dev", "PORT": 8080})

    @pytest.mark.unit
    def test_frozen(self) -> None:
        """Test environments are immutable."""
        env = Environment(description="Dev")
        with pytest.raises(ValidationError):
            env.color = "red"  # type: ignore[misc]

    @pytest.mark.unit
    def test_to_document_flattens_variables(self) -> None:
        """Test rendering puts variables beside metadata."""
        env = Environment(
            description="Dev", extends="base", variables={"A": "1"}
        )
        assert env.to_document() == {
            "description": "Dev",
            "extends": "base",
            "A": "1",
        }


class TestSettings:
    """Tests for Settings model."""

    @pytest.mark.unit
    def test_nested_shell_behavior_enum(self) -> None:
        """Test the nested shell policy parses from its string value."""
        settings = Settings.model_validate({"nested_shell_behavior": "warn"})
        assert settings.nested_shell_behavior is NestedShellBehavior.WARN

    @pytest.mark.unit
    def test_invalid_nested_shell_behavior(self) -> None:
        """Test unknown policies are rejected."""
        with pytest.raises(ValidationError):
            Settings.model_validate({"nested_shell_behavior": "sometimes"})

    @pytest.mark.unit
    def test_unknown_key_rejected(self) -> None:
        """Test unknown settings keys are rejected."""
        with pytest.raises(ValidationError):
            Settings.model_validate({"colour": "red"})


class TestConfiguration:
    """Tests for Configuration model."""

    @pytest.mark.unit
    def test_environment_order_preserved(self) -> None:
        """Test environments keep document order."""
        config = Configuration.model_validate(
            {
                "version": "2.0",
                "environments": {
                    "prod": {"description": "Production"},
                    "dev": {"description": "Development"},
                    "staging": {"description": "Staging"},
                },
            }
        )
        assert config.environment_names() == ["prod", "dev", "staging"]

    @pytest.mark.unit
    def test_get_environment(self) -> None:
        """Test lookup by name."""
        config = Configuration.model_validate(
            {"version": "2.0", "environments": {"dev": {"description": "Dev"}}}
        )
        assert config.get_environment("dev") is not None
        assert config.get_environment("missing") is None

    @pytest.mark.unit
    def test_to_document(self) -> None:
        """Test rendering to a plain document mapping."""
        config = Configuration.model_validate(
            {
                "version": "2.0",
                "common": {"APP": "demo"},
                "settings": {"default_environment": "dev"},
                "environments": {"dev": {"description": "Dev", "A": "1"}},
            }
        )
        assert config.to_document() == {
            "version": "2.0",
            "settings": {"default_environment": "dev"},
            "common": {"APP": "demo"},
            "environments": {"dev": {"description": "Dev", "A": "1"}},
        }
