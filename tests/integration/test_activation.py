"""Integration tests for activating an environment of a loaded configuration."""

from pathlib import Path

import pytest

from stand.config import (
    InvalidEnvironmentError,
    build_environment_sources,
    load_config_with_validation,
    resolve_environment_variables,
)
from stand.crypto import ENCRYPTED_PREFIX, MissingPrivateKeyError
from stand.environment import (
    CircularReferenceError,
    DefaultSource,
    EnvFileSource,
    OverridesSource,
    ProcessEnvironmentSource,
    ResolutionOptions,
    UndefinedVariableBehavior,
    UndefinedVariableError,
)


CONFIG_TOML = """\
version = "2.0"

[common]
APP_NAME = "demo"

[environments.dev]
description = "Development"
HOST = "localhost"
PORT = "8000"
SECRET = "encrypted:terces"
"""


class ReversingProvider:
    """Test provider that 'decrypts' by reversing the payload."""

    def encrypt(self, value: str, public_key: str) -> str:
        return ENCRYPTED_PREFIX + value[::-1]

    def decrypt(self, value: str, private_key: str) -> str:
        return value.removeprefix(ENCRYPTED_PREFIX)[::-1]


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    (tmp_path / ".stand.toml").write_text(CONFIG_TOML, encoding="utf-8")
    (tmp_path / ".env").write_text(
        "API_URL=http://${HOST}:${PORT}/api\n", encoding="utf-8"
    )
    return tmp_path


class TestBuildEnvironmentSources:
    """Tests for build_environment_sources."""

    @pytest.mark.integration
    def test_source_order(self, project_dir: Path) -> None:
        """Test sources are ordered lowest precedence first."""
        config = load_config_with_validation(project_dir, environ={})
        sources = build_environment_sources(
            config,
            "dev",
            env_files=[project_dir / ".env"],
            include_process_environment=True,
            overrides={"PORT": "9000"},
        )
        assert [type(source) for source in sources] == [
            DefaultSource,
            EnvFileSource,
            ProcessEnvironmentSource,
            OverridesSource,
        ]

    @pytest.mark.integration
    def test_defaults_only(self, project_dir: Path) -> None:
        """Test only the environment's variables are used by default."""
        config = load_config_with_validation(project_dir, environ={})
        sources = build_environment_sources(config, "dev")
        assert sources == [
            DefaultSource(variables=config.environments["dev"].variables)
        ]

    @pytest.mark.integration
    def test_unknown_environment(self, project_dir: Path) -> None:
        """Test activating an undeclared environment."""
        config = load_config_with_validation(project_dir, environ={})
        with pytest.raises(InvalidEnvironmentError):
            build_environment_sources(config, "staging")


class TestResolveEnvironmentVariables:
    """Tests for resolve_environment_variables."""

    @pytest.mark.integration
    def test_declared_variables(self, project_dir: Path) -> None:
        """Test common and declared variables come through in order."""
        config = load_config_with_validation(project_dir, environ={})
        variables = resolve_environment_variables(config, "dev", environ={})
        assert list(variables.items()) == [
            ("APP_NAME", "demo"),
            ("HOST", "localhost"),
            ("PORT", "8000"),
            ("SECRET", "encrypted:terces"),
        ]

    @pytest.mark.integration
    def test_env_file_references_environment(self, project_dir: Path) -> None:
        """Test env file values expand against the environment's variables."""
        config = load_config_with_validation(project_dir, environ={})
        variables = resolve_environment_variables(
            config, "dev", env_files=[project_dir / ".env"], environ={}
        )
        assert variables["API_URL"] == "http://localhost:8000/api"

    @pytest.mark.integration
    def test_overrides_win(self, project_dir: Path) -> None:
        """Test overrides replace declared values before expansion."""
        config = load_config_with_validation(project_dir, environ={})
        variables = resolve_environment_variables(
            config,
            "dev",
            env_files=[project_dir / ".env"],
            overrides={"PORT": "9000"},
            environ={},
        )
        assert variables["API_URL"] == "http://localhost:9000/api"
        assert variables["PORT"] == "9000"

    @pytest.mark.integration
    def test_process_environment_layer(self, project_dir: Path) -> None:
        """Test the process environment beats declared values when requested."""
        config = load_config_with_validation(project_dir, environ={})
        variables = resolve_environment_variables(
            config,
            "dev",
            env_files=[project_dir / ".env"],
            include_process_environment=True,
            environ={"HOST": "from-shell"},
        )
        assert variables["API_URL"] == "http://from-shell:8000/api"

    @pytest.mark.integration
    def test_decrypts_with_provider(self, project_dir: Path) -> None:
        """Test marked values are decrypted after expansion."""
        config = load_config_with_validation(project_dir, environ={})
        variables = resolve_environment_variables(
            config,
            "dev",
            environ={},
            provider=ReversingProvider(),
            private_key="private-key",
        )
        assert variables["SECRET"] == "secret"

    @pytest.mark.integration
    def test_decrypt_without_key_fails(self, project_dir: Path) -> None:
        """Test a provider without a key cannot decrypt."""
        config = load_config_with_validation(project_dir, environ={})
        with pytest.raises(MissingPrivateKeyError):
            resolve_environment_variables(
                config, "dev", environ={}, provider=ReversingProvider()
            )

    @pytest.mark.integration
    def test_cycle_through_overrides(self, project_dir: Path) -> None:
        """Test a reference cycle formed by overrides fails activation."""
        config = load_config_with_validation(project_dir, environ={})
        with pytest.raises(CircularReferenceError) as exc_info:
            resolve_environment_variables(
                config,
                "dev",
                overrides={"A": "${B}", "B": "${A}"},
                environ={},
            )
        assert exc_info.value.cycle == ["A", "B", "A"]

    @pytest.mark.integration
    def test_undefined_error_policy(self, project_dir: Path) -> None:
        """Test the error policy surfaces undefined references."""
        config = load_config_with_validation(project_dir, environ={})
        options = ResolutionOptions(
            undefined_variable_behavior=UndefinedVariableBehavior.ERROR
        )
        with pytest.raises(UndefinedVariableError) as exc_info:
            resolve_environment_variables(
                config,
                "dev",
                overrides={"EXTRA": "${NOT_DEFINED}"},
                options=options,
                environ={},
            )
        assert exc_info.value.variable == "NOT_DEFINED"
