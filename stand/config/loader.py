"""Configuration loader with validation, inheritance and state machine."""

import hashlib
import json
import os
import time
import tomllib
from collections.abc import Mapping
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from stand.config.constants import (
    COMPONENT_CONFIG,
    CONFIG_FILE_NAME,
    CONFIG_FILE_NAME_SHORT,
    FORMAT_TOML,
    FORMAT_YAML,
    LEGACY_CONFIG_DIR,
    LEGACY_CONFIG_FILE_NAME,
)
from stand.config.error_hints import format_validation_error
from stand.config.errors import (
    ConfigDocumentError,
    ConfigError,
    ConfigFileNotFoundError,
    ConfigNotAFileError,
    ConfigValidationError,
)
from stand.config.inheritance import ConfigInheritanceEngine
from stand.config.schemas import Configuration
from stand.config.state_machine import ConfigState, ConfigStateMachine
from stand.config.validator import ConfigValidator
from stand.observability.metrics import ResolutionMetrics


logger = structlog.get_logger()


def find_config_file(project_dir: Path | str) -> Path:
    """Locate the configuration document in a project directory.

    Searches ``.stand.toml``, then a ``.stand`` file, then the legacy
    ``.stand/config.yaml``.

    Args:
        project_dir: Project root directory.

    Returns:
        Path to the first document found.

    Raises:
        ConfigFileNotFoundError: If none exists.
    """
    project_dir = Path(project_dir)
    candidates = [
        project_dir / CONFIG_FILE_NAME,
        project_dir / CONFIG_FILE_NAME_SHORT,
        project_dir / LEGACY_CONFIG_DIR / LEGACY_CONFIG_FILE_NAME,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise ConfigFileNotFoundError(project_dir / CONFIG_FILE_NAME)


def detect_format(path: Path) -> str:
    """Return the document format implied by the file name."""
    if path.suffix in (".yaml", ".yml"):
        return FORMAT_YAML
    return FORMAT_TOML


class ConfigLoader:
    """Loads, validates and resolves a configuration document.

    Implements a state machine for configuration loading:
    UNLOADED -> LOADING -> VALIDATED -> RESOLVED -> READY

    A loader instance performs one load; the returned Configuration is
    never modified afterwards.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        """Initialize the loader.

        Args:
            environ: Process environment used for interpolation; a snapshot
                of ``os.environ`` is taken at load time if None.
        """
        self._environ = environ
        self._state_machine = ConfigStateMachine()
        self._validator = ConfigValidator()
        self._file_path: Path | None = None
        self._file_checksum: str | None = None
        self._load_errors: list[dict[str, str]] = []
        self._load_duration_ms: float = 0

    @property
    def state(self) -> ConfigState:
        """Get the current loader state."""
        return self._state_machine.state

    @property
    def file_checksum(self) -> str | None:
        """Get SHA-256 checksum of the loaded document."""
        return self._file_checksum

    @property
    def load_errors(self) -> list[dict[str, str]]:
        """Get load errors if any."""
        return self._load_errors.copy()

    @property
    def load_duration_ms(self) -> float:
        """Get load duration in milliseconds."""
        return self._load_duration_ms

    def _compute_checksum(self, content: bytes) -> str:
        """Compute SHA-256 checksum of content."""
        return hashlib.sha256(content).hexdigest()

    def _read_document(self, file_path: Path) -> dict[str, object]:
        """Read and parse a TOML or YAML document.

        Raises:
            ConfigFileNotFoundError: If the file does not exist.
            ConfigNotAFileError: If the path is not a regular file.
            ConfigDocumentError: If reading or parsing fails.
        """
        if not file_path.exists():
            raise ConfigFileNotFoundError(file_path)
        if not file_path.is_file():
            raise ConfigNotAFileError(file_path)

        try:
            content_bytes = file_path.read_bytes()
            self._file_checksum = self._compute_checksum(content_bytes)
            content_str = content_bytes.decode("utf-8")
            if detect_format(file_path) == FORMAT_YAML:
                parsed = yaml.safe_load(content_str) or {}
            else:
                parsed = tomllib.loads(content_str)
        except (
            OSError,
            UnicodeDecodeError,
            tomllib.TOMLDecodeError,
            yaml.YAMLError,
        ) as e:
            raise ConfigDocumentError(file_path, str(e)) from e

        if not isinstance(parsed, dict):
            raise ConfigDocumentError(file_path, "top level must be a table")
        return parsed

    def _build_configuration(self, document: dict[str, object]) -> Configuration:
        """Validate the document against the schema.

        Raises:
            ConfigValidationError: Listing every schema failure with hints.
        """
        try:
            return Configuration.model_validate(document)
        except ValidationError as e:
            details = [
                format_validation_error(
                    ".".join(str(loc) for loc in err["loc"]),
                    err["msg"],
                    err["type"],
                )
                for err in e.errors()
            ]
            raise ConfigValidationError("\n".join(details)) from e

    def load(
        self,
        file_path: Path,
        *,
        validate: bool = True,
        resolve: bool = True,
    ) -> Configuration:
        """Load a configuration document.

        Args:
            file_path: Path to the TOML (or legacy YAML) document.
            validate: Run the validator before and after resolution.
            resolve: Apply common variables, inheritance and interpolation.

        Returns:
            The loaded configuration.

        Raises:
            ConfigError: If any stage fails; no partial result is returned.
            ConfigStateError: If called more than once.
        """
        start_time = time.perf_counter()
        self._state_machine.transition(ConfigState.LOADING)
        self._file_path = Path(file_path)

        log = logger.bind(
            component=COMPONENT_CONFIG,
            file_path=str(self._file_path),
            phase="LOADING",
        )

        try:
            log.info("loading_config_file", validate=validate, resolve=resolve)
            document = self._read_document(self._file_path)
            config = self._build_configuration(document)
            log.info(
                "config_file_loaded",
                file_sha256=self._file_checksum,
                environment_count=len(config.environments),
            )

            if validate:
                self._validator.validate(config)
                self._state_machine.transition(ConfigState.VALIDATED)
                log.info("config_validated", phase="VALIDATED")

            if resolve:
                environ = (
                    dict(os.environ) if self._environ is None else dict(self._environ)
                )
                config = ConfigInheritanceEngine(environ).resolve_inheritance(config)
                if validate:
                    self._validator.validate_resolved(config)
                self._state_machine.transition(ConfigState.RESOLVED)
                log.info("config_resolved", phase="RESOLVED")

        except ConfigError as e:
            self._handle_error(e, log)
            raise

        self._state_machine.transition(ConfigState.READY)
        self._load_duration_ms = (time.perf_counter() - start_time) * 1000
        ResolutionMetrics.get_instance().record_config_loaded(self._load_duration_ms)
        log.info(
            "config_ready",
            phase="READY",
            config_load_duration_ms=self._load_duration_ms,
        )
        return config

    def _handle_error(
        self,
        error: ConfigError,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Record a failed load."""
        self._state_machine.transition(ConfigState.FAILED)
        self._load_errors.append({"type": error.kind, "msg": error.message})
        log.error("config_load_failed", phase="FAILED", **error.to_dict())

    def get_load_summary(self) -> dict[str, object]:
        """Get a summary of the load.

        Returns:
            Dictionary with load summary.
        """
        return {
            "file_path": str(self._file_path) if self._file_path else None,
            "state": self._state_machine.state.name,
            "file_checksum": self._file_checksum,
            "load_error_count": len(self._load_errors),
            "load_errors": self._load_errors,
            "load_duration_ms": self._load_duration_ms,
        }

    def get_load_summary_json(self) -> str:
        """Get load summary as JSON string with stable ordering."""
        return json.dumps(self.get_load_summary(), sort_keys=True, indent=2)


def load_config(project_dir: Path | str) -> Configuration:
    """Load the project's configuration as declared, without resolution."""
    return ConfigLoader().load(
        find_config_file(project_dir), validate=False, resolve=False
    )


def load_config_with_inheritance(
    project_dir: Path | str,
    environ: Mapping[str, str] | None = None,
) -> Configuration:
    """Load the project's configuration with inheritance and interpolation."""
    return ConfigLoader(environ).load(find_config_file(project_dir), validate=False)


def load_config_with_validation(
    project_dir: Path | str,
    environ: Mapping[str, str] | None = None,
) -> Configuration:
    """Load, validate and resolve the project's configuration."""
    return ConfigLoader(environ).load(find_config_file(project_dir))
