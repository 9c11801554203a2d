"""Configuration validation rules.

Each rule raises the first violation it finds as a specific ConfigError;
nothing is corrected automatically.
"""

import structlog

from stand.config.constants import COMPONENT_VALIDATOR
from stand.config.errors import (
    ConfigError,
    ConfigValidationError,
    InvalidEnvironmentError,
    MissingFieldError,
)
from stand.config.inheritance import check_extends_graph
from stand.config.schemas import Configuration
from stand.observability.metrics import ResolutionMetrics


logger = structlog.get_logger()


class ConfigValidator:
    """Validates a configuration document before and after inheritance."""

    def validate(self, config: Configuration) -> None:
        """Run every rule against a configuration as declared.

        Args:
            config: The configuration to check.

        Raises:
            ConfigError: The first rule violation found.
        """
        try:
            self.validate_required_fields(config)
            self.validate_environment_references(config)
            self.validate_no_circular_references(config)
            self.validate_common(config)
        except ConfigError as e:
            self._record_failure(e)
            raise

    def validate_resolved(self, config: Configuration) -> None:
        """Re-check required fields after inheritance and interpolation.

        Raises:
            ConfigError: If a required field became empty.
        """
        try:
            self.validate_required_fields(config)
        except ConfigError as e:
            self._record_failure(e)
            raise

    def validate_required_fields(self, config: Configuration) -> None:
        """Check version, environments and descriptions are present.

        Raises:
            MissingFieldError: If ``version`` or ``environments`` is empty.
            ConfigValidationError: If an environment has no description.
        """
        if not config.version:
            raise MissingFieldError("version")

        if not config.environments:
            raise MissingFieldError("environments")

        for name, env in config.environments.items():
            if not env.description:
                msg = f"Environment '{name}' must have a non-empty description"
                raise ConfigValidationError(msg)

    def validate_environment_references(self, config: Configuration) -> None:
        """Check every ``extends`` and the default environment exist.

        Raises:
            InvalidEnvironmentError: If a reference names no environment.
        """
        for env in config.environments.values():
            if env.extends is not None and env.extends not in config.environments:
                raise InvalidEnvironmentError(env.extends)

        default = config.settings.default_environment
        if default is not None and default not in config.environments:
            raise InvalidEnvironmentError(default)

    def validate_no_circular_references(self, config: Configuration) -> None:
        """Check the ``extends`` graph is acyclic.

        Raises:
            CircularInheritanceError: If a cycle exists.
        """
        check_extends_graph(config.environments)

    def validate_common(self, config: Configuration) -> None:
        """Check common variables have non-empty keys and values.

        Raises:
            ConfigValidationError: If a key or value is empty.
        """
        if config.common is None:
            return

        for key, value in config.common.items():
            if not key:
                msg = "Common variable keys cannot be empty"
                raise ConfigValidationError(msg)
            if not value:
                msg = f"Common variable '{key}' cannot have empty value"
                raise ConfigValidationError(msg)

    def _record_failure(self, error: ConfigError) -> None:
        ResolutionMetrics.get_instance().record_validation_error()
        logger.error(
            "config_validation_failed",
            component=COMPONENT_VALIDATOR,
            **error.to_dict(),
        )


def validate_config(config: Configuration) -> None:
    """Validate ``config``; see :meth:`ConfigValidator.validate`."""
    ConfigValidator().validate(config)
