"""Configuration loading, validation and inheritance module."""

from stand.config.activation import (
    build_environment_sources,
    get_environment,
    resolve_environment_variables,
)
from stand.config.errors import (
    CircularInheritanceError,
    ConfigDocumentError,
    ConfigError,
    ConfigFileNotFoundError,
    ConfigNotAFileError,
    ConfigValidationError,
    EmptyPlaceholderError,
    InterpolationError,
    InvalidEnvironmentError,
    MissingFieldError,
    UnterminatedPlaceholderError,
)
from stand.config.inheritance import ConfigInheritanceEngine, resolve_inheritance
from stand.config.loader import (
    ConfigLoader,
    find_config_file,
    load_config,
    load_config_with_inheritance,
    load_config_with_validation,
)
from stand.config.origins import (
    OriginKind,
    VariableOrigin,
    detect_variable_origins,
    inheritance_chain,
)
from stand.config.schemas import (
    Configuration,
    Environment,
    NestedShellBehavior,
    Settings,
)
from stand.config.state_machine import ConfigState, ConfigStateError
from stand.config.validator import ConfigValidator, validate_config


__all__ = [
    "CircularInheritanceError",
    "ConfigDocumentError",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigInheritanceEngine",
    "ConfigLoader",
    "ConfigNotAFileError",
    "ConfigState",
    "ConfigStateError",
    "ConfigValidationError",
    "ConfigValidator",
    "Configuration",
    "EmptyPlaceholderError",
    "Environment",
    "InterpolationError",
    "InvalidEnvironmentError",
    "MissingFieldError",
    "NestedShellBehavior",
    "OriginKind",
    "Settings",
    "UnterminatedPlaceholderError",
    "VariableOrigin",
    "build_environment_sources",
    "detect_variable_origins",
    "find_config_file",
    "get_environment",
    "inheritance_chain",
    "load_config",
    "load_config_with_inheritance",
    "load_config_with_validation",
    "resolve_environment_variables",
    "resolve_inheritance",
    "validate_config",
]
