"""Env-file parsing and multi-source variable resolution."""

from stand.environment.errors import (
    CircularReferenceError,
    EnvFileNotFoundError,
    EnvFileParseError,
    EnvIoError,
    EnvLoadError,
    EnvNotAFileError,
    EnvParseError,
    EnvPermissionError,
    InvalidFormatError,
    ResolveError,
    SourceError,
    UndefinedVariableError,
    UnterminatedQuoteError,
)
from stand.environment.expander import (
    CrossSourceExpander,
    UndefinedVariableBehavior,
    expand_in_file,
)
from stand.environment.loader import load_env_file
from stand.environment.parser import ParseOptions, parse_env_content, serialize_env
from stand.environment.resolver import (
    EnvironmentResolver,
    ResolutionOptions,
    resolve_sources,
)
from stand.environment.sources import (
    DefaultSource,
    EnvFileSource,
    OverridesSource,
    ProcessEnvironmentSource,
    VariableSource,
)


__all__ = [
    "CircularReferenceError",
    "CrossSourceExpander",
    "DefaultSource",
    "EnvFileNotFoundError",
    "EnvFileParseError",
    "EnvFileSource",
    "EnvIoError",
    "EnvLoadError",
    "EnvNotAFileError",
    "EnvParseError",
    "EnvPermissionError",
    "EnvironmentResolver",
    "InvalidFormatError",
    "OverridesSource",
    "ParseOptions",
    "ProcessEnvironmentSource",
    "ResolutionOptions",
    "ResolveError",
    "SourceError",
    "UndefinedVariableBehavior",
    "UndefinedVariableError",
    "UnterminatedQuoteError",
    "VariableSource",
    "expand_in_file",
    "load_env_file",
    "parse_env_content",
    "resolve_sources",
    "serialize_env",
]
