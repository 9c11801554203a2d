"""Error hints for configuration errors.

Provides user-friendly hints with actionable remediation steps
for common configuration errors.
"""

from typing import Final

from stand.config.errors import ConfigError


# Mapping of error kinds to user-friendly hints
ERROR_HINTS: Final[dict[str, str]] = {
    # Configuration rules
    "missing_field": "This field is required. Please add it to your configuration.",
    "invalid_environment": "Check the environment name for typos; it must be declared under [environments].",
    "circular_reference": "Remove one of the 'extends' links so the inheritance chain ends at a root environment.",
    "interpolation_error": "Export the referenced variable in your shell before loading the configuration.",
    "unterminated_placeholder": "Close the placeholder with '}' (e.g. '${HOME}').",
    "empty_placeholder": "Put a variable name between the braces (e.g. '${HOME}').",
    "file_not_found": "Create a .stand.toml file in the project root.",
    "not_a_file": "The configuration path must be a regular file, not a directory.",
    "document_error": "Invalid TOML/YAML syntax. Check quoting and table headers.",
    # Pydantic schema errors
    "missing": "This field is required. Please add it to your configuration.",
    "string_type": "This field must be a text string. Quote the value.",
    "bool_type": "This field must be true or false.",
    "dict_type": "This field must be a table/mapping.",
    "enum": "Check the allowed values in the documentation.",
    "extra_forbidden": "This key is not recognised here. Check for typos.",
}

# Field-specific hints for more context
FIELD_HINTS: Final[dict[str, str]] = {
    "version": "Set a schema version string at the top level (e.g. version = \"2.0\").",
    "environments": "Declare at least one environment, e.g. [environments.dev].",
    "description": "Every environment needs a non-empty description.",
    "extends": "Must name another environment declared in the same file.",
    "color": "Must be a color name string (e.g. 'green', 'red').",
    "requires_confirmation": "Must be true or false.",
    "nested_shell_behavior": "Must be one of: prevent, allow, warn.",
    "default_environment": "Must name an environment declared in the same file.",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a configuration error.

    Args:
        error_type: Error kind or Pydantic error type (e.g. 'missing').
        field_name: Optional dotted field path for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        # 'environments.dev.color' -> 'color'
        simple_field = field_name.split(".")[-1]
        if simple_field in FIELD_HINTS:
            return FIELD_HINTS[simple_field]

    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a schema validation error with optional hint.

    Args:
        location: The error location (e.g., 'environments.dev.color').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        hint = get_error_hint(error_type, location)
        return f"{base}\n    Hint: {hint}"
    return base


def format_config_error(error: ConfigError, *, include_hint: bool = True) -> str:
    """Format a configuration error with optional hint.

    Args:
        error: The error to render.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    if not include_hint:
        return error.message
    field = getattr(error, "field", None)
    return f"{error.message}\n    Hint: {get_error_hint(error.kind, field)}"
