"""Error types for configuration loading, validation and inheritance."""

from pathlib import Path


ErrorDetails = dict[str, str | int | list[str] | None]


class ConfigError(Exception):
    """Base exception for configuration errors.

    Subclasses carry the offending names as attributes; ``kind`` identifies
    the rule that failed.
    """

    kind = "config_error"

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message)
        self.message = message

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {"kind": self.kind, "message": self.message}


class ConfigValidationError(ConfigError):
    """A structural or value rule was violated."""

    kind = "validation_error"

    def __init__(self, message: str) -> None:
        """Initialize the error."""
        super().__init__(f"Configuration validation failed: {message}")
        self.reason = message


class MissingFieldError(ConfigError):
    """A required top-level field is absent or empty."""

    kind = "missing_field"

    def __init__(self, field: str) -> None:
        """Initialize the error with the missing field name."""
        super().__init__(f"Missing required field: {field}")
        self.field = field

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {**super().to_dict(), "field": self.field}


class InvalidEnvironmentError(ConfigError):
    """A reference names an environment that does not exist."""

    kind = "invalid_environment"

    def __init__(self, name: str) -> None:
        """Initialize the error with the unknown environment name."""
        super().__init__(f"Invalid environment reference: {name}")
        self.name = name

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {**super().to_dict(), "name": self.name}


class CircularInheritanceError(ConfigError):
    """The ``extends`` graph contains a cycle."""

    kind = "circular_reference"

    def __init__(self, cycle: list[str]) -> None:
        """Initialize the error.

        Args:
            cycle: Environment names from the first occurrence through the
                repeated name, e.g. ``["a", "b", "a"]``.
        """
        super().__init__(
            "Circular reference detected in environment hierarchy: "
            + " -> ".join(cycle)
        )
        self.cycle = list(cycle)

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {**super().to_dict(), "cycle": self.cycle}


class InterpolationError(ConfigError):
    """A ``${NAME}`` placeholder could not be interpolated."""

    kind = "interpolation_error"

    def __init__(self, variable: str, detail: str | None = None) -> None:
        """Initialize the error.

        Args:
            variable: Name (or raw placeholder text) that failed.
            detail: Optional explanation appended to the message.
        """
        message = f"Environment variable interpolation failed: {variable}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.variable = variable

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {**super().to_dict(), "variable": self.variable}


class UnterminatedPlaceholderError(InterpolationError):
    """A ``${`` has no closing ``}``."""

    kind = "unterminated_placeholder"

    def __init__(self, position: int, text: str) -> None:
        """Initialize the error.

        Args:
            position: Index of the ``${`` in the value.
            text: The value being interpolated.
        """
        super().__init__(
            text[position:],
            f"Unterminated placeholder at position {position} in '{text}': "
            "missing closing '}'",
        )
        self.position = position
        self.text = text


class EmptyPlaceholderError(InterpolationError):
    """A ``${}`` placeholder has no name."""

    kind = "empty_placeholder"

    def __init__(self, position: int, text: str) -> None:
        """Initialize the error.

        Args:
            position: Index of the ``${`` in the value.
            text: The value being interpolated.
        """
        super().__init__(
            "${}",
            f"Empty variable name at position {position} in '{text}': "
            "'${}' is not valid",
        )
        self.position = position
        self.text = text


class ConfigFileNotFoundError(ConfigError):
    """No configuration document was found."""

    kind = "file_not_found"

    def __init__(self, path: Path) -> None:
        """Initialize the error with the searched location."""
        super().__init__(f"Configuration file not found: {path}")
        self.path = path


class ConfigNotAFileError(ConfigError):
    """The configuration path exists but is not a regular file."""

    kind = "not_a_file"

    def __init__(self, path: Path) -> None:
        """Initialize the error with the offending path."""
        super().__init__(f"Path is not a file: {path}")
        self.path = path


class ConfigDocumentError(ConfigError):
    """The configuration document could not be read or parsed."""

    kind = "document_error"

    def __init__(self, path: Path, message: str) -> None:
        """Initialize the error.

        Args:
            path: Path of the document.
            message: Reader or parser error text.
        """
        super().__init__(f"Failed to parse configuration file {path}: {message}")
        self.path = path
