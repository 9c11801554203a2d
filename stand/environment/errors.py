"""Error types for env-file parsing, loading and source resolution.

Each stage owns a closed hierarchy rooted at one base class so callers can
catch a whole stage (``except ResolveError``) or a single failure kind.
"""

from pathlib import Path
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from stand.environment.sources import VariableSource


ErrorDetails = dict[str, str | int | list[str] | None]


class EnvParseError(Exception):
    """Base exception for env-file syntax errors."""

    kind = "parse_error"

    def __init__(self, message: str, line: int) -> None:
        """Initialize the parse error.

        Args:
            message: Human-readable error message.
            line: 1-based line number where the failing assignment starts.
        """
        super().__init__(message)
        self.message = message
        self.line = line

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {"kind": self.kind, "message": self.message, "line": self.line}


class InvalidFormatError(EnvParseError):
    """A line is not a ``KEY=value`` assignment or its key is malformed."""

    kind = "invalid_format"

    def __init__(self, line: int, content: str) -> None:
        """Initialize the error.

        Args:
            line: 1-based line number.
            content: The offending physical line.
        """
        super().__init__(f"Invalid format at line {line}: '{content}'", line)
        self.content = content

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {**super().to_dict(), "content": self.content}


class UnterminatedQuoteError(EnvParseError):
    """A quoted value has no closing quote before end of input."""

    kind = "unterminated_quote"

    def __init__(self, line: int) -> None:
        """Initialize the error.

        Args:
            line: 1-based line number where the quoted value opens.
        """
        super().__init__(f"Unterminated quote at line {line}", line)


class EnvLoadError(Exception):
    """Base exception for failures loading an env file from disk."""

    kind = "load_error"

    def __init__(self, message: str, path: Path) -> None:
        """Initialize the load error.

        Args:
            message: Human-readable error message.
            path: Path of the env file.
        """
        super().__init__(message)
        self.message = message
        self.path = path

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {"kind": self.kind, "message": self.message, "path": str(self.path)}


class EnvFileNotFoundError(EnvLoadError):
    """The env file does not exist."""

    kind = "file_not_found"

    def __init__(self, path: Path) -> None:
        """Initialize the error with the missing path."""
        super().__init__(f"File not found: {path}", path)


class EnvPermissionError(EnvLoadError):
    """The env file exists but cannot be read."""

    kind = "permission_denied"

    def __init__(self, path: Path) -> None:
        """Initialize the error with the unreadable path."""
        super().__init__(f"Permission denied accessing file: {path}", path)


class EnvNotAFileError(EnvLoadError):
    """The path exists but is not a regular file."""

    kind = "not_a_file"

    def __init__(self, path: Path) -> None:
        """Initialize the error with the offending path."""
        super().__init__(f"Path is not a file: {path}", path)


class EnvFileParseError(EnvLoadError):
    """The env file was read but its content failed to parse."""

    kind = "file_parse_error"

    def __init__(self, path: Path, cause: EnvParseError) -> None:
        """Initialize the error.

        Args:
            path: Path of the env file.
            cause: The underlying parse error.
        """
        super().__init__(f"Parse error in file {path}: {cause}", path)
        self.cause = cause

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {**super().to_dict(), "line": self.cause.line}


class EnvIoError(EnvLoadError):
    """Any other I/O failure while reading the env file."""

    kind = "io_error"

    def __init__(self, path: Path, cause: OSError | UnicodeDecodeError) -> None:
        """Initialize the error.

        Args:
            path: Path of the env file.
            cause: The underlying OS or decoding error.
        """
        super().__init__(f"I/O error reading file {path}: {cause}", path)
        self.cause = cause


class ResolveError(Exception):
    """Base exception for multi-source resolution failures."""

    kind = "resolve_error"

    def __init__(self, message: str) -> None:
        """Initialize the resolve error.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message)
        self.message = message

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {"kind": self.kind, "message": self.message}


class CircularReferenceError(ResolveError):
    """Variable expansion revisited a name already being expanded."""

    kind = "circular_reference"

    def __init__(self, cycle: list[str]) -> None:
        """Initialize the error.

        Args:
            cycle: Names from the first occurrence through the repeated name.
        """
        super().__init__(
            "Circular reference detected in variable expansion: "
            + " -> ".join(cycle)
        )
        self.cycle = list(cycle)

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {**super().to_dict(), "cycle": self.cycle}


class UndefinedVariableError(ResolveError):
    """A ``${NAME}`` reference names no variable in the merged mapping."""

    kind = "undefined_variable"

    def __init__(self, variable: str) -> None:
        """Initialize the error with the undefined name."""
        super().__init__(f"Undefined variable referenced: {variable}")
        self.variable = variable

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {**super().to_dict(), "variable": self.variable}


class SourceError(ResolveError):
    """A variable source could not be loaded."""

    kind = "source_error"

    def __init__(self, source: "VariableSource", cause: EnvLoadError) -> None:
        """Initialize the error.

        Args:
            source: The source that failed.
            cause: The underlying load error.
        """
        super().__init__(f"Error loading from source {source.describe()}: {cause}")
        self.source = source
        self.cause = cause

    def to_dict(self) -> ErrorDetails:
        """Convert error to dictionary for logging."""
        return {
            **super().to_dict(),
            "source": self.source.describe(),
            "cause": self.cause.kind,
        }
