"""Interpolation of ``${NAME}`` placeholders from the process environment.

This pass is separate from cross-source expansion: it only ever looks at the
process environment, and every malformed or unknown placeholder is an error.
"""

from collections.abc import Mapping

from stand.config.errors import (
    EmptyPlaceholderError,
    InterpolationError,
    UnterminatedPlaceholderError,
)
from stand.crypto.markers import is_marked_encrypted


def interpolate(value: str, environ: Mapping[str, str]) -> str:
    """Replace ``${NAME}`` placeholders with process environment values.

    Encrypted values are returned untouched.

    Args:
        value: Text to interpolate.
        environ: Process environment snapshot.

    Returns:
        The interpolated text.

    Raises:
        UnterminatedPlaceholderError: If a ``${`` is never closed.
        EmptyPlaceholderError: If a placeholder is ``${}``.
        InterpolationError: If a name is not set in ``environ``.
    """
    if is_marked_encrypted(value):
        return value

    parts: list[str] = []
    pos = 0
    while (start := value.find("${", pos)) != -1:
        end = value.find("}", start + 2)
        if end == -1:
            raise UnterminatedPlaceholderError(start, value)

        name = value[start + 2 : end]
        if not name:
            raise EmptyPlaceholderError(start, value)
        if name not in environ:
            raise InterpolationError(name, "not set in the process environment")

        parts.append(value[pos:start])
        parts.append(environ[name])
        pos = end + 1

    parts.append(value[pos:])
    return "".join(parts)


def interpolate_mapping(
    variables: Mapping[str, str],
    environ: Mapping[str, str],
) -> dict[str, str]:
    """Interpolate every value of a mapping, preserving key order."""
    return {key: interpolate(value, environ) for key, value in variables.items()}
