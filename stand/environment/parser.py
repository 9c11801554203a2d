"""Parser for POSIX-env-like files.

One assignment per logical line. Blank lines and ``#`` comment lines are
skipped. Values may be unquoted (optionally followed by an inline ``#``
comment), single-quoted (literal) or double-quoted (with escape sequences);
quoted values may continue over several physical lines.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from stand.environment.errors import InvalidFormatError, UnterminatedQuoteError
from stand.environment.expander import expand_in_file


DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"
COMMENT_CHAR = "#"
ESCAPE_CHAR = "\\"

# Escape sequences decoded inside double quotes; anything else is kept as-is.
ESCAPE_SEQUENCES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


@dataclass(frozen=True)
class ParseOptions:
    """Options for env-file parsing.

    Attributes:
        expand_variables: Expand ``${NAME}`` against earlier assignments.
    """

    expand_variables: bool = True


def parse_env_content(
    content: str,
    options: ParseOptions | None = None,
) -> dict[str, str]:
    """Parse env-file text into an ordered mapping.

    A key assigned twice keeps the position of its first assignment and the
    value of its last.

    Args:
        content: Raw env-file text.
        options: Parse options (default: expansion enabled).

    Returns:
        Ordered mapping of variable names to values.

    Raises:
        InvalidFormatError: If a line is not a valid assignment.
        UnterminatedQuoteError: If a quoted value never closes.
    """
    options = options or ParseOptions()
    variables: dict[str, str] = {}
    lines = _split_lines(content)
    index = 0

    while index < len(lines):
        line_number = index + 1
        line = lines[index]
        stripped = line.strip()

        if not stripped or stripped.startswith(COMMENT_CHAR):
            index += 1
            continue

        eq_pos = find_assignment_split(line)
        if eq_pos is None:
            raise InvalidFormatError(line_number, line)

        key = line[:eq_pos].strip()
        if not is_valid_key(key):
            raise InvalidFormatError(line_number, line)

        value, consumed = _parse_value(line[eq_pos + 1 :], lines, index, line_number)
        if options.expand_variables:
            value = expand_in_file(value, variables)

        variables[key] = value
        index += consumed

    return variables


def is_valid_key(key: str) -> bool:
    """Return True if ``key`` is non-empty letters, digits and underscores."""
    return bool(key) and all(ch.isalnum() or ch == "_" for ch in key)


def find_assignment_split(line: str) -> int | None:
    """Find the first ``=`` that is not inside a quoted span.

    Backslash escapes are honoured only inside double quotes.

    Args:
        line: A physical line.

    Returns:
        Index of the ``=``, or None if there is none outside quotes.
    """
    in_single = False
    in_double = False
    escaped = False

    for i, ch in enumerate(line):
        if escaped:
            escaped = False
        elif ch == ESCAPE_CHAR and in_double:
            escaped = True
        elif ch == SINGLE_QUOTE and not in_double:
            in_single = not in_single
        elif ch == DOUBLE_QUOTE and not in_single:
            in_double = not in_double
        elif ch == "=" and not in_single and not in_double:
            return i

    return None


def decode_escapes(value: str) -> str:
    """Decode double-quote escape sequences.

    Unknown sequences keep their backslash; a trailing lone backslash is kept.
    """
    result: list[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == ESCAPE_CHAR and i + 1 < len(value):
            nxt = value[i + 1]
            result.append(ESCAPE_SEQUENCES.get(nxt, ch + nxt))
            i += 2
            continue
        result.append(ch)
        i += 1
    return "".join(result)


def serialize_env(variables: Mapping[str, str]) -> str:
    """Render a mapping as env-file text that parses back to the same mapping.

    Values that would otherwise be read differently (inline ``#``, line
    breaks, tabs, a leading quote) are double-quoted and escaped.

    Args:
        variables: Ordered mapping to render.

    Returns:
        Env-file text, one assignment per line.

    Raises:
        ValueError: If a key is not a valid variable name.
    """
    lines: list[str] = []
    for key, value in variables.items():
        if not is_valid_key(key):
            msg = f"Invalid variable name: '{key}'"
            raise ValueError(msg)
        if _needs_quoting(value):
            lines.append(f'{key}="{_encode_escapes(value)}"')
        else:
            lines.append(f"{key}={value}")
    return "".join(f"{line}\n" for line in lines)


def _split_lines(content: str) -> list[str]:
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def _parse_value(
    value_part: str,
    lines: list[str],
    index: int,
    line_number: int,
) -> tuple[str, int]:
    """Classify and extract a value.

    Returns:
        Tuple of (value, physical lines consumed).
    """
    leading = value_part.lstrip()

    if leading.startswith(DOUBLE_QUOTE):
        raw, consumed = _read_quoted(
            leading[1:], DOUBLE_QUOTE, lines, index, line_number
        )
        return decode_escapes(raw), consumed

    if leading.startswith(SINGLE_QUOTE):
        return _read_quoted(leading[1:], SINGLE_QUOTE, lines, index, line_number)

    comment_pos = _find_inline_comment(value_part)
    if comment_pos is None:
        return value_part, 1
    return value_part[:comment_pos].rstrip(), 1


def _read_quoted(
    first: str,
    quote: str,
    lines: list[str],
    index: int,
    line_number: int,
) -> tuple[str, int]:
    """Collect raw quoted content, continuing onto later lines if needed."""
    end = _find_closing_quote(first, quote)
    if end is not None:
        return first[:end], 1

    pieces = [first]
    for offset, line in enumerate(lines[index + 1 :], start=1):
        end = _find_closing_quote(line, quote)
        if end is not None:
            pieces.append(line[:end])
            return "\n".join(pieces), offset + 1
        pieces.append(line)

    raise UnterminatedQuoteError(line_number)


def _find_closing_quote(text: str, quote: str) -> int | None:
    escaped = False
    for i, ch in enumerate(text):
        if escaped:
            escaped = False
        elif ch == ESCAPE_CHAR and quote == DOUBLE_QUOTE:
            escaped = True
        elif ch == quote:
            return i
    return None


def _find_inline_comment(text: str) -> int | None:
    escaped = False
    for i, ch in enumerate(text):
        if escaped:
            escaped = False
        elif ch == ESCAPE_CHAR:
            escaped = True
        elif ch == COMMENT_CHAR:
            return i
    return None


def _needs_quoting(value: str) -> bool:
    if any(ch in value for ch in (COMMENT_CHAR, "\n", "\r", "\t")):
        return True
    return value.lstrip().startswith((DOUBLE_QUOTE, SINGLE_QUOTE))


def _encode_escapes(value: str) -> str:
    return (
        value.replace(ESCAPE_CHAR, ESCAPE_CHAR * 2)
        .replace(DOUBLE_QUOTE, ESCAPE_CHAR + DOUBLE_QUOTE)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
