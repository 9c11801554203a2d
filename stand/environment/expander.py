"""``${NAME}`` expansion over variable mappings.

Two flavors share the placeholder scan in :func:`split_placeholders`:

- the in-file flavor used while parsing an env file, which only sees the
  variables committed earlier in the same file and expands unknown names to
  an empty string;
- the cross-source flavor used by the resolver, which sees the complete
  merged mapping, follows references depth-first and detects reference cycles.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from stand.crypto.markers import is_marked_encrypted
from stand.environment.errors import CircularReferenceError, UndefinedVariableError


PLACEHOLDER_OPEN = "${"
PLACEHOLDER_CLOSE = "}"


class UndefinedVariableBehavior(str, Enum):
    """What cross-source expansion does with a reference to an unknown name."""

    ERROR = "error"
    EMPTY_STRING = "empty_string"
    LEAVE_UNEXPANDED = "leave_unexpanded"


def split_placeholders(value: str) -> list[tuple[str, str | None]]:
    """Split ``value`` into ``(literal, name)`` segments.

    Each segment is literal text followed by the name of one ``${NAME}``
    placeholder; the last segment has no name. An opening ``${`` without a
    closing ``}`` ends the scan and the remainder stays literal.
    """
    segments: list[tuple[str, str | None]] = []
    pos = 0
    while (start := value.find(PLACEHOLDER_OPEN, pos)) != -1:
        end = value.find(PLACEHOLDER_CLOSE, start + len(PLACEHOLDER_OPEN))
        if end == -1:
            break
        name = value[start + len(PLACEHOLDER_OPEN) : end]
        segments.append((value[pos:start], name))
        pos = end + len(PLACEHOLDER_CLOSE)
    segments.append((value[pos:], None))
    return segments


def substitute(value: str, lookup: Callable[[str], str]) -> str:
    """Replace every ``${NAME}`` in ``value`` with ``lookup(NAME)``.

    The scan runs left to right and never rescans substituted text. An
    opening ``${`` without a closing ``}`` ends the scan and the remainder is
    kept verbatim.

    Args:
        value: Text to expand.
        lookup: Returns the replacement for a placeholder name.

    Returns:
        The expanded text.
    """
    parts: list[str] = []
    for text, name in split_placeholders(value):
        parts.append(text)
        if name is not None:
            parts.append(lookup(name))
    return "".join(parts)


def expand_in_file(value: str, defined: Mapping[str, str]) -> str:
    """Expand ``value`` against variables parsed earlier in the same file.

    Args:
        value: Raw value of the assignment being parsed.
        defined: Variables committed so far.

    Returns:
        The expanded value; unknown names become empty strings.
    """
    return substitute(value, lambda name: defined.get(name, ""))


@dataclass
class _Frame:
    """A variable whose value is being expanded."""

    name: str
    segments: list[tuple[str, str | None]]
    index: int = 0
    parts: list[str] = field(default_factory=list)


class CrossSourceExpander:
    """Expansion of a fully merged mapping.

    References are followed depth-first on an explicit stack of frames, one
    per name being expanded, so reference chains are not limited by the
    interpreter's recursion limit. Meeting a name that is already on the
    stack is a cycle. Each name is expanded at most once per expander; later
    references reuse the cached result.
    """

    def __init__(
        self,
        variables: Mapping[str, str],
        undefined_behavior: UndefinedVariableBehavior = (
            UndefinedVariableBehavior.EMPTY_STRING
        ),
    ) -> None:
        """Initialize the expander.

        Args:
            variables: The merged, unexpanded mapping.
            undefined_behavior: Policy for references to unknown names.
        """
        self._variables = variables
        self._undefined_behavior = undefined_behavior
        self._expanded: dict[str, str] = {}

    def expand_all(self) -> dict[str, str]:
        """Expand every value, preserving key order.

        Returns:
            A new mapping of fully expanded values.

        Raises:
            CircularReferenceError: If a value references itself transitively.
            UndefinedVariableError: If a name is unknown and the policy is ERROR.
        """
        return {key: self.expand(key) for key in self._variables}

    def expand(self, name: str) -> str:
        """Return the fully expanded value of the variable ``name``.

        Raises:
            KeyError: If ``name`` is not in the mapping.
            CircularReferenceError: If the value references itself transitively.
            UndefinedVariableError: If a name is unknown and the policy is ERROR.
        """
        if name in self._expanded:
            return self._expanded[name]

        frames = [self._frame(name)]
        # Stack position of every name currently being expanded
        on_stack = {name: 0}
        while frames:
            frame = frames[-1]
            if frame.index == len(frame.segments):
                frames.pop()
                del on_stack[frame.name]
                value = "".join(frame.parts)
                self._expanded[frame.name] = value
                if frames:
                    frames[-1].parts.append(value)
                continue

            text, ref = frame.segments[frame.index]
            frame.index += 1
            frame.parts.append(text)
            if ref is None:
                continue

            if ref in self._expanded:
                frame.parts.append(self._expanded[ref])
                continue

            if ref in on_stack:
                cycle = [f.name for f in frames[on_stack[ref] :]]
                raise CircularReferenceError([*cycle, ref])

            if ref in self._variables:
                on_stack[ref] = len(frames)
                frames.append(self._frame(ref))
            else:
                frame.parts.append(self._undefined(ref))

        return self._expanded[name]

    def _frame(self, name: str) -> _Frame:
        value = self._variables[name]
        if is_marked_encrypted(value):
            return _Frame(name, [(value, None)])
        return _Frame(name, split_placeholders(value))

    def _undefined(self, name: str) -> str:
        if self._undefined_behavior is UndefinedVariableBehavior.ERROR:
            raise UndefinedVariableError(name)
        if self._undefined_behavior is UndefinedVariableBehavior.LEAVE_UNEXPANDED:
            return f"{PLACEHOLDER_OPEN}{name}{PLACEHOLDER_CLOSE}"
        return ""
