"""Multi-source variable resolution.

Sources are merged lowest precedence first, then every value is expanded
against the complete merged mapping with cycle detection.
"""

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import structlog

from stand.environment.errors import EnvLoadError, ResolveError, SourceError
from stand.environment.expander import CrossSourceExpander, UndefinedVariableBehavior
from stand.environment.loader import load_env_file
from stand.environment.parser import ParseOptions
from stand.environment.sources import (
    DefaultSource,
    EnvFileSource,
    OverridesSource,
    ProcessEnvironmentSource,
    VariableSource,
)
from stand.observability.metrics import ResolutionMetrics
from stand.settings.app import StandSettings, UndefinedVariablesMode


logger = structlog.get_logger()

_BEHAVIOR_BY_MODE = {
    UndefinedVariablesMode.EMPTY: UndefinedVariableBehavior.EMPTY_STRING,
    UndefinedVariablesMode.ERROR: UndefinedVariableBehavior.ERROR,
    UndefinedVariablesMode.LEAVE: UndefinedVariableBehavior.LEAVE_UNEXPANDED,
}


@dataclass(frozen=True)
class ResolutionOptions:
    """Options for cross-source resolution.

    Attributes:
        undefined_variable_behavior: Policy for references to unknown names.
    """

    undefined_variable_behavior: UndefinedVariableBehavior = (
        UndefinedVariableBehavior.EMPTY_STRING
    )

    @classmethod
    def from_settings(cls, settings: StandSettings) -> "ResolutionOptions":
        """Build options from ``STAND_UNDEFINED_VARIABLES``."""
        behavior = _BEHAVIOR_BY_MODE[settings.undefined_variables]
        return cls(undefined_variable_behavior=behavior)


def load_source_variables(
    source: VariableSource,
    environ: Mapping[str, str],
) -> dict[str, str]:
    """Obtain the flat, unexpanded mapping a source contributes.

    Args:
        source: The source to read.
        environ: Process environment snapshot for this resolution.

    Returns:
        Ordered mapping of the source's variables.

    Raises:
        SourceError: If an env file cannot be loaded.
    """
    match source:
        case DefaultSource(variables=variables) | OverridesSource(variables=variables):
            return dict(variables)
        case EnvFileSource(path=path):
            try:
                return load_env_file(path, ParseOptions(expand_variables=False))
            except EnvLoadError as e:
                raise SourceError(source, e) from e
        case ProcessEnvironmentSource():
            return dict(environ)
    msg = f"Unsupported variable source: {source!r}"
    raise TypeError(msg)


def resolve_sources(
    sources: Iterable[VariableSource],
    options: ResolutionOptions | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Merge sources by precedence and expand every value.

    Args:
        sources: Sources ordered lowest precedence first.
        options: Resolution options (default: undefined names expand to "").
        environ: Process environment; a snapshot of ``os.environ`` if None.

    Returns:
        A new ordered mapping of fully expanded values.

    Raises:
        SourceError: If a source cannot be loaded.
        CircularReferenceError: If values reference each other in a cycle.
        UndefinedVariableError: If a name is unknown and the policy is ERROR.
    """
    options = options or ResolutionOptions()
    snapshot = dict(os.environ) if environ is None else dict(environ)
    source_list = list(sources)
    log = logger.bind(component="resolver", source_count=len(source_list))

    merged: dict[str, str] = {}
    for source in source_list:
        merged.update(load_source_variables(source, snapshot))

    expander = CrossSourceExpander(merged, options.undefined_variable_behavior)
    try:
        resolved = expander.expand_all()
    except ResolveError as e:
        log.error("variable_resolution_failed", **e.to_dict())
        raise

    ResolutionMetrics.get_instance().record_variables_resolved(len(resolved))
    log.info("variables_resolved", variable_count=len(resolved))
    return resolved


class EnvironmentResolver:
    """Collects variable sources and resolves them on demand.

    Sources added later take precedence over sources added earlier. Each
    call to :meth:`resolve` reads every source afresh.
    """

    def __init__(self, sources: Iterable[VariableSource] = ()) -> None:
        """Initialize the resolver.

        Args:
            sources: Initial sources, lowest precedence first.
        """
        self._sources: list[VariableSource] = list(sources)

    @property
    def sources(self) -> list[VariableSource]:
        """Get a copy of the configured sources."""
        return self._sources.copy()

    def add_source(self, source: VariableSource) -> None:
        """Append a source with higher precedence than all existing ones."""
        self._sources.append(source)

    def resolve(
        self,
        options: ResolutionOptions | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Resolve the configured sources.

        See :func:`resolve_sources` for arguments and errors.
        """
        return resolve_sources(self._sources, options, environ)
