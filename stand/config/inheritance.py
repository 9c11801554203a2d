"""Environment inheritance resolution.

Environments reference their parent by name through ``extends``. Chains are
walked depth-first over the name-indexed table with an explicit path for
cycle detection; resolved environments are memoized per call.
"""

import os
from collections.abc import Callable, Mapping
from typing import TypeVar

import structlog

from stand.config.constants import COMPONENT_INHERITANCE
from stand.config.errors import (
    CircularInheritanceError,
    ConfigError,
    InvalidEnvironmentError,
)
from stand.config.interpolation import interpolate, interpolate_mapping
from stand.config.schemas import Configuration, Environment
from stand.observability.metrics import ResolutionMetrics


logger = structlog.get_logger()

R = TypeVar("R")


def walk_extends(
    name: str,
    environments: Mapping[str, Environment],
    combine: Callable[[str, Environment, R | None], R],
    memo: dict[str, R],
    path: list[str] | None = None,
) -> R:
    """Resolve ``name`` after all of its ancestors, depth-first.

    Args:
        name: Environment to resolve.
        environments: Name-indexed environment table.
        combine: Builds the result for an environment from its name, its
            own declaration and its resolved parent (None for a root).
        memo: Results of environments already resolved in this walk.
        path: Names currently being resolved, outermost first.

    Returns:
        The combined result for ``name``.

    Raises:
        CircularInheritanceError: If ``name`` is already on the path.
        InvalidEnvironmentError: If ``name`` is not declared.
    """
    path = [] if path is None else path
    if name in path:
        raise CircularInheritanceError([*path[path.index(name) :], name])
    if name in memo:
        return memo[name]

    env = environments.get(name)
    if env is None:
        raise InvalidEnvironmentError(name)

    parent: R | None = None
    if env.extends is not None:
        path.append(name)
        try:
            parent = walk_extends(env.extends, environments, combine, memo, path)
        finally:
            path.pop()

    memo[name] = combine(name, env, parent)
    return memo[name]


def check_extends_graph(environments: Mapping[str, Environment]) -> None:
    """Walk every chain without merging, to surface graph errors early.

    Raises:
        CircularInheritanceError: If any chain contains a cycle.
        InvalidEnvironmentError: If any ``extends`` names an unknown environment.
    """
    memo: dict[str, None] = {}
    for name in environments:
        walk_extends(name, environments, lambda _name, _env, _parent: None, memo)


class ConfigInheritanceEngine:
    """Applies common variables, ``extends`` inheritance and interpolation.

    Stages run in order and any failure aborts the whole resolution:

    1. Common merge: ``common`` is the lowest-precedence layer of every chain.
    2. Extends resolution: parent variables first, child declarations win;
       ``color`` and ``requires_confirmation`` fall back to the parent when
       unset; ``description`` is never inherited.
    3. Interpolation: variable values and descriptions are interpolated
       against the process environment only.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        """Initialize the engine.

        Args:
            environ: Process environment for interpolation; a snapshot of
                ``os.environ`` is taken per call if None.
        """
        self._environ = environ

    def resolve_inheritance(self, config: Configuration) -> Configuration:
        """Resolve every environment of ``config``.

        Args:
            config: Configuration as declared in the document.

        Returns:
            A new configuration whose environments carry their full variable
            sets and inherited metadata.

        Raises:
            CircularInheritanceError: If the ``extends`` graph has a cycle.
            InvalidEnvironmentError: If an ``extends`` names an unknown environment.
            InterpolationError: If a placeholder cannot be interpolated.
        """
        environ = dict(os.environ) if self._environ is None else dict(self._environ)
        log = logger.bind(
            component=COMPONENT_INHERITANCE,
            environment_count=len(config.environments),
        )

        try:
            merged = self.merge_environments(config)
            resolved = {
                name: self._interpolate_environment(env, environ)
                for name, env in merged.items()
            }
            common = (
                interpolate_mapping(config.common, environ)
                if config.common is not None
                else None
            )
        except ConfigError as e:
            log.error("inheritance_resolution_failed", **e.to_dict())
            raise

        ResolutionMetrics.get_instance().record_environments_resolved(len(resolved))
        log.info("inheritance_resolved")
        return config.model_copy(update={"environments": resolved, "common": common})

    def merge_environments(self, config: Configuration) -> dict[str, Environment]:
        """Apply common variables and ``extends`` without interpolation.

        Args:
            config: Configuration as declared in the document.

        Returns:
            Merged environments by name, in document order.
        """
        common = dict(config.common or {})

        def combine(
            _name: str, env: Environment, parent: Environment | None
        ) -> Environment:
            if parent is None:
                return env.model_copy(
                    update={"variables": {**common, **env.variables}}
                )
            return env.model_copy(
                update={
                    "variables": {**parent.variables, **env.variables},
                    "color": env.color if env.color is not None else parent.color,
                    "requires_confirmation": (
                        env.requires_confirmation
                        if env.requires_confirmation is not None
                        else parent.requires_confirmation
                    ),
                }
            )

        memo: dict[str, Environment] = {}
        return {
            name: walk_extends(name, config.environments, combine, memo)
            for name in config.environments
        }

    def _interpolate_environment(
        self,
        env: Environment,
        environ: Mapping[str, str],
    ) -> Environment:
        return env.model_copy(
            update={
                "description": interpolate(env.description, environ),
                "variables": interpolate_mapping(env.variables, environ),
            }
        )


def resolve_inheritance(
    config: Configuration,
    environ: Mapping[str, str] | None = None,
) -> Configuration:
    """Resolve inheritance for ``config``; see :class:`ConfigInheritanceEngine`."""
    return ConfigInheritanceEngine(environ).resolve_inheritance(config)
