"""Final variable mapping for one environment of a resolved configuration."""

from collections.abc import Iterable, Mapping
from pathlib import Path

import structlog

from stand.config.errors import InvalidEnvironmentError
from stand.config.schemas import Configuration, Environment
from stand.crypto.decryption import decrypt_variables
from stand.crypto.protocols import EncryptionProvider
from stand.environment.resolver import ResolutionOptions, resolve_sources
from stand.environment.sources import (
    DefaultSource,
    EnvFileSource,
    OverridesSource,
    ProcessEnvironmentSource,
    VariableSource,
)


logger = structlog.get_logger()


def get_environment(config: Configuration, name: str) -> Environment:
    """Get an environment by name.

    Raises:
        InvalidEnvironmentError: If ``name`` is not declared.
    """
    env = config.get_environment(name)
    if env is None:
        raise InvalidEnvironmentError(name)
    return env


def build_environment_sources(
    config: Configuration,
    name: str,
    *,
    env_files: Iterable[Path | str] = (),
    include_process_environment: bool = False,
    overrides: Mapping[str, str] | None = None,
) -> list[VariableSource]:
    """Build the source list for an environment, lowest precedence first.

    Order: the environment's variables, env files in the given order, the
    process environment (if requested), then overrides.

    Args:
        config: Inheritance-resolved configuration.
        name: Environment to activate.
        env_files: Extra env files layered over the environment.
        include_process_environment: Layer the process environment on top.
        overrides: Explicit values with the highest precedence.

    Returns:
        Ordered source list.

    Raises:
        InvalidEnvironmentError: If ``name`` is not declared.
    """
    env = get_environment(config, name)
    sources: list[VariableSource] = [DefaultSource(variables=env.variables)]
    sources.extend(EnvFileSource(path=Path(path)) for path in env_files)
    if include_process_environment:
        sources.append(ProcessEnvironmentSource())
    if overrides:
        sources.append(OverridesSource(variables=dict(overrides)))
    return sources


def resolve_environment_variables(
    config: Configuration,
    name: str,
    *,
    env_files: Iterable[Path | str] = (),
    include_process_environment: bool = False,
    overrides: Mapping[str, str] | None = None,
    options: ResolutionOptions | None = None,
    environ: Mapping[str, str] | None = None,
    provider: EncryptionProvider | None = None,
    private_key: str | None = None,
) -> dict[str, str]:
    """Resolve the final, expanded variables of an environment.

    Encrypted values stay opaque unless a ``provider`` is given, in which
    case they are decrypted after expansion.

    Args:
        config: Inheritance-resolved configuration.
        name: Environment to activate.
        env_files: Extra env files layered over the environment.
        include_process_environment: Layer the process environment on top.
        overrides: Explicit values with the highest precedence.
        options: Cross-source resolution options.
        environ: Process environment snapshot; ``os.environ`` if None.
        provider: Encryption collaborator for marked values.
        private_key: Key handed to ``provider``.

    Returns:
        Ordered mapping of final values.

    Raises:
        InvalidEnvironmentError: If ``name`` is not declared.
        ResolveError: If source resolution fails.
        CryptoError: If decryption fails.
    """
    sources = build_environment_sources(
        config,
        name,
        env_files=env_files,
        include_process_environment=include_process_environment,
        overrides=overrides,
    )
    variables = resolve_sources(sources, options, environ)
    if provider is not None:
        variables = decrypt_variables(variables, provider, private_key)

    logger.info(
        "environment_activated",
        component="activation",
        environment=name,
        variable_count=len(variables),
    )
    return variables
