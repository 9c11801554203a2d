"""Where each resolved variable of an environment comes from."""

from enum import Enum

from stand.config.inheritance import walk_extends
from stand.config.schemas import Configuration, Environment
from stand.data_model.base import StrictBaseModel


class OriginKind(str, Enum):
    """Classification of a variable's origin."""

    LOCAL = "local"
    INHERITED = "inherited"
    COMMON = "common"


class VariableOrigin(StrictBaseModel):
    """Origin of one variable.

    Attributes:
        kind: Local declaration, ancestor declaration or common variable.
        environment: Declaring ancestor for INHERITED, else None.
    """

    kind: OriginKind
    environment: str | None = None

    def label(self) -> str:
        """Short human-readable label, e.g. ``inherited from base``."""
        if self.kind is OriginKind.INHERITED:
            return f"inherited from {self.environment}"
        return self.kind.value


def inheritance_chain(config: Configuration, name: str) -> list[str]:
    """List ``name`` followed by its ancestors up to the root.

    Args:
        config: Configuration as declared.
        name: Environment to start from.

    Returns:
        ``[name, parent, ..., root]``.

    Raises:
        InvalidEnvironmentError: If any name in the chain is not declared.
        CircularInheritanceError: If the chain loops.
    """

    def combine(
        env_name: str, _env: Environment, parent_chain: list[str] | None
    ) -> list[str]:
        return [env_name, *(parent_chain or [])]

    return walk_extends(name, config.environments, combine, {})


def detect_variable_origins(
    config: Configuration,
    name: str,
) -> dict[str, VariableOrigin]:
    """Classify every variable ``name`` ends up with after inheritance.

    Args:
        config: Configuration as declared (before inheritance).
        name: Environment to inspect.

    Returns:
        Origins keyed by variable name, in resolved variable order.

    Raises:
        InvalidEnvironmentError: If ``name`` or an ancestor is not declared.
        CircularInheritanceError: If the chain loops.
    """
    chain = inheritance_chain(config, name)
    own = config.environments[name].variables

    # Same key order as the inheritance merge: common, root, ..., name
    resolved_keys = dict.fromkeys(config.common or {})
    for ancestor in reversed(chain):
        resolved_keys.update(dict.fromkeys(config.environments[ancestor].variables))

    origins: dict[str, VariableOrigin] = {}
    for key in resolved_keys:
        if key in own:
            origins[key] = VariableOrigin(kind=OriginKind.LOCAL)
            continue
        ancestor = next(
            (a for a in chain[1:] if key in config.environments[a].variables),
            None,
        )
        if ancestor is not None:
            origins[key] = VariableOrigin(
                kind=OriginKind.INHERITED, environment=ancestor
            )
        else:
            origins[key] = VariableOrigin(kind=OriginKind.COMMON)
    return origins
