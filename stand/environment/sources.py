"""Variable sources combined by the resolver.

Sources form a closed set of variants discriminated by ``kind``. In a source
list, later entries take precedence over earlier ones.
"""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field

from stand.data_model.base import StrictBaseModel


class DefaultSource(StrictBaseModel):
    """Built-in default values."""

    kind: Literal["default"] = "default"
    variables: dict[str, str] = Field(default_factory=dict)

    def describe(self) -> str:
        """Short label for logs and errors."""
        return "defaults"


class EnvFileSource(StrictBaseModel):
    """Variables read from an env file, unexpanded."""

    kind: Literal["env_file"] = "env_file"
    path: Path

    def describe(self) -> str:
        """Short label for logs and errors."""
        return f"env file '{self.path}'"


class ProcessEnvironmentSource(StrictBaseModel):
    """A snapshot of the process environment."""

    kind: Literal["process_environment"] = "process_environment"

    def describe(self) -> str:
        """Short label for logs and errors."""
        return "process environment"


class OverridesSource(StrictBaseModel):
    """Explicit overrides, e.g. from the command line."""

    kind: Literal["overrides"] = "overrides"
    variables: dict[str, str] = Field(default_factory=dict)

    def describe(self) -> str:
        """Short label for logs and errors."""
        return "overrides"


VariableSource = Annotated[
    DefaultSource | EnvFileSource | ProcessEnvironmentSource | OverridesSource,
    Field(discriminator="kind"),
]
