"""Configuration document schema."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import Field, model_validator

from stand.config.constants import ENVIRONMENT_METADATA_KEYS, KEY_VARIABLES
from stand.data_model.base import StrictBaseModel


class NestedShellBehavior(str, Enum):
    """What to do when a stand shell is started inside another one."""

    PREVENT = "prevent"
    ALLOW = "allow"
    WARN = "warn"


class Settings(StrictBaseModel):
    """Tool-wide settings from the ``[settings]`` table.

    Attributes:
        default_environment: Environment used when none is requested.
        nested_shell_behavior: Policy for nested shells.
        show_env_in_prompt: Whether to show the environment in the prompt.
        auto_exit_on_dir_change: Leave the shell when leaving the project.
    """

    default_environment: str | None = None
    nested_shell_behavior: NestedShellBehavior | None = None
    show_env_in_prompt: bool | None = None
    auto_exit_on_dir_change: bool | None = None


class Environment(StrictBaseModel):
    """A named environment.

    In the document, variables are sibling keys of the metadata fields; they
    are gathered into ``variables`` in document order.

    Attributes:
        description: Human-readable description (never inherited).
        extends: Name of the parent environment, if any.
        color: Display color, inherited when unset.
        requires_confirmation: Safety prompt flag, inherited when unset.
        variables: Ordered variable mapping.
    """

    description: str = ""
    extends: str | None = None
    color: str | None = None
    requires_confirmation: bool | None = None
    variables: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_variables(cls, data: Any) -> Any:
        """Move non-metadata keys into ``variables``."""
        if not isinstance(data, Mapping):
            return data

        nested = data.get(KEY_VARIABLES)
        variables: dict[str, Any] = dict(nested) if isinstance(nested, Mapping) else {}
        result: dict[str, Any] = {}
        for key, value in data.items():
            if key in ENVIRONMENT_METADATA_KEYS:
                result[key] = value
            elif key == KEY_VARIABLES and isinstance(value, Mapping):
                continue
            else:
                variables[key] = value
        result[KEY_VARIABLES] = variables
        return result

    def to_document(self) -> dict[str, object]:
        """Render as a document table with variables flattened."""
        table: dict[str, object] = {"description": self.description}
        if self.extends is not None:
            table["extends"] = self.extends
        if self.color is not None:
            table["color"] = self.color
        if self.requires_confirmation is not None:
            table["requires_confirmation"] = self.requires_confirmation
        table.update(self.variables)
        return table


class Configuration(StrictBaseModel):
    """Root configuration document.

    Attributes:
        version: Schema version string.
        common: Variables shared by every environment (lowest precedence).
        environments: Environments by name, in document order.
        settings: Tool-wide settings.
    """

    version: str = ""
    common: dict[str, str] | None = None
    environments: dict[str, Environment] = Field(default_factory=dict)
    settings: Settings = Field(default_factory=Settings)

    def get_environment(self, name: str) -> Environment | None:
        """Get an environment by name.

        Args:
            name: The environment name to look up.

        Returns:
            Environment if found, None otherwise.
        """
        return self.environments.get(name)

    def environment_names(self) -> list[str]:
        """Get environment names in document order."""
        return list(self.environments)

    def to_document(self) -> dict[str, object]:
        """Render as a plain document mapping suitable for TOML/YAML writers."""
        document: dict[str, object] = {"version": self.version}
        settings = self.settings.model_dump(mode="json", exclude_none=True)
        if settings:
            document["settings"] = settings
        if self.common is not None:
            document["common"] = dict(self.common)
        document["environments"] = {
            name: env.to_document() for name, env in self.environments.items()
        }
        return document
