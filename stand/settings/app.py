"""Process settings powered by Pydantic BaseSettings."""

from enum import Enum

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class UndefinedVariablesMode(str, Enum):
    """How cross-source expansion treats undefined references."""

    EMPTY = "empty"
    ERROR = "error"
    LEAVE = "leave"


class StandSettings(BaseSettings):
    """Settings read from ``STAND_*`` process environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STAND_", case_sensitive=False, extra="ignore"
    )

    log_level: str = "INFO"
    log_json: bool = True
    undefined_variables: UndefinedVariablesMode = UndefinedVariablesMode.EMPTY
    private_key: SecretStr | None = Field(default=None)


def get_settings() -> StandSettings:
    """Get a settings instance."""
    return StandSettings()
