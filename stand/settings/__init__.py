"""Process settings loading."""

from .app import StandSettings, UndefinedVariablesMode, get_settings


__all__ = ["StandSettings", "UndefinedVariablesMode", "get_settings"]
