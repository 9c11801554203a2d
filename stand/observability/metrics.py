"""Metrics collection for variable resolution and configuration loading."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class ResolutionMetrics:
    """Counters for resolution work done in this process.

    Attributes:
        env_files_loaded: Number of env files read and parsed.
        config_documents_loaded: Number of configuration documents loaded.
        environments_resolved: Number of environments put through inheritance.
        variables_resolved: Number of variables produced by source resolution.
        validation_errors_total: Total configuration errors raised.
        last_load_duration_ms: Duration of the most recent configuration load.
    """

    env_files_loaded: int = 0
    config_documents_loaded: int = 0
    environments_resolved: int = 0
    variables_resolved: int = 0
    validation_errors_total: int = 0
    last_load_duration_ms: float = 0.0

    _instance: ClassVar["ResolutionMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "ResolutionMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_env_file_loaded(self) -> None:
        """Record an env file loaded."""
        self.env_files_loaded += 1

    def record_config_loaded(self, duration_ms: float) -> None:
        """Record a configuration document load.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.config_documents_loaded += 1
        self.last_load_duration_ms = duration_ms

    def record_environments_resolved(self, count: int) -> None:
        """Record environments resolved through inheritance."""
        self.environments_resolved += count

    def record_variables_resolved(self, count: int) -> None:
        """Record variables produced by a source resolution."""
        self.variables_resolved += count

    def record_validation_error(self) -> None:
        """Record a configuration error."""
        self.validation_errors_total += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "env_files_loaded": self.env_files_loaded,
            "config_documents_loaded": self.config_documents_loaded,
            "environments_resolved": self.environments_resolved,
            "variables_resolved": self.variables_resolved,
            "validation_errors_total": self.validation_errors_total,
            "last_load_duration_ms": self.last_load_duration_ms,
        }
