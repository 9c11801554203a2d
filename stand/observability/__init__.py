"""Observability module for logging and metrics."""

from stand.observability.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)
from stand.observability.metrics import ResolutionMetrics


__all__ = [
    "ResolutionMetrics",
    "bind_context",
    "clear_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
]
