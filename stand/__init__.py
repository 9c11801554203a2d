"""Explicit, inheritance-aware environment variable management."""

__version__ = "0.1.0"
