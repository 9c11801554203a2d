"""Shared data model helpers."""

from stand.data_model.base import StrictBaseModel


__all__ = ["StrictBaseModel"]
