"""Session state containers."""

from .collection import ImageCollection

__all__ = ["ImageCollection"]
