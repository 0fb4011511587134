"""Domain models and pure helpers."""

from . import colors, helpers, models

__all__ = ["colors", "helpers", "models"]
