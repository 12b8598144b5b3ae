"""Core entities: dimension bounds, rectangles and boxes."""

from .bounds import DimensionBounds, RectangleFactory
from .errors import ConfigurationError, LogicViolation, PackingError, ValidationError
from .models import Box, RectangleSpec

__all__ = [
    "Box",
    "ConfigurationError",
    "DimensionBounds",
    "LogicViolation",
    "PackingError",
    "RectangleFactory",
    "RectangleSpec",
    "ValidationError",
]
