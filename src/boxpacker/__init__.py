"""Pack rectangles into the fewest square boxes with first-fit and local search."""

from boxpacker.algorithms import (
    FirstFitDecreasingPacker,
    LocalSearchOptimizer,
    LocalSearchResult,
    PackingSolution,
    solve,
)
from boxpacker.core import (
    Box,
    ConfigurationError,
    DimensionBounds,
    LogicViolation,
    PackingError,
    RectangleFactory,
    RectangleSpec,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "Box",
    "ConfigurationError",
    "DimensionBounds",
    "FirstFitDecreasingPacker",
    "LocalSearchOptimizer",
    "LocalSearchResult",
    "LogicViolation",
    "PackingError",
    "PackingSolution",
    "RectangleFactory",
    "RectangleSpec",
    "ValidationError",
    "solve",
]
