"""Dimension bounds for rectangles and the factory that enforces them.

Bounds are set exactly once on a ``RectangleFactory`` before any rectangle
is created. Every rectangle built by the factory is validated against them.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterable

from .errors import ConfigurationError, ValidationError
from .models import RectangleSpec


@dataclass(frozen=True)
class DimensionBounds:
    """
    Inclusive limits on rectangle sides.

    Attributes:
        min_width:  Smallest allowed width.
        min_height: Smallest allowed height.
        max_width:  Largest allowed width.
        max_height: Largest allowed height.
    """
    min_width: float
    min_height: float
    max_width: float
    max_height: float

    def __post_init__(self) -> None:
        if self.min_width <= 0 or self.min_height <= 0:
            raise ValidationError(
                f"Minimum dimensions must be positive, got "
                f"min_width={self.min_width}, min_height={self.min_height}"
            )
        if self.min_width >= self.max_width:
            raise ValidationError(
                f"min_width ({self.min_width}) must be less than max_width ({self.max_width})"
            )
        if self.min_height >= self.max_height:
            raise ValidationError(
                f"min_height ({self.min_height}) must be less than max_height ({self.max_height})"
            )

    def contains(self, width: float, height: float) -> bool:
        """True if both sides are within the inclusive bounds."""
        return (
            self.min_width <= width <= self.max_width
            and self.min_height <= height <= self.max_height
        )

    def check_width(self, width: float) -> None:
        if width < self.min_width:
            raise ValidationError(f"Width {width} is below the minimum {self.min_width}")
        if width > self.max_width:
            raise ValidationError(f"Width {width} is above the maximum {self.max_width}")

    def check_height(self, height: float) -> None:
        if height < self.min_height:
            raise ValidationError(f"Height {height} is below the minimum {self.min_height}")
        if height > self.max_height:
            raise ValidationError(f"Height {height} is above the maximum {self.max_height}")

    def check(self, width: float, height: float) -> None:
        """Raise ValidationError naming the first side that is out of bounds."""
        self.check_width(width)
        self.check_height(height)

    def to_dict(self) -> dict:
        return {"min_width": self.min_width, "min_height": self.min_height,
                "max_width": self.max_width, "max_height": self.max_height}


class RectangleFactory:
    """
    Creates validated rectangles against bounds that are set exactly once.

    Example:
        >>> factory = RectangleFactory()
        >>> factory.initialize_bounds(1, 2, 5, 7)
        >>> factory.create(3, 4).area
        12
    """

    def __init__(self, bounds: DimensionBounds | None = None):
        self._bounds: DimensionBounds | None = None
        self._ids = itertools.count()
        if bounds is not None:
            self.initialize(bounds)

    @property
    def is_initialized(self) -> bool:
        return self._bounds is not None

    @property
    def bounds(self) -> DimensionBounds:
        """The configured bounds; ConfigurationError if not yet set."""
        if self._bounds is None:
            raise ConfigurationError("Dimension bounds have not been initialized")
        return self._bounds

    def initialize(self, bounds: DimensionBounds) -> None:
        """Set the bounds. A second call raises ConfigurationError."""
        if self._bounds is not None:
            raise ConfigurationError(
                f"Dimension bounds are already initialized to {self._bounds.to_dict()}"
            )
        self._bounds = bounds

    def initialize_bounds(
        self,
        min_width: float,
        min_height: float,
        max_width: float,
        max_height: float,
    ) -> None:
        """Build DimensionBounds from raw limits and set them once."""
        self.initialize(DimensionBounds(min_width, min_height, max_width, max_height))

    def create(self, width: float, height: float) -> RectangleSpec:
        """Create a rectangle with the next sequential id."""
        bounds = self.bounds
        bounds.check(width, height)
        return RectangleSpec(width, height, bounds, rect_id=next(self._ids))

    def create_many(self, dimensions: Iterable[tuple[float, float]]) -> list[RectangleSpec]:
        return [self.create(width, height) for width, height in dimensions]
