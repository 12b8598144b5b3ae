"""Core data models for rectangle box packing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .errors import ConfigurationError, LogicViolation, ValidationError

if TYPE_CHECKING:
    from .bounds import DimensionBounds


class RectangleSpec:
    """
    A validated rectangle to be packed.

    Width and height are checked against the dimension bounds on
    construction and on every mutation. The area is derived and cannot
    be set directly. Equality is identity: two rectangles with the same
    dimensions are still distinct items.
    """

    __slots__ = ("id", "_bounds", "_width", "_height", "_area")

    def __init__(
        self,
        width: float,
        height: float,
        bounds: Optional[DimensionBounds],
        rect_id: Optional[int] = None,
    ):
        if bounds is None:
            raise ConfigurationError(
                "Dimension bounds must be initialized before creating rectangles"
            )
        bounds.check(width, height)
        self.id = rect_id
        self._bounds = bounds
        self._width = width
        self._height = height
        self._area = width * height

    @property
    def bounds(self) -> DimensionBounds:
        return self._bounds

    @property
    def width(self) -> float:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        self._bounds.check_width(value)
        self._width, self._area = value, value * self._height

    @property
    def height(self) -> float:
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        self._bounds.check_height(value)
        self._height, self._area = value, self._width * value

    @property
    def area(self) -> float:
        """Always width × height."""
        return self._area

    def to_dict(self) -> dict:
        return {"id": self.id, "width": self.width,
                "height": self.height, "area": self.area}

    def __repr__(self) -> str:
        return f"RectangleSpec(id={self.id}, {self.width}×{self.height}, area={self.area})"


class Box:
    """
    A square container that tracks occupied area only.

    Feasibility is an area bound: a rectangle fits when the occupied area
    plus its area does not exceed the capacity. No coordinates are kept.
    The occupied area is always the sum of the current rectangle areas,
    so resizing a placed rectangle is reflected immediately.
    """

    def __init__(self, side_length: float, box_id: int = 0):
        if side_length <= 0:
            raise ValidationError(f"Box side length must be positive, got {side_length}")
        self.id = box_id
        self.side_length = side_length
        self.rectangles: list[RectangleSpec] = []

    @property
    def capacity(self) -> float:
        return self.side_length * self.side_length

    @property
    def occupied_area(self) -> float:
        return sum(r.area for r in self.rectangles)

    @property
    def utilization(self) -> float:
        """Occupied area as a percentage of capacity."""
        return (self.occupied_area / self.capacity) * 100

    def free_area(self) -> float:
        return self.capacity - self.occupied_area

    def is_empty(self) -> bool:
        return not self.rectangles

    def can_fit(self, rect: RectangleSpec) -> bool:
        """Check whether the rectangle's area fits in the remaining capacity."""
        return self.occupied_area + rect.area <= self.capacity

    def add(self, rect: RectangleSpec) -> None:
        """
        Append a rectangle to the box.

        Callers decide placement with ``can_fit`` first. Adding a rectangle
        that does not fit is a contract breach and raises LogicViolation
        without touching the box.
        """
        if not self.can_fit(rect):
            raise LogicViolation(
                f"{rect!r} does not fit in box {self.id} "
                f"(free area {self.free_area()}); call can_fit() before add()"
            )
        self.rectangles.append(rect)

    def remove(self, rect: RectangleSpec) -> bool:
        """
        Remove a rectangle if present.

        Returns:
            True if the rectangle was removed, False if it was not in the box.
        """
        for index, placed in enumerate(self.rectangles):
            if placed is rect:
                del self.rectangles[index]
                return True
        return False

    def __contains__(self, rect: RectangleSpec) -> bool:
        return any(placed is rect for placed in self.rectangles)

    def __len__(self) -> int:
        return len(self.rectangles)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "side_length": self.side_length,
            "capacity": self.capacity,
            "occupied_area": self.occupied_area,
            "free_area": self.free_area(),
            "rectangles": [r.to_dict() for r in self.rectangles],
        }

    def __repr__(self) -> str:
        return (
            f"Box(id={self.id}, side={self.side_length}, "
            f"rectangles={len(self.rectangles)}, "
            f"occupied={self.occupied_area}/{self.capacity}, "
            f"util={self.utilization:.1f}%)"
        )
