"""Ordering strategies applied to rectangles before greedy placement."""

from typing import Callable, Sequence

from boxpacker.core.models import RectangleSpec


def area_descending(rectangles: Sequence[RectangleSpec]) -> list[RectangleSpec]:
    """
    Sort rectangles by area (largest first).

    The sort is stable, so rectangles with equal area keep their input order.

    Args:
        rectangles: Rectangles to order

    Returns:
        New list sorted by area descending
    """
    return sorted(rectangles, key=lambda r: r.area, reverse=True)


def height_descending(rectangles: Sequence[RectangleSpec]) -> list[RectangleSpec]:
    """Sort rectangles by height (tallest first), ties in input order."""
    return sorted(rectangles, key=lambda r: r.height, reverse=True)


def width_descending(rectangles: Sequence[RectangleSpec]) -> list[RectangleSpec]:
    """Sort rectangles by width (widest first), ties in input order."""
    return sorted(rectangles, key=lambda r: r.width, reverse=True)


# Map of ordering strategy names to functions
ORDERING_STRATEGIES: dict[str, Callable[[Sequence[RectangleSpec]], list[RectangleSpec]]] = {
    "area_descending": area_descending,
    "height_descending": height_descending,
    "width_descending": width_descending,
}


def get_ordering_strategy(name: str) -> Callable[[Sequence[RectangleSpec]], list[RectangleSpec]]:
    """
    Get an ordering strategy function by name.

    Args:
        name: Strategy name (area_descending, height_descending, width_descending)

    Returns:
        Ordering function

    Raises:
        ValueError: If strategy name is not recognized
    """
    if name not in ORDERING_STRATEGIES:
        raise ValueError(
            f"Unknown ordering strategy: {name}. "
            f"Available: {list(ORDERING_STRATEGIES.keys())}"
        )
    return ORDERING_STRATEGIES[name]
