"""End-to-end packing: first-fit placement followed by local search."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from boxpacker.algorithms.ffd_packer import FirstFitDecreasingPacker
from boxpacker.algorithms.local_search import (
    DEFAULT_MAX_PASSES,
    LocalSearchOptimizer,
    LocalSearchResult,
)
from boxpacker.core.models import Box, RectangleSpec

logger = logging.getLogger(__name__)


def area_lower_bound(rectangles: Iterable[RectangleSpec], box_side_length: float) -> int:
    """Minimum number of boxes any packing needs: ceil(total area / capacity)."""
    total_area = sum(r.area for r in rectangles)
    if total_area <= 0:
        return 0
    return math.ceil(total_area / (box_side_length * box_side_length))


@dataclass
class PackingSolution:
    """Final packing plus the statistics needed to judge it."""

    boxes: list[Box]
    box_side_length: float
    ffd_box_count: int
    lower_bound: int
    total_area: float
    ordering: str
    local_search: Optional[LocalSearchResult] = None
    runtime_seconds: float = 0.0

    @property
    def final_box_count(self) -> int:
        return len(self.boxes)

    @property
    def rectangle_count(self) -> int:
        return sum(len(box.rectangles) for box in self.boxes)

    @property
    def utilization(self) -> float:
        """Total rectangle area as a percentage of the capacity of all used boxes."""
        if not self.boxes:
            return 0.0
        capacity = self.box_side_length * self.box_side_length * len(self.boxes)
        return (self.total_area / capacity) * 100

    def to_dict(self) -> dict:
        return {
            "box_side_length": self.box_side_length,
            "ordering": self.ordering,
            "ffd_box_count": self.ffd_box_count,
            "final_box_count": self.final_box_count,
            "lower_bound": self.lower_bound,
            "total_area": self.total_area,
            "utilization_pct": self.utilization,
            "runtime_seconds": self.runtime_seconds,
            "local_search": self.local_search.to_dict() if self.local_search else None,
            "boxes": [box.to_dict() for box in self.boxes],
        }


def solve(
    rectangles: Iterable[RectangleSpec],
    box_side_length: float,
    ordering: str = "area_descending",
    optimize: bool = True,
    max_passes: int = DEFAULT_MAX_PASSES,
) -> PackingSolution:
    """
    Pack rectangles with first-fit and optionally refine with local search.

    Args:
        rectangles: Rectangles to pack
        box_side_length: Side of every square box
        ordering: Name of the ordering strategy for the first-fit phase
        optimize: Run local search after first-fit
        max_passes: Pass cap for the local search

    Returns:
        PackingSolution with the final boxes and before/after counts
    """
    rectangles = list(rectangles)
    start = time.perf_counter()

    packer = FirstFitDecreasingPacker(box_side_length, ordering=ordering)
    optimizer = LocalSearchOptimizer(max_passes=max_passes) if optimize else None
    boxes = packer.pack(rectangles)
    ffd_count = len(boxes)

    result = optimizer.optimize(boxes) if optimizer is not None else None

    solution = PackingSolution(
        boxes=boxes,
        box_side_length=box_side_length,
        ffd_box_count=ffd_count,
        lower_bound=area_lower_bound(rectangles, box_side_length),
        total_area=sum(r.area for r in rectangles),
        ordering=ordering,
        local_search=result,
        runtime_seconds=time.perf_counter() - start,
    )
    logger.info(
        "Solved %d rectangles: %d boxes (first-fit %d, lower bound %d)",
        len(rectangles), solution.final_box_count, ffd_count, solution.lower_bound,
    )
    return solution
