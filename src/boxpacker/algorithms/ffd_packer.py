"""First-Fit-Decreasing packing of rectangles into square boxes."""

import logging
from typing import Iterable

from boxpacker.algorithms.ordering import get_ordering_strategy
from boxpacker.core.errors import ValidationError
from boxpacker.core.models import Box, RectangleSpec

logger = logging.getLogger(__name__)


class FirstFitDecreasingPacker:
    """
    Greedy first-fit packer over an ordered rectangle sequence.

    Rectangles are ordered (area descending by default), then each one goes
    into the first existing box with enough free area. If no box has room,
    a new box is opened at the end of the list.
    """

    def __init__(self, box_side_length: float, ordering: str = "area_descending"):
        if box_side_length <= 0:
            raise ValidationError(f"Box side length must be positive, got {box_side_length}")
        self.box_side_length = box_side_length
        self.ordering = ordering
        self._order = get_ordering_strategy(ordering)
        self.boxes: list[Box] = []
        self._next_box_id = 0

    @property
    def box_capacity(self) -> float:
        return self.box_side_length * self.box_side_length

    def pack(self, rectangles: Iterable[RectangleSpec]) -> list[Box]:
        """
        Pack rectangles into boxes using first-fit over the chosen ordering.

        Args:
            rectangles: Rectangles to pack

        Returns:
            Boxes in creation order

        Raises:
            ValidationError: If a rectangle is larger than an empty box
        """
        self.boxes = []
        self._next_box_id = 0

        ordered = self._order(list(rectangles))
        for rect in ordered:
            if rect.area > self.box_capacity:
                raise ValidationError(
                    f"{rect!r} is larger than the box capacity {self.box_capacity}"
                )
        logger.debug(
            "Packing %d rectangles (%s): %s",
            len(ordered), self.ordering, [r.area for r in ordered],
        )

        for rect in ordered:
            for box in self.boxes:
                if box.can_fit(rect):
                    box.add(rect)
                    break
            else:
                self._new_box().add(rect)

        logger.info(
            "First-fit (%s) packed %d rectangles into %d boxes",
            self.ordering, len(ordered), len(self.boxes),
        )
        return self.boxes

    def _new_box(self) -> Box:
        """Create a new box and append it to the list."""
        box = Box(self.box_side_length, box_id=self._next_box_id)
        self._next_box_id += 1
        self.boxes.append(box)
        return box
