"""Local search that relocates rectangles to empty boxes.

Hill climbing with a first-improvement policy: each pass walks the boxes in
list order and tries to move each rectangle into the first other box with
enough free area. The first accepted move ends the pass and a fresh pass
starts. The search stops when a full pass accepts no move, or when the pass
cap is reached. Relocations that do not empty a box can cycle between two
boxes, which is what the cap guards against.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from boxpacker.core.models import Box, RectangleSpec

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 1_000


@dataclass
class LocalSearchResult:
    """
    Outcome of a local search run.

    Attributes:
        boxes:             Box list after optimization (same list object as the input).
        initial_box_count: Number of boxes before the first pass.
        final_box_count:   Number of boxes after the last pass.
        moves:             Accepted relocations.
        passes:            Passes started, including the final pass with no move.
        converged:         False if the pass cap stopped the search.
    """
    boxes: list[Box]
    initial_box_count: int
    final_box_count: int
    moves: int
    passes: int
    converged: bool

    @property
    def boxes_removed(self) -> int:
        return self.initial_box_count - self.final_box_count

    def to_dict(self) -> dict:
        return {
            "initial_box_count": self.initial_box_count,
            "final_box_count": self.final_box_count,
            "boxes_removed": self.boxes_removed,
            "moves": self.moves,
            "passes": self.passes,
            "converged": self.converged,
        }


class LocalSearchOptimizer:
    """Reduce the number of boxes by relocating single rectangles."""

    def __init__(self, max_passes: int = DEFAULT_MAX_PASSES):
        if max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {max_passes}")
        self.max_passes = max_passes

    def optimize(self, boxes: list[Box]) -> LocalSearchResult:
        """
        Improve a feasible packing in place.

        Args:
            boxes: Feasible box list, e.g. the first-fit output. Emptied
                boxes are deleted from this list.

        Returns:
            LocalSearchResult wrapping the same list
        """
        initial_count = len(boxes)
        moves = 0
        passes = 0
        converged = False

        while passes < self.max_passes:
            passes += 1
            if not self._apply_first_move(boxes):
                converged = True
                break
            moves += 1

        if not converged:
            logger.warning(
                "Local search stopped after %d passes without converging (%d boxes)",
                passes, len(boxes),
            )
        logger.info(
            "Local search: %d -> %d boxes in %d moves over %d passes",
            initial_count, len(boxes), moves, passes,
        )
        return LocalSearchResult(
            boxes=boxes,
            initial_box_count=initial_count,
            final_box_count=len(boxes),
            moves=moves,
            passes=passes,
            converged=converged,
        )

    def _apply_first_move(self, boxes: list[Box]) -> bool:
        """Run one pass; apply and report the first feasible relocation."""
        for source in boxes:
            for rect in list(source.rectangles):
                target = self._find_target(boxes, source, rect)
                if target is None:
                    continue
                source.remove(rect)
                target.add(rect)
                logger.debug(
                    "Moved rectangle %s (area %s) from box %d to box %d",
                    rect.id, rect.area, source.id, target.id,
                )
                if source.is_empty():
                    boxes.remove(source)
                    logger.debug("Box %d emptied and removed", source.id)
                return True
        return False

    @staticmethod
    def _find_target(boxes: list[Box], source: Box, rect: RectangleSpec) -> Box | None:
        for box in boxes:
            if box is not source and box.can_fit(rect):
                return box
        return None
