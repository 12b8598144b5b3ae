"""Metrics tracking and export for packing experiments.

Provides dataclasses for tracking experiment metrics and utilities for
exporting results to JSON and CSV formats.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from boxpacker.algorithms.solver import PackingSolution

BOX_CSV_FIELDS = [
    "box_id", "dataset_id", "ordering", "rectangles_placed",
    "utilization_pct", "occupied_area", "capacity",
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BoxMetrics:
    """Metrics for a single box of a final packing.

    Attributes:
        box_id: Identifier of the box within its packing.
        rectangles_placed: Number of rectangles in the box.
        utilization_pct: Occupied area as a percentage of capacity (0-100).
        occupied_area: Sum of rectangle areas in the box.
        capacity: Box area.
        ordering: Ordering strategy used for the first-fit phase.
        dataset_id: Dataset identifier this box belongs to.
    """

    box_id: int
    rectangles_placed: int
    utilization_pct: float
    occupied_area: float
    capacity: float
    ordering: str
    dataset_id: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Example:
            >>> bm = BoxMetrics(0, 4, 40.0, 40, 100, "area_descending", "dataset_000")
            >>> bm.to_dict()["utilization_pct"]
            40.0
        """
        return asdict(self)


@dataclass
class RunMetrics:
    """Aggregate metrics for an experiment run.

    Attributes:
        experiment_id: Unique identifier for the experiment.
        box_side_length: Side of every box.
        total_solutions: Number of (dataset, ordering) packings recorded.
        total_rectangles: Rectangles packed across all solutions.
        ffd_boxes: Boxes used by first-fit, summed over solutions.
        final_boxes: Boxes used after local search, summed over solutions.
        lower_bound_boxes: Area lower bounds, summed over solutions.
        total_moves: Accepted local search moves.
        unconverged_runs: Local searches stopped by the pass cap.
        avg_utilization_pct: Mean box utilization.
        median_utilization_pct: Median box utilization.
        min_utilization_pct: Minimum box utilization.
        max_utilization_pct: Maximum box utilization.
        runtime_seconds: Total runtime in seconds.
        started_at: Run start timestamp.
        completed_at: Run completion timestamp (None if running).
        box_metrics: Per-box metrics.
    """

    experiment_id: str
    box_side_length: float
    total_solutions: int = 0
    total_rectangles: int = 0
    ffd_boxes: int = 0
    final_boxes: int = 0
    lower_bound_boxes: int = 0
    total_moves: int = 0
    unconverged_runs: int = 0
    avg_utilization_pct: float = 0.0
    median_utilization_pct: float = 0.0
    min_utilization_pct: float = 0.0
    max_utilization_pct: float = 0.0
    runtime_seconds: float = 0.0
    started_at: datetime = field(default_factory=_utcnow)
    completed_at: datetime | None = None
    box_metrics: list[BoxMetrics] = field(default_factory=list)

    @property
    def boxes_saved(self) -> int:
        """Boxes removed by local search across all solutions."""
        return self.ffd_boxes - self.final_boxes

    def add_solution(self, solution: PackingSolution, dataset_id: str) -> None:
        """Record a finished packing.

        Args:
            solution: Solved packing.
            dataset_id: Dataset identifier the packing was built from.
        """
        self.total_solutions += 1
        self.total_rectangles += solution.rectangle_count
        self.ffd_boxes += solution.ffd_box_count
        self.final_boxes += solution.final_box_count
        self.lower_bound_boxes += solution.lower_bound
        if solution.local_search is not None:
            self.total_moves += solution.local_search.moves
            if not solution.local_search.converged:
                self.unconverged_runs += 1

        for box in solution.boxes:
            self.box_metrics.append(
                BoxMetrics(
                    box_id=box.id,
                    rectangles_placed=len(box.rectangles),
                    utilization_pct=box.utilization,
                    occupied_area=box.occupied_area,
                    capacity=box.capacity,
                    ordering=solution.ordering,
                    dataset_id=dataset_id,
                )
            )
        self._recalculate_stats()

    def mark_complete(self) -> None:
        """Mark the run as complete and calculate the final runtime."""
        self.completed_at = _utcnow()
        self.runtime_seconds = (self.completed_at - self.started_at).total_seconds()

    def _recalculate_stats(self) -> None:
        """Recalculate aggregate statistics from box metrics."""
        if not self.box_metrics:
            return

        utilizations = np.array([b.utilization_pct for b in self.box_metrics], dtype=float)
        self.avg_utilization_pct = float(utilizations.mean())
        self.median_utilization_pct = float(np.median(utilizations))
        self.min_utilization_pct = float(utilizations.min())
        self.max_utilization_pct = float(utilizations.max())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamps."""
        d = asdict(self)
        d["boxes_saved"] = self.boxes_saved
        d["started_at"] = self.started_at.isoformat()
        d["completed_at"] = self.completed_at.isoformat() if self.completed_at else None
        d["box_metrics"] = [b.to_dict() for b in self.box_metrics]
        return d

    def to_summary_dict(self) -> dict[str, Any]:
        """Convert to summary dictionary without per-box details."""
        d = self.to_dict()
        del d["box_metrics"]
        return d


def export_to_json(metrics: RunMetrics, output_path: Path | str, include_boxes: bool = True) -> None:
    """Export run metrics to a JSON file.

    Args:
        metrics: RunMetrics instance to export.
        output_path: Path to output JSON file.
        include_boxes: If True, include per-box metrics. If False, summary only.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = metrics.to_dict() if include_boxes else metrics.to_summary_dict()

    with output_path.open("w") as f:
        json.dump(data, f, indent=2)


def export_to_csv(metrics: RunMetrics, output_path: Path | str) -> None:
    """Export per-box metrics to a CSV file (header only when empty)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=BOX_CSV_FIELDS)
        writer.writeheader()
        for box in metrics.box_metrics:
            writer.writerow(box.to_dict())


def format_summary(metrics: RunMetrics) -> str:
    """Generate a human-readable summary of run metrics.

    Example:
        >>> rm = RunMetrics("exp_001", box_side_length=10)
        >>> "Experiment: exp_001" in format_summary(rm)
        True
    """
    lines = [
        "=" * 60,
        f"Experiment: {metrics.experiment_id}",
        f"Box side length: {metrics.box_side_length}",
        "=" * 60,
        f"Packings: {metrics.total_solutions}",
        f"Rectangles: {metrics.total_rectangles}",
        "",
        "Boxes:",
        f"  First-fit:    {metrics.ffd_boxes}",
        f"  Local search: {metrics.final_boxes} ({metrics.boxes_saved} saved, "
        f"{metrics.total_moves} moves)",
        f"  Lower bound:  {metrics.lower_bound_boxes}",
        f"  Unconverged:  {metrics.unconverged_runs}",
        "",
        "Utilization Statistics:",
        f"  Average: {metrics.avg_utilization_pct:.2f}%",
        f"  Median:  {metrics.median_utilization_pct:.2f}%",
        f"  Min:     {metrics.min_utilization_pct:.2f}%",
        f"  Max:     {metrics.max_utilization_pct:.2f}%",
        "",
        f"Runtime: {metrics.runtime_seconds:.3f} seconds",
        f"Started:   {metrics.started_at.isoformat()}",
        f"Completed: {metrics.completed_at.isoformat() if metrics.completed_at else 'In Progress'}",
        "=" * 60,
    ]
    return "\n".join(lines)
