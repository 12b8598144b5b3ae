"""Main experiment runner for rectangle packing."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError as SchemaError

from boxpacker.algorithms.ordering import ORDERING_STRATEGIES
from boxpacker.algorithms.solver import PackingSolution, solve
from boxpacker.config import RunSettings, load_settings
from boxpacker.core.bounds import RectangleFactory
from boxpacker.core.errors import PackingError
from boxpacker.core.models import RectangleSpec
from boxpacker.monitoring.metrics import (
    RunMetrics,
    export_to_csv,
    export_to_json,
    format_summary,
)
from boxpacker.runner.dataset import generate_rectangles, load_rectangles

logger = logging.getLogger(__name__)


class ExperimentRunner:
    """
    Experiment orchestrator for rectangle packing.

    Generates datasets (or takes a fixed one), packs each with every
    configured ordering strategy, collects metrics and saves results.
    """

    def __init__(
        self,
        settings: RunSettings,
        results_dir: Path | str | None = None,
        save_results: bool = True,
    ):
        """
        Initialize experiment runner.

        Args:
            settings: Validated run settings
            results_dir: Overrides settings.results_dir when given
            save_results: Write JSON/CSV files after the run
        """
        self.settings = settings
        self.results_dir = Path(results_dir) if results_dir is not None else settings.results_dir
        self.save_results = save_results
        self.factory = RectangleFactory(settings.bounds.to_bounds())
        self.solutions: list[tuple[str, PackingSolution]] = []

    def run(self, rectangles: Optional[list[RectangleSpec]] = None) -> RunMetrics:
        """
        Run the experiment.

        Args:
            rectangles: Fixed dataset to pack. When None, settings.num_datasets
                random datasets are generated.

        Returns:
            RunMetrics with aggregated results
        """
        solver = self.settings.solver
        experiment_id = f"exp_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
        metrics = RunMetrics(experiment_id=experiment_id, box_side_length=solver.box_side_length)
        self.solutions = []

        if rectangles is not None:
            datasets = [("dataset_input", rectangles)]
        else:
            datasets = [
                (f"dataset_{index:03d}", self._generate_dataset(index))
                for index in range(self.settings.num_datasets)
            ]

        for dataset_id, dataset in datasets:
            for ordering in solver.orderings:
                solution = solve(
                    dataset,
                    solver.box_side_length,
                    ordering=ordering,
                    optimize=solver.optimize,
                    max_passes=solver.max_passes,
                )
                metrics.add_solution(solution, dataset_id=dataset_id)
                self.solutions.append((f"{dataset_id}_{ordering}", solution))
                logger.info(
                    "%s/%s: %d rectangles -> %d boxes (first-fit %d, lower bound %d)",
                    dataset_id, ordering, len(dataset), solution.final_box_count,
                    solution.ffd_box_count, solution.lower_bound,
                )

        metrics.mark_complete()
        if self.save_results:
            self._save_results(metrics)
        return metrics

    def _generate_dataset(self, index: int) -> list[RectangleSpec]:
        instance = self.settings.instance
        seed = instance.seed + index if instance.seed is not None else None
        return generate_rectangles(self.factory, instance.num_rectangles, seed=seed)

    def _save_results(self, metrics: RunMetrics) -> None:
        """
        Save metrics and final packings to JSON, per-box metrics to CSV.

        Args:
            metrics: RunMetrics to save
        """
        base = self.results_dir / metrics.experiment_id
        export_to_json(metrics, f"{base}.json")
        export_to_csv(metrics, f"{base}_boxes.csv")

        packings_path = Path(f"{base}_packings.json")
        with packings_path.open("w") as f:
            json.dump({name: s.to_dict() for name, s in self.solutions}, f, indent=2)

        logger.info("Saved results to %s.json, %s_boxes.csv and %s", base, base, packings_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boxpacker-run",
        description="Pack rectangles into square boxes with first-fit and local search",
    )
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--input", type=Path,
                        help="JSON/YAML file of rectangles to pack instead of random datasets")
    parser.add_argument("--datasets", type=int, help="Number of random datasets")
    parser.add_argument("--rectangles", type=int, help="Rectangles per random dataset")
    parser.add_argument("--box-side", type=float, help="Box side length")
    parser.add_argument("--ordering", action="append", choices=sorted(ORDERING_STRATEGIES),
                        help="Ordering strategy (repeatable)")
    parser.add_argument("--seed", type=int, help="Base random seed")
    parser.add_argument("--max-passes", type=int, help="Local search pass cap")
    parser.add_argument("--no-optimize", action="store_true", help="Skip local search")
    parser.add_argument("--results-dir", type=Path, help="Directory for result files")
    parser.add_argument("--no-save", action="store_true", help="Do not write result files")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for INFO, -vv for DEBUG logging")
    return parser


def _apply_overrides(settings: RunSettings, args: argparse.Namespace) -> RunSettings:
    data = settings.model_dump()
    overrides = {
        ("num_datasets",): args.datasets,
        ("instance", "num_rectangles"): args.rectangles,
        ("instance", "seed"): args.seed,
        ("solver", "box_side_length"): args.box_side,
        ("solver", "orderings"): args.ordering,
        ("solver", "max_passes"): args.max_passes,
        ("results_dir",): args.results_dir,
    }
    if args.no_optimize:
        overrides[("solver", "optimize")] = False

    for keys, value in overrides.items():
        if value is None:
            continue
        target = data
        for key in keys[:-1]:
            target = target[key]
        target[keys[-1]] = value
    return RunSettings.model_validate(data)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Command-line entry point.

    Returns:
        Process exit status: 0 on success, 2 on invalid settings or input
    """
    args = build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        settings = load_settings(args.config) if args.config else RunSettings()
        settings = _apply_overrides(settings, args)
        runner = ExperimentRunner(settings, save_results=not args.no_save)
        rectangles = load_rectangles(runner.factory, args.input) if args.input else None
        metrics = runner.run(rectangles)
    except (PackingError, SchemaError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(format_summary(metrics))
    return 0


if __name__ == "__main__":
    sys.exit(main())
