"""
Run configuration for packing experiments.

Settings are pydantic models so a YAML file is validated in one step:

    bounds:
      min_width: 1
      min_height: 2
      max_width: 5
      max_height: 7
    instance:
      num_rectangles: 50
      seed: 42
    solver:
      box_side_length: 10
      orderings: [area_descending]
      optimize: true
      max_passes: 1000
    num_datasets: 5
    results_dir: results

Every section is optional; missing values fall back to the defaults below.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as SchemaError

from boxpacker.algorithms.local_search import DEFAULT_MAX_PASSES
from boxpacker.algorithms.ordering import ORDERING_STRATEGIES
from boxpacker.core.bounds import DimensionBounds
from boxpacker.core.errors import ConfigurationError


class BoundsSettings(BaseModel):
    """Inclusive limits on rectangle sides."""

    model_config = ConfigDict(extra="forbid")

    min_width: float = Field(default=1, gt=0)
    min_height: float = Field(default=2, gt=0)
    max_width: float = Field(default=5, gt=0)
    max_height: float = Field(default=7, gt=0)

    @model_validator(mode="after")
    def _check_order(self) -> "BoundsSettings":
        if self.min_width >= self.max_width:
            raise ValueError("min_width must be less than max_width")
        if self.min_height >= self.max_height:
            raise ValueError("min_height must be less than max_height")
        return self

    def to_bounds(self) -> DimensionBounds:
        return DimensionBounds(self.min_width, self.min_height, self.max_width, self.max_height)


class InstanceSettings(BaseModel):
    """Parameters of the random rectangle generator."""

    model_config = ConfigDict(extra="forbid")

    num_rectangles: int = Field(default=50, ge=0)
    seed: Optional[int] = None


class SolverSettings(BaseModel):
    """Box size and search parameters."""

    model_config = ConfigDict(extra="forbid")

    box_side_length: float = Field(default=10, gt=0)
    orderings: list[str] = Field(default_factory=lambda: ["area_descending"], min_length=1)
    optimize: bool = True
    max_passes: int = Field(default=DEFAULT_MAX_PASSES, ge=1)

    @field_validator("orderings")
    @classmethod
    def _known_orderings(cls, value: list[str]) -> list[str]:
        unknown = [name for name in value if name not in ORDERING_STRATEGIES]
        if unknown:
            raise ValueError(
                f"Unknown ordering strategies {unknown}. "
                f"Available: {list(ORDERING_STRATEGIES.keys())}"
            )
        return value


class RunSettings(BaseModel):
    """Everything an experiment run needs."""

    model_config = ConfigDict(extra="forbid")

    bounds: BoundsSettings = Field(default_factory=BoundsSettings)
    instance: InstanceSettings = Field(default_factory=InstanceSettings)
    solver: SolverSettings = Field(default_factory=SolverSettings)
    num_datasets: int = Field(default=1, ge=1)
    results_dir: Path = Path("results")

    @model_validator(mode="after")
    def _box_holds_largest_rectangle(self) -> "RunSettings":
        largest = self.bounds.max_width * self.bounds.max_height
        capacity = self.solver.box_side_length ** 2
        if largest > capacity:
            raise ValueError(
                f"Box capacity {capacity} is smaller than the largest allowed "
                f"rectangle area {largest}"
            )
        return self


def load_settings(path: Path | str) -> RunSettings:
    """
    Load and validate run settings from a YAML file.

    Args:
        path: YAML file path

    Returns:
        Validated RunSettings

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML,
            or does not match the schema
    """
    path = Path(path)
    try:
        with path.open() as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    try:
        return RunSettings.model_validate(raw)
    except SchemaError as exc:
        raise ConfigurationError(f"Invalid settings in {path}:\n{exc}") from exc
