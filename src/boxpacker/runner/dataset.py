"""Rectangle datasets for packing experiments."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import numpy as np
import yaml

from boxpacker.core.bounds import RectangleFactory
from boxpacker.core.errors import ConfigurationError, ValidationError
from boxpacker.core.models import RectangleSpec


def generate_rectangles(
    factory: RectangleFactory,
    count: int,
    seed: Optional[int] = None,
) -> list[RectangleSpec]:
    """
    Generate random rectangles inside the factory's bounds.

    Sides are integers drawn uniformly from the inclusive range
    [ceil(min), floor(max)] of each dimension.

    Args:
        factory: Initialized rectangle factory
        count: Number of rectangles to generate
        seed: Random seed for reproducibility (default: None)

    Returns:
        List of validated rectangles

    Raises:
        ValidationError: If a dimension's bounds contain no integer
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    bounds = factory.bounds
    rng = np.random.default_rng(seed)

    low_w, high_w = _integer_range("width", bounds.min_width, bounds.max_width)
    low_h, high_h = _integer_range("height", bounds.min_height, bounds.max_height)
    widths = rng.integers(low_w, high_w, size=count, endpoint=True)
    heights = rng.integers(low_h, high_h, size=count, endpoint=True)
    return factory.create_many(zip(widths.tolist(), heights.tolist()))


def _integer_range(name: str, low: float, high: float) -> tuple[int, int]:
    int_low, int_high = int(np.ceil(low)), int(np.floor(high))
    if int_low > int_high:
        raise ValidationError(f"No integer {name} lies within [{low}, {high}]")
    return int_low, int_high


def _parse_entry(entry: Any, index: int) -> tuple[float, float]:
    if isinstance(entry, dict):
        try:
            width, height = entry["width"], entry["height"]
        except KeyError as exc:
            raise ConfigurationError(f"Rectangle #{index} is missing {exc}") from exc
    elif isinstance(entry, (list, tuple)) and len(entry) == 2:
        width, height = entry
    else:
        raise ConfigurationError(
            f"Rectangle #{index} must be a {{width, height}} mapping or a [width, height] pair"
        )
    for side in (width, height):
        if isinstance(side, bool) or not isinstance(side, (int, float)):
            raise ConfigurationError(
                f"Rectangle #{index} has non-numeric sides ({width!r}, {height!r})"
            )
    return width, height


def load_rectangles(factory: RectangleFactory, path: Path | str) -> list[RectangleSpec]:
    """
    Load rectangles from a JSON or YAML file.

    The file holds a list of ``{width: .., height: ..}`` mappings or
    ``[width, height]`` pairs, either at the top level or under a
    ``rectangles`` key.

    Args:
        factory: Initialized rectangle factory
        path: .json, .yaml or .yml file

    Returns:
        Rectangles in file order

    Raises:
        ConfigurationError: If the file cannot be parsed or an entry is malformed
        ValidationError: If a rectangle is out of bounds
    """
    path = Path(path)
    try:
        with path.open() as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read rectangle file {path}: {exc}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot parse rectangle file {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("rectangles")
    if not isinstance(data, list):
        raise ConfigurationError(f"{path} does not contain a list of rectangles")

    return factory.create_many(_parse_entry(entry, i) for i, entry in enumerate(data))
