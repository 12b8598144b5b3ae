"""Shared fixtures for the boxpacker test suite."""

import pytest

from boxpacker.core.bounds import DimensionBounds, RectangleFactory


@pytest.fixture
def bounds():
    """Width in [1, 5], height in [2, 7]."""
    return DimensionBounds(min_width=1, min_height=2, max_width=5, max_height=7)


@pytest.fixture
def factory(bounds):
    """Factory initialized with the [1, 5] x [2, 7] bounds."""
    return RectangleFactory(bounds)


@pytest.fixture
def wide_factory():
    """Factory allowing sides in [1, 10] so single rectangles can fill most of a box."""
    return RectangleFactory(DimensionBounds(1, 1, 10, 10))
