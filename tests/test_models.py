"""
Unit tests for dimension bounds, rectangles and boxes.

Tests cover:
- Bounds ordering and positivity checks
- Set-once initialization of the rectangle factory
- Rectangle validation, derived area and atomic mutation
- Box capacity bookkeeping: can_fit, add, remove, free area
"""

import pytest

from boxpacker.core.bounds import DimensionBounds, RectangleFactory
from boxpacker.core.errors import ConfigurationError, LogicViolation, ValidationError
from boxpacker.core.models import Box, RectangleSpec


# ---------------------------------------------------------------------------
# 1. Dimension bounds
# ---------------------------------------------------------------------------

class TestDimensionBounds:
    def test_valid_bounds(self, bounds):
        assert bounds.contains(1, 2)
        assert bounds.contains(5, 7)
        assert not bounds.contains(6, 3)
        assert not bounds.contains(3, 1)

    @pytest.mark.parametrize("limits", [
        (5, 2, 5, 7),   # min_width == max_width
        (6, 2, 5, 7),   # min_width > max_width
        (1, 7, 5, 7),   # min_height == max_height
        (1, 8, 5, 7),   # min_height > max_height
        (0, 2, 5, 7),   # non-positive minimum
        (1, -1, 5, 7),
    ])
    def test_invalid_bounds_rejected(self, limits):
        with pytest.raises(ValidationError):
            DimensionBounds(*limits)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            DimensionBounds(3, 2, 1, 7)


# ---------------------------------------------------------------------------
# 2. Rectangle factory: explicit, set-once bounds
# ---------------------------------------------------------------------------

class TestRectangleFactory:
    def test_create_before_initialization_fails(self):
        factory = RectangleFactory()
        assert not factory.is_initialized
        with pytest.raises(ConfigurationError):
            factory.create(3, 4)

    def test_bounds_access_before_initialization_fails(self):
        with pytest.raises(ConfigurationError):
            RectangleFactory().bounds

    def test_second_initialization_fails(self):
        factory = RectangleFactory()
        factory.initialize_bounds(1, 2, 5, 7)
        with pytest.raises(ConfigurationError):
            factory.initialize_bounds(1, 2, 5, 7)
        with pytest.raises(ConfigurationError):
            factory.initialize(DimensionBounds(1, 1, 9, 9))

    def test_second_initialization_keeps_original_bounds(self, factory, bounds):
        with pytest.raises(ConfigurationError):
            factory.initialize(DimensionBounds(1, 1, 9, 9))
        assert factory.bounds is bounds

    def test_initialize_bounds_twice_reports_current_bounds(self, factory, bounds):
        with pytest.raises(ConfigurationError, match="already initialized"):
            factory.initialize_bounds(2, 2, 8, 8)
        assert factory.bounds is bounds

    def test_invalid_bounds_leave_factory_uninitialized(self):
        factory = RectangleFactory()
        with pytest.raises(ValidationError):
            factory.initialize_bounds(5, 2, 1, 7)
        assert not factory.is_initialized

    def test_sequential_ids(self, factory):
        rects = factory.create_many([(3, 4), (2, 3), (4, 5)])
        assert [r.id for r in rects] == [0, 1, 2]

    def test_out_of_bounds_create_fails(self, factory):
        with pytest.raises(ValidationError):
            factory.create(10, 10)


# ---------------------------------------------------------------------------
# 3. RectangleSpec
# ---------------------------------------------------------------------------

class TestRectangleSpec:
    def test_area_is_product(self, factory):
        rect = factory.create(3, 4)
        assert rect.width == 3
        assert rect.height == 4
        assert rect.area == 12

    @pytest.mark.parametrize("width,height", [(1, 2), (5, 7), (1, 7), (5, 2)])
    def test_boundary_values_accepted(self, factory, width, height):
        assert factory.create(width, height).area == width * height

    @pytest.mark.parametrize("width,height", [(0.5, 3), (6, 3), (3, 1), (3, 8)])
    def test_out_of_bounds_rejected(self, bounds, width, height):
        with pytest.raises(ValidationError):
            RectangleSpec(width, height, bounds)

    def test_missing_bounds_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            RectangleSpec(3, 4, None)

    def test_area_not_settable(self, factory):
        rect = factory.create(3, 4)
        with pytest.raises(AttributeError):
            rect.area = 100

    def test_mutation_recomputes_area(self, factory):
        rect = factory.create(3, 4)
        rect.width = 5
        assert rect.area == 20
        rect.height = 2
        assert rect.area == 10

    def test_failed_width_mutation_leaves_state_unchanged(self, factory):
        rect = factory.create(3, 4)
        with pytest.raises(ValidationError):
            rect.width = 6
        assert (rect.width, rect.height, rect.area) == (3, 4, 12)

    def test_failed_height_mutation_leaves_state_unchanged(self, factory):
        rect = factory.create(3, 4)
        with pytest.raises(ValidationError):
            rect.height = 1
        assert (rect.width, rect.height, rect.area) == (3, 4, 12)

    def test_identity_equality(self, factory):
        a = factory.create(3, 4)
        b = factory.create(3, 4)
        assert a != b
        assert a == a
        assert len({a, b}) == 2


# ---------------------------------------------------------------------------
# 4. Box
# ---------------------------------------------------------------------------

class TestBox:
    @pytest.mark.parametrize("side", [0, -1, -0.5])
    def test_non_positive_side_rejected(self, side):
        with pytest.raises(ValidationError):
            Box(side)

    def test_new_box_is_empty(self):
        box = Box(10)
        assert box.capacity == 100
        assert box.occupied_area == 0
        assert box.free_area() == 100
        assert box.is_empty()

    def test_add_updates_occupied_area(self, factory):
        box = Box(10)
        a, b = factory.create(3, 4), factory.create(4, 5)
        box.add(a)
        box.add(b)
        assert box.rectangles == [a, b]
        assert box.occupied_area == 32
        assert box.free_area() == 68
        assert not box.is_empty()

    def test_can_fit_is_area_bound(self, wide_factory):
        box = Box(10)
        box.add(wide_factory.create(6, 10))
        assert box.can_fit(wide_factory.create(4, 10))      # exactly fills
        assert not box.can_fit(wide_factory.create(5, 10))  # 110 > 100

    def test_add_without_room_is_logic_violation(self, wide_factory):
        box = Box(10)
        box.add(wide_factory.create(6, 10))
        too_big = wide_factory.create(6, 10)
        with pytest.raises(LogicViolation):
            box.add(too_big)
        assert box.occupied_area == 60
        assert too_big not in box

    def test_remove_present(self, factory):
        box = Box(10)
        a, b = factory.create(3, 4), factory.create(2, 3)
        box.add(a)
        box.add(b)
        assert box.remove(a) is True
        assert box.rectangles == [b]
        assert box.occupied_area == 6

    def test_remove_absent_is_noop(self, factory):
        box = Box(10)
        a = factory.create(3, 4)
        box.add(a)
        twin = factory.create(3, 4)
        assert box.remove(twin) is False
        assert box.rectangles == [a]
        assert box.occupied_area == 12

    def test_remove_last_rectangle_empties_box(self, factory):
        box = Box(10)
        a = factory.create(3, 4)
        box.add(a)
        box.remove(a)
        assert box.is_empty()
        assert box.occupied_area == 0

    def test_utilization(self, factory):
        box = Box(10)
        box.add(factory.create(4, 5))
        assert box.utilization == pytest.approx(20.0)

    def test_to_dict(self, factory):
        box = Box(10, box_id=3)
        box.add(factory.create(3, 4))
        d = box.to_dict()
        assert d["id"] == 3
        assert d["capacity"] == 100
        assert d["occupied_area"] == 12
        assert d["rectangles"][0]["area"] == 12

    def test_resized_rectangle_reflected_in_occupied_area(self, factory):
        box = Box(10)
        rect = factory.create(3, 4)
        box.add(rect)
        rect.width = 5
        assert box.occupied_area == 20
        assert box.occupied_area == sum(r.area for r in box.rectangles)
        assert box.free_area() == 80
        box.remove(rect)
        assert box.is_empty()
        assert box.occupied_area == 0

    def test_repeated_add_remove_with_fractional_sides(self, wide_factory):
        box = Box(10)
        rects = [wide_factory.create(1.1, 1.3),
                 wide_factory.create(2.7, 3.3),
                 wide_factory.create(1.7, 1.9)]
        for _ in range(50):
            for rect in rects:
                box.add(rect)
            for rect in reversed(rects):
                box.remove(rect)
        assert box.occupied_area == 0
        assert box.can_fit(wide_factory.create(10, 10))
