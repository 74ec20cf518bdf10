"""Tests for the Quadrant geometry primitive."""

import math

import pytest

from gravity_tree.spatial import Quadrant
from gravity_tree.types import Corner
from gravity_tree.validation import InvalidConfigError, InvalidQuadrantError


class TestQuadrantCreation:
    """Tests for Quadrant construction."""

    def test_quadrant_creation(self):
        """Test basic quadrant creation."""
        quad = Quadrant(10.0, 20.0, 8.0)
        assert quad.center == (10.0, 20.0)
        assert quad.side_length == 8.0
        assert quad.half_size == 4.0

    def test_int_values_converted(self):
        """Integer arguments are stored as floats."""
        quad = Quadrant(1, 2, 3)
        assert isinstance(quad.center_x, float)
        assert isinstance(quad.side_length, float)

    def test_bounds(self):
        """Bounds are (min_x, min_y, max_x, max_y)."""
        quad = Quadrant(0.0, 0.0, 10.0)
        assert quad.bounds() == (-5.0, -5.0, 5.0, 5.0)

    def test_zero_side_raises(self):
        """Zero side length raises InvalidQuadrantError."""
        with pytest.raises(InvalidQuadrantError, match="must be positive"):
            Quadrant(0.0, 0.0, 0.0)

    def test_negative_side_raises(self):
        """Negative side length raises InvalidQuadrantError."""
        with pytest.raises(InvalidQuadrantError, match="must be positive"):
            Quadrant(0.0, 0.0, -1.0)

    def test_infinite_side_raises(self):
        """Infinite side length raises InvalidQuadrantError."""
        with pytest.raises(InvalidQuadrantError, match="must be finite"):
            Quadrant(0.0, 0.0, math.inf)

    def test_nan_center_raises(self):
        """NaN center raises InvalidQuadrantError."""
        with pytest.raises(InvalidQuadrantError, match="center must be finite"):
            Quadrant(math.nan, 0.0, 1.0)

    def test_frozen(self):
        """Quadrants are immutable values."""
        quad = Quadrant(0.0, 0.0, 1.0)
        with pytest.raises(AttributeError):
            quad.side_length = 2.0  # type: ignore[misc]


class TestQuadrantContains:
    """Tests for half-open containment."""

    def test_interior_points(self):
        """Interior points are contained."""
        quad = Quadrant(0.0, 0.0, 10.0)
        assert quad.contains(0.0, 0.0)
        assert quad.contains(4.999, 4.999)
        assert quad.contains(-4.999, 4.999)

    def test_lower_bound_included(self):
        """Lower bound is inside on both axes."""
        quad = Quadrant(0.0, 0.0, 10.0)
        assert quad.contains(-5.0, -5.0)
        assert quad.contains(-5.0, 0.0)

    def test_upper_bound_excluded(self):
        """Upper bound is outside on both axes."""
        quad = Quadrant(0.0, 0.0, 10.0)
        assert not quad.contains(5.0, 0.0)
        assert not quad.contains(0.0, 5.0)
        assert not quad.contains(5.0, 5.0)

    def test_outside_points(self):
        """Points beyond the region are not contained."""
        quad = Quadrant(0.0, 0.0, 10.0)
        assert not quad.contains(-6.0, 0.0)
        assert not quad.contains(0.0, 100.0)


class TestQuadrantSubdivision:
    """Tests for subquad/subdivide/corner_for."""

    def test_subquad_centers(self):
        """Children are a quarter side away toward their corner (y up)."""
        quad = Quadrant(0.0, 0.0, 8.0)
        assert quad.subquad(Corner.NW) == Quadrant(-2.0, 2.0, 4.0)
        assert quad.subquad(Corner.NE) == Quadrant(2.0, 2.0, 4.0)
        assert quad.subquad(Corner.SW) == Quadrant(-2.0, -2.0, 4.0)
        assert quad.subquad(Corner.SE) == Quadrant(2.0, -2.0, 4.0)

    def test_subdivide_order(self):
        """subdivide() returns children in [NW, NE, SW, SE] order."""
        quad = Quadrant(5.0, 5.0, 2.0)
        children = quad.subdivide()
        assert children == [quad.subquad(c) for c in (Corner.NW, Corner.NE, Corner.SW, Corner.SE)]

    def test_children_tile_parent_area(self):
        """Children areas sum to the parent area."""
        quad = Quadrant(3.0, -7.0, 12.0)
        area = sum(c.side_length**2 for c in quad.subdivide())
        assert area == pytest.approx(quad.side_length**2)

    def test_children_cover_parent_bounds(self):
        """Union of child bounds equals the parent bounds."""
        quad = Quadrant(3.0, -7.0, 12.0)
        children = quad.subdivide()
        assert min(c.bounds()[0] for c in children) == quad.bounds()[0]
        assert min(c.bounds()[1] for c in children) == quad.bounds()[1]
        assert max(c.bounds()[2] for c in children) == quad.bounds()[2]
        assert max(c.bounds()[3] for c in children) == quad.bounds()[3]

    def test_exactly_one_child_contains(self):
        """Any point inside the parent, including center lines, is in exactly one child."""
        quad = Quadrant(0.0, 0.0, 8.0)
        children = quad.subdivide()
        coords = [-4.0, -2.0, -0.5, 0.0, 0.5, 2.0, 3.9]
        for x in coords:
            for y in coords:
                assert quad.contains(x, y)
                owners = [c for c in children if c.contains(x, y)]
                assert len(owners) == 1, f"({x}, {y}) owned by {owners}"

    def test_corner_for_agrees_with_contains(self):
        """corner_for picks the child whose contains() is true."""
        quad = Quadrant(1.0, 1.0, 4.0)
        coords = [-1.0, 0.0, 0.99, 1.0, 1.01, 2.5, 2.99]
        for x in coords:
            for y in coords:
                corner = quad.corner_for(x, y)
                assert quad.subquad(corner).contains(x, y)

    def test_corner_for_center_goes_northeast(self):
        """The exact center belongs to the NE child."""
        quad = Quadrant(0.0, 0.0, 2.0)
        assert quad.corner_for(0.0, 0.0) == Corner.NE

    def test_corner_for_outside_is_clamped(self):
        """Points outside the region map to the nearest child."""
        quad = Quadrant(0.0, 0.0, 2.0)
        assert quad.corner_for(100.0, 100.0) == Corner.NE
        assert quad.corner_for(-100.0, -100.0) == Corner.SW
        assert quad.corner_for(-100.0, 100.0) == Corner.NW
        assert quad.corner_for(100.0, -100.0) == Corner.SE


class TestQuadrantBounding:
    """Tests for Quadrant.bounding."""

    def test_bounding_center_and_side(self):
        """Square is centered on the bbox midpoint and scaled by the margin."""
        quad = Quadrant.bounding([(0.0, 0.0), (10.0, 4.0)], margin=1.1)
        assert quad.center_x == pytest.approx(5.0)
        assert quad.center_y == pytest.approx(2.0)
        assert quad.side_length == pytest.approx(11.0)

    def test_bounding_contains_all(self):
        """Every position is strictly inside the bounding square."""
        positions = [(-3.0, 7.0), (12.5, -1.0), (4.0, 4.0), (12.5, 7.0)]
        quad = Quadrant.bounding(positions)
        for x, y in positions:
            assert quad.contains(x, y)

    def test_bounding_single_point(self):
        """A single point gets the minimum side length."""
        quad = Quadrant.bounding([(2.0, 3.0)], min_side=4.0)
        assert quad.center == (2.0, 3.0)
        assert quad.side_length == 4.0

    def test_bounding_coincident_points(self):
        """Coincident points do not produce a zero-size quadrant."""
        quad = Quadrant.bounding([(1.0, 1.0), (1.0, 1.0)])
        assert quad.side_length == 1.0
        assert quad.contains(1.0, 1.0)

    def test_bounding_accepts_generator(self):
        """Positions may be any iterable."""
        quad = Quadrant.bounding((p, -p) for p in range(5))
        assert quad.contains(4.0, -4.0)

    def test_bounding_rejects_unit_margin(self):
        """A margin of one would put the maximum on the excluded edge."""
        with pytest.raises(InvalidConfigError, match="bounding_margin"):
            Quadrant.bounding([(0.0, 0.0), (1.0, 1.0)], margin=1.0)

    def test_bounding_max_corner_inside(self):
        """The bounding box maximum is inside with the smallest valid margin."""
        quad = Quadrant.bounding([(0.0, 0.0), (1.0, 1.0)], margin=1.000001)
        assert quad.contains(1.0, 1.0)

    def test_bounding_empty_raises(self):
        """Empty input raises InvalidQuadrantError."""
        with pytest.raises(InvalidQuadrantError, match="empty"):
            Quadrant.bounding([])
