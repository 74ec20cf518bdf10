"""
Axis-aligned square regions for spatial subdivision.

A Quadrant is a center plus a full side length. Containment is half-open
(lower bound included, upper bound excluded) on both axes, so the four
children produced by subdivide() partition their parent with no gap and no
double coverage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..types import Corner, Vec2
from ..validation import (
    InvalidQuadrantError,
    validate_center,
    validate_margin,
    validate_side_length,
)


@dataclass(frozen=True)
class Quadrant:
    """
    A square region of the plane.

    Attributes:
        center_x, center_y: Center of the region
        side_length: Full width/height of the region (> 0)
    """

    center_x: float
    center_y: float
    side_length: float

    def __post_init__(self) -> None:
        cx, cy = validate_center(self.center_x, self.center_y)
        object.__setattr__(self, "center_x", cx)
        object.__setattr__(self, "center_y", cy)
        object.__setattr__(self, "side_length", validate_side_length(self.side_length))

    @property
    def center(self) -> Vec2:
        return (self.center_x, self.center_y)

    @property
    def half_size(self) -> float:
        """Half the side length."""
        return self.side_length / 2

    def bounds(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y)."""
        h = self.half_size
        return (
            self.center_x - h,
            self.center_y - h,
            self.center_x + h,
            self.center_y + h,
        )

    def contains(self, x: float, y: float) -> bool:
        """Check if point (x, y) is within this region (half-open on both axes)."""
        h = self.half_size
        return (
            self.center_x - h <= x < self.center_x + h
            and self.center_y - h <= y < self.center_y + h
        )

    def corner_for(self, x: float, y: float) -> Corner:
        """
        Get the child corner owning a point.

        Points on the center lines go east/north, matching the half-open
        containment of the children. Points outside this region are clamped
        to the nearest child, so the answer is always a valid corner.
        """
        east = x >= self.center_x
        north = y >= self.center_y
        if north:
            return Corner.NE if east else Corner.NW
        return Corner.SE if east else Corner.SW

    def subquad(self, corner: Corner) -> Quadrant:
        """Return the child region for the given corner."""
        half = self.side_length / 2
        quarter = half / 2
        dx = quarter if corner in (Corner.NE, Corner.SE) else -quarter
        dy = quarter if corner in (Corner.NW, Corner.NE) else -quarter
        return Quadrant(self.center_x + dx, self.center_y + dy, half)

    def subdivide(self) -> list[Quadrant]:
        """Return the four children in [NW, NE, SW, SE] order."""
        return [self.subquad(corner) for corner in Corner]

    @classmethod
    def bounding(
        cls,
        positions: Iterable[Sequence[float]],
        margin: float = 1.1,
        min_side: float = 1.0,
    ) -> Quadrant:
        """
        Build the square covering a set of positions.

        The square is centered on the midpoint of the positions' bounding box,
        with side equal to the larger extent times ``margin``. A zero extent
        (one point, or all points coincident) uses ``min_side`` instead.

        Args:
            positions: Iterable of (x, y) pairs
            margin: Multiplicative slack (> 1), keeps points off the upper edge
            min_side: Side length used for a degenerate extent

        Returns:
            Quadrant strictly containing every position

        Raises:
            InvalidQuadrantError: If positions is empty
            InvalidConfigError: If margin <= 1
        """
        margin = validate_margin(margin)
        points = [(float(p[0]), float(p[1])) for p in positions]
        if not points:
            raise InvalidQuadrantError("Cannot bound an empty set of positions")

        min_x = min(p[0] for p in points)
        max_x = max(p[0] for p in points)
        min_y = min(p[1] for p in points)
        max_y = max(p[1] for p in points)

        center_x = (min_x + max_x) / 2
        center_y = (min_y + max_y) / 2
        side = max(max_x - min_x, max_y - min_y) * margin
        if side <= 0:
            side = min_side
        return cls(center_x, center_y, side)

    def __repr__(self) -> str:
        return f"Quadrant(center=({self.center_x:.4g}, {self.center_y:.4g}), side={self.side_length:.4g})"


__all__ = ["Quadrant"]
