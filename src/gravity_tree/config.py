"""
Configuration for Barnes-Hut force evaluation.

A single BarnesHutConfig object carries every tunable of the core. Values are
validated on assignment; invalid settings raise InvalidConfigError instead of
being clamped, because a silently adjusted theta or G changes the physics.
"""

from __future__ import annotations

from typing import Any

from .validation import (
    validate_margin,
    validate_max_depth,
    validate_positive,
    validate_theta,
)


class BarnesHutConfig:
    """
    Tunables for building and querying a quadtree.

    The theta parameter controls the accuracy/speed tradeoff:
    - theta -> 0: Every node is opened, result equals the direct sum
    - theta = 0.5: Good balance (recommended)
    - theta = 1.0: Fast but less accurate

    Example:
        config = BarnesHutConfig(theta=0.3, gravitational_constant=6.674e-11)
        tree = QuadTree.from_bodies(bodies, config)
    """

    def __init__(
        self,
        *,
        theta: float = 0.5,
        gravitational_constant: float = 1.0,
        min_quadrant_size: float = 1e-6,
        bounding_margin: float = 1.1,
        min_distance: float = 1e-3,
        max_depth: int = 64,
    ) -> None:
        """
        Initialize configuration.

        Args:
            theta: Opening-angle threshold (size/distance). Must be positive.
            gravitational_constant: G, scales all forces. Must be positive.
            min_quadrant_size: Quadrants at or below this side length are not
                subdivided; their bodies share one leaf.
            bounding_margin: Multiplier applied to the bounding square of all
                positions so no body sits exactly on the root boundary.
            min_distance: Floor applied to distances in the force kernel.
            max_depth: Maximum subdivision depth, a second recursion guard.

        Raises:
            InvalidConfigError: If any value is out of range.
        """
        self.theta = theta
        self.gravitational_constant = gravitational_constant
        self.min_quadrant_size = min_quadrant_size
        self.bounding_margin = bounding_margin
        self.min_distance = min_distance
        self.max_depth = max_depth

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def theta(self) -> float:
        """Get Barnes-Hut opening angle."""
        return self._theta

    @theta.setter
    def theta(self, value: float) -> None:
        """Set Barnes-Hut opening angle."""
        self._theta = validate_theta(value)

    @property
    def gravitational_constant(self) -> float:
        """Get gravitational constant G."""
        return self._gravitational_constant

    @gravitational_constant.setter
    def gravitational_constant(self, value: float) -> None:
        """Set gravitational constant G."""
        self._gravitational_constant = validate_positive("gravitational_constant", value)

    @property
    def min_quadrant_size(self) -> float:
        """Get the side length at or below which quadrants stop subdividing."""
        return self._min_quadrant_size

    @min_quadrant_size.setter
    def min_quadrant_size(self, value: float) -> None:
        self._min_quadrant_size = validate_positive("min_quadrant_size", value)

    @property
    def bounding_margin(self) -> float:
        """Get multiplicative slack for the root quadrant."""
        return self._bounding_margin

    @bounding_margin.setter
    def bounding_margin(self, value: float) -> None:
        self._bounding_margin = validate_margin(value)

    @property
    def min_distance(self) -> float:
        """Get distance floor used by the force kernel."""
        return self._min_distance

    @min_distance.setter
    def min_distance(self, value: float) -> None:
        self._min_distance = validate_positive("min_distance", value)

    @property
    def max_depth(self) -> int:
        """Get maximum subdivision depth."""
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        self._max_depth = validate_max_depth(value)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def copy(self, **overrides: Any) -> BarnesHutConfig:
        """Return a new config with the given fields replaced."""
        values = self.as_dict()
        values.update(overrides)
        return BarnesHutConfig(**values)

    def as_dict(self) -> dict[str, Any]:
        return {
            "theta": self._theta,
            "gravitational_constant": self._gravitational_constant,
            "min_quadrant_size": self._min_quadrant_size,
            "bounding_margin": self._bounding_margin,
            "min_distance": self._min_distance,
            "max_depth": self._max_depth,
        }

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.as_dict().items())
        return f"BarnesHutConfig({fields})"


__all__ = ["BarnesHutConfig"]
