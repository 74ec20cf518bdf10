"""
Input validation utilities for the Barnes-Hut core.

Provides centralized validation functions for quadrants, bodies and
configuration values. Raises descriptive exceptions on invalid input so that
bad values fail fast instead of propagating NaNs through a simulation step.
"""

from __future__ import annotations

import math
from typing import Any


class ValidationError(ValueError):
    """Base exception for gravity-tree validation errors."""

    pass


class InvalidQuadrantError(ValidationError):
    """Raised when a quadrant has a non-positive or non-finite geometry."""

    pass


class InvalidBodyError(ValidationError):
    """Raised when a body has a non-positive mass or non-finite position."""

    pass


class InvalidConfigError(ValidationError):
    """Raised when a configuration value is out of range."""

    pass


def validate_side_length(side_length: float) -> float:
    """
    Validate a quadrant side length.

    Args:
        side_length: Full width of the square region

    Returns:
        Validated side length as float

    Raises:
        InvalidQuadrantError: If side length is not positive and finite
    """
    value = float(side_length)
    if not math.isfinite(value):
        raise InvalidQuadrantError(f"Quadrant side length must be finite, got {value}")
    if value <= 0:
        raise InvalidQuadrantError(f"Quadrant side length must be positive, got {value}")
    return value


def validate_center(x: float, y: float) -> tuple[float, float]:
    """
    Validate a quadrant center.

    Raises:
        InvalidQuadrantError: If either coordinate is not finite
    """
    cx, cy = float(x), float(y)
    if not (math.isfinite(cx) and math.isfinite(cy)):
        raise InvalidQuadrantError(f"Quadrant center must be finite, got ({cx}, {cy})")
    return cx, cy


def validate_body(body: Any) -> None:
    """
    Validate a body before it enters a tree.

    Args:
        body: Object with x, y and mass attributes

    Raises:
        InvalidBodyError: If mass is not positive or the position is not finite
    """
    mass = float(body.mass)
    if not math.isfinite(mass) or mass <= 0:
        raise InvalidBodyError(f"Body {body.index}: mass must be positive, got {mass}")
    if not (math.isfinite(body.x) and math.isfinite(body.y)):
        raise InvalidBodyError(
            f"Body {body.index}: position must be finite, got ({body.x}, {body.y})"
        )


def validate_positive(name: str, value: float) -> float:
    """
    Validate that a configuration value is positive and finite.

    Args:
        name: Parameter name used in the error message
        value: Value to check

    Returns:
        Validated value as float

    Raises:
        InvalidConfigError: If value <= 0 or not finite
    """
    result = float(value)
    if not math.isfinite(result) or result <= 0:
        raise InvalidConfigError(f"{name} must be positive, got {result}")
    return result


def validate_theta(theta: float) -> float:
    """
    Validate the Barnes-Hut opening angle.

    Raises:
        InvalidConfigError: If theta is not positive
    """
    return validate_positive("theta", theta)


def validate_margin(margin: float) -> float:
    """
    Validate the bounding margin multiplier.

    Raises:
        InvalidConfigError: If margin <= 1 (bodies on the bounding box maximum
            would fall on the excluded upper edge of the root)
    """
    result = float(margin)
    if not math.isfinite(result) or result <= 1.0:
        raise InvalidConfigError(f"bounding_margin must be > 1, got {result}")
    return result


def validate_max_depth(max_depth: int) -> int:
    """
    Validate the maximum subdivision depth.

    Raises:
        InvalidConfigError: If max_depth < 1
    """
    if max_depth < 1:
        raise InvalidConfigError(f"max_depth must be >= 1, got {max_depth}")
    return int(max_depth)


def validate_time_step(dt: float) -> float:
    """
    Validate an integration time step.

    Raises:
        InvalidConfigError: If dt is not positive
    """
    return validate_positive("dt", dt)


__all__ = [
    "ValidationError",
    "InvalidQuadrantError",
    "InvalidBodyError",
    "InvalidConfigError",
    "validate_side_length",
    "validate_center",
    "validate_body",
    "validate_positive",
    "validate_theta",
    "validate_margin",
    "validate_max_depth",
    "validate_time_step",
]
