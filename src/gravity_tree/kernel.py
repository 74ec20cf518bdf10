"""
Two-body gravity kernel and exact direct summation.

The kernel is applied wherever a leaf body or an approximated cluster
contributes to a query. The direct O(n^2) summation is the reference the
Barnes-Hut result converges to as theta goes to zero; it is also used by the
simulation driver for small body counts.

Sign convention: the returned vector on body 1 points from body 1 toward the
source mass (gravity is attractive).
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .types import Body, Vec2


def pairwise_acceleration(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    m2: float,
    gravitational_constant: float = 1.0,
    min_distance: float = 1e-3,
) -> Vec2:
    """
    Acceleration on a point at (x1, y1) due to mass m2 at (x2, y2).

    ``a = G * m2 / max(d, min_distance)^2`` directed along ``r / d``.
    Coincident points (d == 0) have no direction and contribute zero.

    Returns:
        (ax, ay) acceleration vector
    """
    dx = x2 - x1
    dy = y2 - y1
    dist = math.sqrt(dx * dx + dy * dy)
    if dist == 0.0:
        return 0.0, 0.0

    clamped = max(dist, min_distance)
    magnitude = gravitational_constant * m2 / (clamped * clamped)
    return (dx / dist) * magnitude, (dy / dist) * magnitude


def pairwise_force(
    x1: float,
    y1: float,
    m1: float,
    x2: float,
    y2: float,
    m2: float,
    gravitational_constant: float = 1.0,
    min_distance: float = 1e-3,
) -> Vec2:
    """Force on mass m1 at (x1, y1) due to mass m2 at (x2, y2)."""
    ax, ay = pairwise_acceleration(x1, y1, x2, y2, m2, gravitational_constant, min_distance)
    return ax * m1, ay * m1


def direct_accelerations(
    bodies: Sequence[Body],
    gravitational_constant: float = 1.0,
    min_distance: float = 1e-3,
) -> np.ndarray:
    """
    Exact acceleration on every body by O(n^2) pairwise summation.

    Self pairs and coincident pairs have zero distance and contribute nothing,
    as in the kernel.

    Args:
        bodies: Sequence of bodies
        gravitational_constant: G
        min_distance: Distance floor

    Returns:
        Array of shape (n, 2) with (ax, ay) rows
    """
    n = len(bodies)
    if n == 0:
        return np.zeros((0, 2), dtype=np.float64)

    pos = np.array([(b.x, b.y) for b in bodies], dtype=np.float64)
    mass = np.array([b.mass for b in bodies], dtype=np.float64)

    # r[i, j] = pos[j] - pos[i]
    r = pos[np.newaxis, :, :] - pos[:, np.newaxis, :]
    dist = np.sqrt(np.einsum("ijk,ijk->ij", r, r))
    clamped = np.maximum(dist, min_distance)

    with np.errstate(divide="ignore", invalid="ignore"):
        scale = gravitational_constant * mass[np.newaxis, :] / (clamped * clamped * dist)
    # Self pairs and coincident pairs have dist == 0 and no direction
    scale[dist == 0.0] = 0.0

    return np.einsum("ij,ijk->ik", scale, r)


def direct_forces(
    bodies: Sequence[Body],
    gravitational_constant: float = 1.0,
    min_distance: float = 1e-3,
) -> np.ndarray:
    """Exact force on every body, shape (n, 2)."""
    acc = direct_accelerations(bodies, gravitational_constant, min_distance)
    mass = np.array([b.mass for b in bodies], dtype=np.float64)
    return acc * mass[:, np.newaxis]


__all__ = [
    "pairwise_acceleration",
    "pairwise_force",
    "direct_accelerations",
    "direct_forces",
]
