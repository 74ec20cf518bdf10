"""
Simulation quality metrics.

Provides quantitative measures for checking a simulation:
- Conserved quantities: total mass, center of mass, momentum, energy
- Force error: how far Barnes-Hut results are from the direct sum

All metrics work on the current state of a list of bodies.
"""

from __future__ import annotations

import math
from typing import Sequence, Union

import numpy as np

from .types import Body, Vec2

ForceArray = Union[np.ndarray, Sequence[Sequence[float]]]


def total_mass(bodies: Sequence[Body]) -> float:
    """Sum of all body masses."""
    return math.fsum(b.mass for b in bodies)


def center_of_mass(bodies: Sequence[Body]) -> Vec2:
    """
    Mass-weighted mean position.

    Raises:
        ValueError: If bodies is empty
    """
    if not bodies:
        raise ValueError("Center of mass of an empty body list is undefined")
    m = total_mass(bodies)
    x = math.fsum(b.x * b.mass for b in bodies) / m
    y = math.fsum(b.y * b.mass for b in bodies) / m
    return x, y


def total_momentum(bodies: Sequence[Body]) -> Vec2:
    """Sum of m * v over all bodies."""
    px = math.fsum(b.mass * b.vx for b in bodies)
    py = math.fsum(b.mass * b.vy for b in bodies)
    return px, py


def kinetic_energy(bodies: Sequence[Body]) -> float:
    """Sum of 1/2 m v^2 over all bodies."""
    return 0.5 * math.fsum(b.mass * (b.vx * b.vx + b.vy * b.vy) for b in bodies)


def potential_energy(
    bodies: Sequence[Body],
    gravitational_constant: float = 1.0,
    min_distance: float = 1e-3,
) -> float:
    """
    Gravitational potential energy, -G * m_i * m_j / max(d, min_distance) per pair.

    Coincident pairs (d == 0) contribute zero, matching the force kernel.

    Time Complexity: O(n^2)
    """
    n = len(bodies)
    if n < 2:
        return 0.0

    pos = np.array([(b.x, b.y) for b in bodies], dtype=np.float64)
    mass = np.array([b.mass for b in bodies], dtype=np.float64)

    i, j = np.triu_indices(n, k=1)
    diff = pos[j] - pos[i]
    dist = np.hypot(diff[:, 0], diff[:, 1])
    apart = dist > 0.0
    clamped = np.maximum(dist[apart], min_distance)
    return float(-gravitational_constant * np.sum(mass[i][apart] * mass[j][apart] / clamped))


def total_energy(
    bodies: Sequence[Body],
    gravitational_constant: float = 1.0,
    min_distance: float = 1e-3,
) -> float:
    """Kinetic plus potential energy."""
    return kinetic_energy(bodies) + potential_energy(bodies, gravitational_constant, min_distance)


def force_errors(approx: ForceArray, exact: ForceArray) -> np.ndarray:
    """
    Per-body relative error |approx - exact| / |exact|.

    Bodies with zero exact force report the absolute error instead.

    Args:
        approx: (n, 2) approximate vectors
        exact: (n, 2) reference vectors

    Returns:
        Array of n errors
    """
    a = np.asarray(approx, dtype=np.float64).reshape(-1, 2)
    e = np.asarray(exact, dtype=np.float64).reshape(-1, 2)
    if a.shape != e.shape:
        raise ValueError(f"Shape mismatch: {a.shape} vs {e.shape}")

    diff = np.linalg.norm(a - e, axis=1)
    norm = np.linalg.norm(e, axis=1)
    errors = diff.copy()
    nonzero = norm > 0
    errors[nonzero] = diff[nonzero] / norm[nonzero]
    return errors


def max_relative_error(approx: ForceArray, exact: ForceArray) -> float:
    """Largest per-body relative error (0.0 for empty input)."""
    errors = force_errors(approx, exact)
    return float(errors.max()) if errors.size else 0.0


__all__ = [
    "total_mass",
    "center_of_mass",
    "total_momentum",
    "kinetic_energy",
    "potential_energy",
    "total_energy",
    "force_errors",
    "max_relative_error",
]
