"""
Per-step force evaluation.

Each call runs the full control flow of one simulation step: bound the
current positions, build an empty tree over them, insert every body, query
every body, then drop the tree. No tree state survives between calls.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .config import BarnesHutConfig
from .spatial.quadrant import Quadrant
from .spatial.quadtree import QuadTree
from .types import Body, Vec2


def bounding_quadrant(
    bodies: Sequence[Body],
    config: Optional[BarnesHutConfig] = None,
) -> Quadrant:
    """
    Root quadrant covering every body, enlarged by the bounding margin.

    Raises:
        InvalidQuadrantError: If bodies is empty
    """
    config = config if config is not None else BarnesHutConfig()
    return Quadrant.bounding(((b.x, b.y) for b in bodies), margin=config.bounding_margin)


def build_tree(
    bodies: Sequence[Body],
    config: Optional[BarnesHutConfig] = None,
) -> QuadTree:
    """Build a fresh quadtree with every body inserted."""
    return QuadTree.from_bodies(bodies, config)


def compute_accelerations(
    bodies: Sequence[Body],
    config: Optional[BarnesHutConfig] = None,
) -> list[Vec2]:
    """
    Barnes-Hut acceleration on every body.

    Args:
        bodies: Current bodies
        config: Tunables. A fresh default config is created if None.

    Returns:
        List of (ax, ay), one per body, in input order
    """
    tree = build_tree(bodies, config)
    return [tree.query_acceleration(body) for body in bodies]


def compute_forces(
    bodies: Sequence[Body],
    config: Optional[BarnesHutConfig] = None,
) -> list[Vec2]:
    """Barnes-Hut force on every body, in input order."""
    tree = build_tree(bodies, config)
    return [tree.query_force(body) for body in bodies]


__all__ = [
    "bounding_quadrant",
    "build_tree",
    "compute_accelerations",
    "compute_forces",
]
