"""
Quadtree implementation for Barnes-Hut gravity approximation.

The quadtree recursively subdivides 2D space into quadrants, enabling
O(n log n) approximate n-body force calculations. A tree is built from
scratch for one simulation step, queried read-only, then dropped.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from ..config import BarnesHutConfig
from ..kernel import pairwise_acceleration
from ..types import Body, Corner, NodeKind, Vec2
from ..validation import validate_body, validate_time_step
from .quadrant import Quadrant


class BoundaryWarning(UserWarning):
    """Warning for bodies inserted outside the root quadrant."""

    pass


@dataclass
class QuadTreeNode:
    """
    A node in the quadtree.

    Attributes:
        quadrant: Region covered by this node
        depth: Distance from the root (root is 0)
        total_mass: Total mass of bodies in this subtree
        center_of_mass_x/y: Center of mass of bodies in this subtree
        bodies: Bodies held if this is a leaf. More than one only when the
            quadrant reached the minimum size and could not subdivide.
        children: Four child nodes [NW, NE, SW, SE] if internal
    """

    quadrant: Quadrant
    depth: int = 0

    # Aggregated properties
    total_mass: float = 0.0
    center_of_mass_x: float = 0.0
    center_of_mass_y: float = 0.0

    # Content
    bodies: List[Body] = field(default_factory=list)
    children: Optional[List[QuadTreeNode]] = None

    @property
    def kind(self) -> NodeKind:
        if self.children is not None:
            return NodeKind.INTERNAL
        if self.bodies:
            return NodeKind.LEAF
        return NodeKind.EMPTY

    def is_empty(self) -> bool:
        """True if this node contains no bodies."""
        return not self.bodies and self.children is None

    def is_leaf(self) -> bool:
        """True if this node holds bodies directly."""
        return bool(self.bodies) and self.children is None

    def is_internal(self) -> bool:
        """True if this node has been subdivided."""
        return self.children is not None

    @property
    def center_of_mass(self) -> Vec2:
        return (self.center_of_mass_x, self.center_of_mass_y)

    def add_mass(self, x: float, y: float, mass: float) -> None:
        """
        Fold a point mass into this node's aggregate.

        com' = (com * M + p * m) / (M + m), M' = M + m
        """
        if self.total_mass == 0.0:
            self.center_of_mass_x = x
            self.center_of_mass_y = y
            self.total_mass = mass
            return

        total = self.total_mass + mass
        self.center_of_mass_x = (self.center_of_mass_x * self.total_mass + x * mass) / total
        self.center_of_mass_y = (self.center_of_mass_y * self.total_mass + y * mass) / total
        self.total_mass = total


@dataclass(frozen=True)
class NodeInfo:
    """Read-only snapshot of one node, produced by QuadTree.iter_nodes()."""

    quadrant: Quadrant
    kind: NodeKind
    depth: int
    total_mass: float
    center_of_mass: Optional[Vec2]
    body_count: int


class QuadTree:
    """
    Barnes-Hut quadtree for approximate gravity calculations.

    The Barnes-Hut algorithm uses a quadtree to approximate long-range
    forces. For distant clusters, the algorithm treats the cluster as
    a single body at its center of mass, reducing complexity from
    O(n^2) to O(n log n).

    Usage:
        tree = QuadTree(Quadrant(0.0, 0.0, 1000.0))
        for body in bodies:
            tree.insert(body)

        # Acceleration on a body, excluding itself
        ax, ay = tree.query_acceleration(body)

    Mass and center of mass are maintained on every insert, so the tree is
    queryable at any point between insertions.
    """

    def __init__(self, quadrant: Quadrant, config: Optional[BarnesHutConfig] = None) -> None:
        """
        Initialize an empty quadtree.

        Args:
            quadrant: Root region; should contain every body to be inserted
            config: Tunables (theta, G, guards). A fresh default config is created if None.
        """
        self.config = config if config is not None else BarnesHutConfig()
        self.root = QuadTreeNode(quadrant)
        self.body_count = 0

    @property
    def quadrant(self) -> Quadrant:
        return self.root.quadrant

    @property
    def total_mass(self) -> float:
        return self.root.total_mass

    @property
    def center_of_mass(self) -> Vec2:
        return self.root.center_of_mass

    # -------------------------------------------------------------------------
    # Insertion
    # -------------------------------------------------------------------------

    def insert(self, body: Body) -> None:
        """
        Insert a body into the quadtree.

        Raises:
            InvalidBodyError: If the body's mass or position is invalid
        """
        validate_body(body)
        if not self.root.quadrant.contains(body.x, body.y):
            warnings.warn(
                f"Body {body.index} at ({body.x}, {body.y}) lies outside the root "
                f"{self.root.quadrant}; it is placed in the nearest child quadrant.",
                BoundaryWarning,
                stacklevel=2,
            )
        self._insert_into(self.root, body)
        self.body_count += 1

    def _insert_into(self, node: QuadTreeNode, body: Body) -> None:
        """Recursively insert body into subtree rooted at node."""
        if node.is_empty():
            # Empty node becomes a leaf with this body
            node.bodies.append(body)
            node.add_mass(body.x, body.y, body.mass)
            return

        if node.is_leaf():
            if self._can_subdivide(node):
                held = node.bodies
                node.bodies = []
                node.children = [
                    QuadTreeNode(child, node.depth + 1) for child in node.quadrant.subdivide()
                ]
                for existing in held:
                    self._insert_into_child(node, existing)
                self._insert_into_child(node, body)
            else:
                # Too small to split: the leaf keeps every body it receives
                node.bodies.append(body)
        else:
            self._insert_into_child(node, body)

        node.add_mass(body.x, body.y, body.mass)

    def _insert_into_child(self, node: QuadTreeNode, body: Body) -> None:
        """Insert body into the child of node owning its position."""
        assert node.children is not None
        corner = node.quadrant.corner_for(body.x, body.y)
        self._insert_into(node.children[corner], body)

    def _can_subdivide(self, node: QuadTreeNode) -> bool:
        return (
            node.quadrant.side_length > self.config.min_quadrant_size
            and node.depth < self.config.max_depth
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def query_acceleration(self, body: Body) -> Vec2:
        """
        Calculate approximate gravitational acceleration on a body.

        Uses Barnes-Hut approximation: if a cluster is sufficiently
        far away (size/distance < theta), treat it as a single mass.
        The body itself is never counted, even if another body occupies
        the same position.

        Args:
            body: The body to calculate acceleration on

        Returns:
            (ax, ay) acceleration vector, pointing toward attracting mass
        """
        return self._accumulate(self.root, body.x, body.y, body, True)

    def query_force(self, body: Body) -> Vec2:
        """
        Calculate approximate gravitational force on a body.

        Returns:
            (fx, fy) force vector, G * m1 * m2 / d^2 per contribution
        """
        ax, ay = self.query_acceleration(body)
        return ax * body.mass, ay * body.mass

    def query_velocity_delta(self, body: Body, dt: float) -> Vec2:
        """
        Velocity change over one time step, acceleration * dt.

        Raises:
            InvalidConfigError: If dt is not positive
        """
        dt = validate_time_step(dt)
        ax, ay = self.query_acceleration(body)
        return ax * dt, ay * dt

    def query_point(self, x: float, y: float) -> Vec2:
        """Acceleration field at an arbitrary point (no self-exclusion)."""
        return self._accumulate(self.root, x, y, None, True)

    def _accumulate(
        self,
        node: QuadTreeNode,
        x: float,
        y: float,
        exclude: Optional[Body],
        on_path: bool,
    ) -> Vec2:
        """
        Recursively sum acceleration contributions from node.

        ``on_path`` marks nodes on the insertion path of (x, y). Those nodes
        may hold the query body itself and are always opened.
        """
        if node.is_empty():
            return 0.0, 0.0

        g = self.config.gravitational_constant
        floor = self.config.min_distance

        if node.is_leaf():
            ax, ay = 0.0, 0.0
            for other in node.bodies:
                if exclude is not None and exclude.is_same(other):
                    continue
                cax, cay = pairwise_acceleration(x, y, other.x, other.y, other.mass, g, floor)
                ax += cax
                ay += cay
            return ax, ay

        if not on_path:
            dx = node.center_of_mass_x - x
            dy = node.center_of_mass_y - y
            dist = math.sqrt(dx * dx + dy * dy)

            # Barnes-Hut criterion: s/d < theta
            if node.quadrant.side_length < self.config.theta * dist:
                return pairwise_acceleration(
                    x, y, node.center_of_mass_x, node.center_of_mass_y, node.total_mass, g, floor
                )

        # Node is too close - recurse into children
        assert node.children is not None
        path_corner = node.quadrant.corner_for(x, y) if on_path else None
        ax, ay = 0.0, 0.0
        for corner, child in zip(Corner, node.children):
            cax, cay = self._accumulate(child, x, y, exclude, corner == path_corner)
            ax += cax
            ay += cay
        return ax, ay

    # -------------------------------------------------------------------------
    # Read-only traversal
    # -------------------------------------------------------------------------

    def iter_nodes(self) -> Iterator[NodeInfo]:
        """Yield a snapshot of every node, pre-order, children in [NW, NE, SW, SE] order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            kind = node.kind
            yield NodeInfo(
                quadrant=node.quadrant,
                kind=kind,
                depth=node.depth,
                total_mass=node.total_mass,
                center_of_mass=None if kind == NodeKind.EMPTY else node.center_of_mass,
                body_count=len(node.bodies),
            )
            if node.children is not None:
                stack.extend(reversed(node.children))

    def quadrants(self) -> Iterator[Quadrant]:
        """Yield the region of every node (for drawing the tree)."""
        for info in self.iter_nodes():
            yield info.quadrant

    def node_count(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def depth(self) -> int:
        """Depth of the deepest node (0 for a root-only tree)."""
        return max(info.depth for info in self.iter_nodes())

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_bodies(
        cls,
        bodies: Sequence[Body],
        config: Optional[BarnesHutConfig] = None,
    ) -> QuadTree:
        """
        Build a quadtree over a list of bodies.

        The root quadrant bounds every position, enlarged by
        ``config.bounding_margin``.

        Args:
            bodies: Bodies to insert, in order
            config: Tunables. A fresh default config is created if None.

        Returns:
            QuadTree with all bodies inserted
        """
        config = config if config is not None else BarnesHutConfig()
        if not bodies:
            return cls(Quadrant(0.0, 0.0, 1.0), config)

        for body in bodies:
            validate_body(body)

        quadrant = Quadrant.bounding(
            ((b.x, b.y) for b in bodies), margin=config.bounding_margin
        )
        tree = cls(quadrant, config)
        for body in bodies:
            tree.insert(body)
        return tree

    def __repr__(self) -> str:
        return f"QuadTree(bodies={self.body_count}, root={self.root.quadrant})"


__all__ = ["BoundaryWarning", "NodeInfo", "QuadTree", "QuadTreeNode"]
