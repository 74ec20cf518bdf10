"""
gravity-tree: Barnes-Hut gravity approximation for 2D n-body simulations.

This package approximates the net gravitational force on every body of a
2D system in O(n log n) per step by grouping distant bodies in a quadtree.

Available components:
- spatial: Quadrant geometry and the Barnes-Hut QuadTree
- kernel: Two-body gravity kernel and exact direct summation
- step: Build-insert-query helpers for one simulation step
- simulation: Optional semi-implicit Euler driver with tick events
- metrics: Conserved quantities and force error measures
"""

__version__ = "0.1.0"

# Configuration
from .config import BarnesHutConfig

# Gravity kernel
from .kernel import (
    direct_accelerations,
    direct_forces,
    pairwise_acceleration,
    pairwise_force,
)

# Metrics for simulation checks
from .metrics import (
    center_of_mass,
    force_errors,
    kinetic_energy,
    max_relative_error,
    potential_energy,
    total_energy,
    total_mass,
    total_momentum,
)

# Simulation driver
from .simulation import Simulation

# Spatial data structures
from .spatial import BoundaryWarning, NodeInfo, Quadrant, QuadTree, QuadTreeNode

# Per-step helpers
from .step import (
    bounding_quadrant,
    build_tree,
    compute_accelerations,
    compute_forces,
)
from .types import (
    Body,
    BodyLike,
    Corner,
    Event,
    EventType,
    NodeKind,
    Vec2,
)

# Validation utilities
from .validation import (
    InvalidBodyError,
    InvalidConfigError,
    InvalidQuadrantError,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Body",
    "BodyLike",
    "Corner",
    "NodeKind",
    "EventType",
    "Event",
    "Vec2",
    # Configuration
    "BarnesHutConfig",
    # Spatial data structures
    "Quadrant",
    "QuadTree",
    "QuadTreeNode",
    "NodeInfo",
    "BoundaryWarning",
    # Kernel
    "pairwise_acceleration",
    "pairwise_force",
    "direct_accelerations",
    "direct_forces",
    # Per-step helpers
    "bounding_quadrant",
    "build_tree",
    "compute_accelerations",
    "compute_forces",
    # Simulation
    "Simulation",
    # Metrics
    "total_mass",
    "center_of_mass",
    "total_momentum",
    "kinetic_energy",
    "potential_energy",
    "total_energy",
    "force_errors",
    "max_relative_error",
    # Validation
    "ValidationError",
    "InvalidQuadrantError",
    "InvalidBodyError",
    "InvalidConfigError",
]
