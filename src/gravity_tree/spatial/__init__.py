"""
Spatial data structures for Barnes-Hut gravity.

Provides the Quadrant geometry primitive and the quadtree used for
O(n log n) force approximation.
"""

from .quadrant import Quadrant
from .quadtree import BoundaryWarning, NodeInfo, QuadTree, QuadTreeNode

__all__ = ["BoundaryWarning", "NodeInfo", "Quadrant", "QuadTree", "QuadTreeNode"]
