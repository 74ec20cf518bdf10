"""
Common types for the Barnes-Hut core.

This module provides the fundamental types shared across modules:
- Body: Point mass with position, velocity and identity
- Corner: Child position of a subdivided quadrant
- NodeKind: Tagged state of a quadtree node
- EventType: Simulation lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any, Optional, TypedDict, Union

Vec2 = tuple[float, float]
"""2D vector as an (x, y) tuple."""


class Corner(IntEnum):
    """
    Child quadrant of a subdivided region.

    The y axis points up, so NW is the child with smaller x and larger y.
    Values index the children list of an internal node.
    """

    NW = 0
    NE = 1
    SW = 2
    SE = 3


class NodeKind(IntEnum):
    """State of a quadtree node."""

    EMPTY = 0
    LEAF = 1
    INTERNAL = 2


class EventType(IntEnum):
    """
    Simulation lifecycle events.

    - start: Stepping has begun
    - tick: Fired once per step
    - end: Stepping has finished or was stopped
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    step: int
    time: float


@dataclass(eq=False)
class Body:
    """
    A point mass for force calculations.

    Bodies compare by identity, never by position: two distinct bodies may
    occupy the same point. ``index`` is an optional stable identity token that
    lets a copy of a body be recognized as the same body during queries.
    """

    x: float
    y: float
    mass: float = 1.0
    index: int = -1
    vx: float = 0.0
    vy: float = 0.0

    @property
    def position(self) -> Vec2:
        return (self.x, self.y)

    def is_same(self, other: Body) -> bool:
        """True if ``other`` is this body (same object or same non-negative index)."""
        if other is self:
            return True
        return self.index >= 0 and self.index == other.index

    def __repr__(self) -> str:
        return f"Body(index={self.index}, x={self.x:.4g}, y={self.y:.4g}, mass={self.mass:.4g})"


BodyLike = Union[Body, dict[str, Any], Any]
"""Input type for bodies: Body objects, dicts, or objects with x/y/mass."""


def to_body(data: BodyLike, index: Optional[int] = None) -> Body:
    """
    Normalize a body-like value into a Body.

    Body instances are copied, so the caller's objects are never modified.
    Dicts are passed as keyword arguments. Other objects have their x, y,
    mass, index, vx and vy attributes copied.

    Args:
        data: Body, dict or object with body attributes
        index: Identity assigned when the input carries none
    """
    if isinstance(data, Body):
        body = replace(data)
    elif isinstance(data, dict):
        body = Body(**data)
    else:
        body = Body(float(data.x), float(data.y))
        for attr in ("mass", "index", "vx", "vy"):
            if hasattr(data, attr):
                setattr(body, attr, getattr(data, attr))
    if index is not None and body.index < 0:
        body.index = index
    return body


__all__ = [
    "Vec2",
    "Corner",
    "NodeKind",
    "EventType",
    "Event",
    "Body",
    "BodyLike",
    "to_body",
]
