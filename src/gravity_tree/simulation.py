"""
Step-by-step n-body simulation driver.

Simulation wires the per-step force evaluation to a semi-implicit Euler
update (velocity first, then position with the new velocity). The tree is
rebuilt every tick from current positions. The quadtree only reports
accelerations; all state updates happen here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .config import BarnesHutConfig
from .kernel import direct_accelerations
from .spatial.quadtree import QuadTree
from .types import Body, BodyLike, Event, EventType, Vec2, to_body
from .validation import validate_time_step


class Simulation:
    """
    Iterative gravity simulation over a list of bodies.

    Each tick:
    1. Compute accelerations (Barnes-Hut tree, or direct sum for few bodies)
    2. v += a * dt
    3. x += v * dt

    Example:
        sim = Simulation(
            bodies=[{"x": 0, "y": 0, "mass": 10}, {"x": 5, "y": 0, "vy": 1.4}],
            dt=0.01,
            iterations=500,
        )
        sim.run()

        for body in sim.bodies:
            print(f"Body {body.index}: ({body.x}, {body.y})")
    """

    def __init__(
        self,
        *,
        bodies: Optional[Sequence[BodyLike]] = None,
        config: Optional[BarnesHutConfig] = None,
        dt: float = 0.001,
        iterations: int = 100,
        use_barnes_hut: bool = True,
        direct_threshold: int = 0,
        keep_tree: bool = False,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize simulation.

        Args:
            bodies: Bodies (Body objects, dicts, or objects with x/y/mass), copied
            config: Barnes-Hut tunables. A default config is created if None.
            dt: Time step per tick. Must be positive.
            iterations: Number of ticks performed by run()
            use_barnes_hut: Use the quadtree; False always uses the direct sum
            direct_threshold: Use the direct sum while body count <= this value
            keep_tree: Keep the latest tree in ``last_tree`` for inspection
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
        """
        self._bodies: list[Body] = []
        self._config: BarnesHutConfig = config if config is not None else BarnesHutConfig()
        self._dt: float = validate_time_step(dt)
        self._iterations: int = max(1, int(iterations))
        self._use_barnes_hut: bool = bool(use_barnes_hut)
        self._direct_threshold: int = max(0, int(direct_threshold))
        self._keep_tree: bool = bool(keep_tree)
        self._events: dict[EventType, Callable[[Optional[Event]], None]] = {}
        self._running: bool = False
        self._step: int = 0
        self._time: float = 0.0
        self.last_tree: Optional[QuadTree] = None

        if bodies is not None:
            self.bodies = bodies

        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def bodies(self) -> list[Body]:
        """Get the list of bodies."""
        return self._bodies

    @bodies.setter
    def bodies(self, value: Sequence[BodyLike]) -> None:
        """Set bodies from Body objects, dicts or objects; missing indices are assigned."""
        self._bodies = [to_body(data, index=i) for i, data in enumerate(value)]

    @property
    def config(self) -> BarnesHutConfig:
        """Get Barnes-Hut configuration."""
        return self._config

    @config.setter
    def config(self, value: BarnesHutConfig) -> None:
        self._config = value

    @property
    def dt(self) -> float:
        """Get time step."""
        return self._dt

    @dt.setter
    def dt(self, value: float) -> None:
        """Set time step (must be positive)."""
        self._dt = validate_time_step(value)

    @property
    def iterations(self) -> int:
        """Get number of ticks per run()."""
        return self._iterations

    @iterations.setter
    def iterations(self, value: int) -> None:
        """Set number of ticks per run() (minimum 1)."""
        self._iterations = max(1, int(value))

    @property
    def use_barnes_hut(self) -> bool:
        """Get whether Barnes-Hut approximation is enabled."""
        return self._use_barnes_hut

    @use_barnes_hut.setter
    def use_barnes_hut(self, value: bool) -> None:
        self._use_barnes_hut = bool(value)

    @property
    def direct_threshold(self) -> int:
        """Get the body count at or below which the direct sum is used."""
        return self._direct_threshold

    @direct_threshold.setter
    def direct_threshold(self, value: int) -> None:
        self._direct_threshold = max(0, int(value))

    @property
    def step(self) -> int:
        """Number of ticks performed so far."""
        return self._step

    @property
    def time(self) -> float:
        """Simulated time elapsed."""
        return self._time

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: Callable[[Optional[Event]], None]) -> Self:
        """
        Subscribe to a simulation event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """Trigger an event, calling the registered callback."""
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    def accelerations(self) -> list[Vec2]:
        """Acceleration on every body at the current positions."""
        n = len(self._bodies)
        if n == 0:
            return []

        if not self._use_barnes_hut or n <= self._direct_threshold:
            self.last_tree = None
            acc = direct_accelerations(
                self._bodies,
                self._config.gravitational_constant,
                self._config.min_distance,
            )
            return [(float(ax), float(ay)) for ax, ay in acc]

        tree = QuadTree.from_bodies(self._bodies, self._config)
        result = [tree.query_acceleration(body) for body in self._bodies]
        self.last_tree = tree if self._keep_tree else None
        return result

    def tick(self) -> bool:
        """
        Advance the simulation by one time step.

        Returns:
            True if there is nothing to simulate, False otherwise.
        """
        if not self._bodies:
            return True

        dt = self._dt
        for body, (ax, ay) in zip(self._bodies, self.accelerations()):
            body.vx += ax * dt
            body.vy += ay * dt
            body.x += body.vx * dt
            body.y += body.vy * dt

        self._step += 1
        self._time += dt
        self.trigger({"type": EventType.tick, "step": self._step, "time": self._time})
        return False

    def kick(self) -> None:
        """Run tick() repeatedly until done, stopped, or max iterations."""
        for _ in range(self._iterations):
            if not self._running or self.tick():
                break

    def run(self) -> Self:
        """
        Run the simulation for ``iterations`` ticks.

        Returns:
            self (for chaining)
        """
        self._running = True
        self.trigger({"type": EventType.start, "step": self._step, "time": self._time})
        self.kick()
        self._running = False
        self.trigger({"type": EventType.end, "step": self._step, "time": self._time})
        return self

    def stop(self) -> Self:
        """Stop a running simulation after the current tick."""
        self._running = False
        return self


__all__ = ["Simulation"]
