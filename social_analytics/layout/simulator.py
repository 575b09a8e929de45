"""
Force-directed layout simulation.

The simulator owns the only continuously-evolving state in the engine: node
positions and velocities. It never schedules itself. A host calls step() once
per tick at whatever cadence it likes, and may bind a cancel callable that the
simulator invokes the moment its graph is replaced or cleared.

Forces per node and step:
- repulsion from every other node, K_rep / d^2, pushing away
- spring attraction per incident edge, d * K_spring, pulling toward the neighbor
- gravity toward the canvas center, (center - position) * K_gravity

Distances are floored at 1. Velocities are damped with a two-phase schedule
(hot, then cool) and positions are clamped into the canvas inset. This is a
heuristic layout; it is not energy conserving and has no convergence
guarantee.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..analysis.report import AnalyticsSnapshot
from ..graph.models import Graph
from ..logging_config import TRACE
from ..settings import LayoutSettings, get_settings
from .styling import node_color, node_radius

logger = logging.getLogger(__name__)


class SimulatorState(Enum):
    """Lifecycle of the layout simulation"""

    IDLE = "idle"  # No active graph, or visualization withdrawn
    RUNNING = "running"  # Host is expected to call step() every tick


@dataclass
class NodeState:
    """Mutable position and velocity of one node"""

    id: str
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0


@dataclass(frozen=True)
class NodeView:
    """Render-ready description of a node"""

    id: str
    x: float
    y: float
    radius: float
    color: str


class LayoutSimulator:
    """Advances node positions under repulsion, spring and gravity forces"""

    def __init__(self, settings: LayoutSettings | None = None, rng: random.Random | None = None):
        """Initialize an idle simulator.

        Args:
            settings: Layout constants (defaults to the cached engine settings)
            rng: Random source for initial placement; seeded from
                settings.random_seed when omitted
        """
        self.settings = settings or get_settings().layout
        self._rng = rng or random.Random(self.settings.random_seed)

        self.state = SimulatorState.IDLE
        self.graph: Graph | None = None
        self.snapshot: AnalyticsSnapshot | None = None
        self.step_count = 0

        self._nodes: dict[str, NodeState] = {}
        self._neighbors: dict[str, list[str]] = {}
        self._cancel_schedule: Callable[[], None] | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self, graph: Graph, snapshot: AnalyticsSnapshot | None = None) -> SimulatorState:
        """Make a graph the active layout target.

        Any previous simulation is discarded, never merged: the bound schedule
        is cancelled, positions are re-randomized around the canvas center and
        velocities are zeroed. An empty graph leaves the simulator idle.

        Returns:
            The resulting state
        """
        self._release_schedule()
        self._reset()

        if graph.is_empty:
            logger.info("Layout target cleared: graph has no nodes")
            return self.state

        cx, cy = self.settings.center
        spread = self.settings.initial_spread
        self.graph = graph
        self.snapshot = snapshot
        self._nodes = {
            node_id: NodeState(
                node_id,
                x=self._rng.uniform(cx - spread, cx + spread),
                y=self._rng.uniform(cy - spread, cy + spread),
            )
            for node_id in graph.nodes
        }
        self._neighbors = graph.adjacency()
        self.state = SimulatorState.RUNNING

        logger.info(f"Layout running for {graph.node_count} nodes and {graph.edge_count} edges")
        return self.state

    def clear(self) -> None:
        """Withdraw the visualization and return to IDLE."""
        was_running = self.state is SimulatorState.RUNNING
        self._release_schedule()
        self._reset()
        if was_running:
            logger.info("Layout stopped")

    def bind_schedule(self, cancel: Callable[[], None]) -> None:
        """Register the host's cancel callable for its tick source.

        The callable is invoked exactly once when the graph is replaced or
        cleared. Binding while idle cancels immediately since there is
        nothing to drive.
        """
        if self.state is SimulatorState.IDLE:
            cancel()
            return
        self._release_schedule()
        self._cancel_schedule = cancel

    def attach_snapshot(self, snapshot: AnalyticsSnapshot | None) -> None:
        """Use analytics results to size and colour nodes."""
        self.snapshot = snapshot

    def _release_schedule(self) -> None:
        cancel, self._cancel_schedule = self._cancel_schedule, None
        if cancel is not None:
            cancel()

    def _reset(self) -> None:
        self.state = SimulatorState.IDLE
        self.graph = None
        self.snapshot = None
        self.step_count = 0
        self._nodes = {}
        self._neighbors = {}

    # ------------------------------------------------------------------
    # Dynamics
    # ------------------------------------------------------------------

    @property
    def damping(self) -> float:
        """Damping for the next step: hot phase first, then cool."""
        if self.step_count < self.settings.hot_steps:
            return self.settings.hot_damping
        return self.settings.cool_damping

    def step(self, dt: float = 1.0) -> dict[str, tuple[float, float]]:
        """Advance the simulation by one tick.

        Nodes are updated in place in node order, so a node's force uses the
        already-moved positions of the nodes before it in the same tick.

        Args:
            dt: Scale applied to the velocity when moving positions

        Returns:
            Node id -> (x, y) after the step; empty when idle
        """
        if self.state is not SimulatorState.RUNNING:
            return {}

        s = self.settings
        damping = self.damping
        cx, cy = s.center
        low_x, high_x = s.margin, s.width - s.margin
        low_y, high_y = s.margin, s.height - s.margin

        for node in self._nodes.values():
            fx, fy = self._net_force(node, cx, cy)

            node.vx = (node.vx + fx) * damping
            node.vy = (node.vy + fy) * damping
            node.x += node.vx * dt
            node.y += node.vy * dt

            node.x = max(low_x, min(high_x, node.x))
            node.y = max(low_y, min(high_y, node.y))

        self.step_count += 1
        if logger.isEnabledFor(TRACE):
            logger.trace(  # type: ignore[attr-defined]
                f"Layout step {self.step_count}: damping={damping}, energy={self.kinetic_energy():.4f}"
            )
        return self.positions()

    def _net_force(self, node: NodeState, cx: float, cy: float) -> tuple[float, float]:
        s = self.settings
        fx = fy = 0.0

        for other in self._nodes.values():
            if other.id == node.id:
                continue
            dx = node.x - other.x
            dy = node.y - other.y
            dist = max(math.hypot(dx, dy), 1.0)
            force = s.repulsion / (dist * dist)
            fx += dx / dist * force
            fy += dy / dist * force

        # One pull per incident edge occurrence; self-loops have dx = dy = 0
        for neighbor_id in self._neighbors[node.id]:
            other = self._nodes[neighbor_id]
            dx = other.x - node.x
            dy = other.y - node.y
            dist = max(math.hypot(dx, dy), 1.0)
            force = dist * s.spring
            fx += dx / dist * force
            fy += dy / dist * force

        fx += (cx - node.x) * s.gravity
        fy += (cy - node.y) * s.gravity
        return fx, fy

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def positions(self) -> dict[str, tuple[float, float]]:
        return {node_id: (n.x, n.y) for node_id, n in self._nodes.items()}

    def node_states(self) -> list[NodeState]:
        """Copies of the current node states, in node order."""
        return [NodeState(n.id, n.x, n.y, n.vx, n.vy) for n in self._nodes.values()]

    def kinetic_energy(self) -> float:
        """Sum of squared speeds; hosts can watch it fall as the layout settles."""
        return sum(n.vx * n.vx + n.vy * n.vy for n in self._nodes.values())

    def node_views(self) -> list[NodeView]:
        """Positions with radius and colour from the attached snapshot."""
        return [
            NodeView(
                id=n.id,
                x=n.x,
                y=n.y,
                radius=node_radius(n.id, self.snapshot),
                color=node_color(n.id, self.snapshot),
            )
            for n in self._nodes.values()
        ]
