"""Tests for the force-directed layout simulator

Tests cover:
1. Idle/running lifecycle and re-randomization on load
2. Schedule cancellation when the graph changes
3. Force dynamics (gravity, springs, repulsion, clamping)
4. Two-phase damping
5. Render views
"""

from __future__ import annotations

import logging
import math
import random

import pytest

from social_analytics.analysis.report import build_snapshot
from social_analytics.graph.builder import SAMPLE_DATA, parse
from social_analytics.graph.models import Graph
from social_analytics.layout.simulator import LayoutSimulator, SimulatorState
from social_analytics.logging_config import TRACE
from social_analytics.settings import LayoutSettings


@pytest.fixture
def simulator(layout_settings, rng):
    """Create an idle simulator with a fixed random source."""
    return LayoutSimulator(layout_settings, rng=rng)


def distance(a: tuple[float, float], b: tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


class TestLifecycle:
    """IDLE and RUNNING transitions"""

    def test_starts_idle(self, simulator):
        """A new simulator has nothing to step"""
        assert simulator.state is SimulatorState.IDLE
        assert simulator.step() == {}
        assert simulator.step_count == 0

    def test_load_starts_running(self, simulator, square_graph):
        """Loading a non-empty graph starts the simulation"""
        state = simulator.load(square_graph)

        assert state is SimulatorState.RUNNING
        assert list(simulator.positions()) == list(square_graph.nodes)

    def test_load_empty_graph_stays_idle(self, simulator):
        """An empty graph is nothing to lay out"""
        assert simulator.load(Graph()) is SimulatorState.IDLE
        assert simulator.positions() == {}

    def test_initial_positions_near_center_with_zero_velocity(self, simulator, layout_settings):
        """Nodes start inside center +/- spread and at rest"""
        simulator.load(parse(SAMPLE_DATA))
        cx, cy = layout_settings.center
        spread = layout_settings.initial_spread

        for node in simulator.node_states():
            assert cx - spread <= node.x <= cx + spread
            assert cy - spread <= node.y <= cy + spread
            assert node.vx == 0.0
            assert node.vy == 0.0

    def test_reload_rerandomizes_and_resets(self, simulator, square_graph):
        """A new load never merges with previous simulation state"""
        simulator.load(square_graph)
        for _ in range(10):
            simulator.step()
        before = simulator.positions()

        simulator.load(square_graph)

        assert simulator.step_count == 0
        assert simulator.positions() != before
        assert all(n.vx == 0.0 and n.vy == 0.0 for n in simulator.node_states())

    def test_clear_returns_to_idle(self, simulator, square_graph):
        """Clearing drops the graph and all node state"""
        simulator.load(square_graph)
        simulator.step()

        simulator.clear()

        assert simulator.state is SimulatorState.IDLE
        assert simulator.graph is None
        assert simulator.positions() == {}
        assert simulator.step() == {}

    def test_seeded_placement_is_reproducible(self, square_graph):
        """The same seed gives the same initial layout"""
        settings = LayoutSettings(random_seed=99)
        first = LayoutSimulator(settings)
        second = LayoutSimulator(settings)

        first.load(square_graph)
        second.load(square_graph)

        assert first.positions() == second.positions()

    def test_unseeded_placement_differs_between_runs(self, square_graph):
        """Without a seed every run starts from a fresh random layout"""
        first = LayoutSimulator(LayoutSettings())
        second = LayoutSimulator(LayoutSettings())

        first.load(square_graph)
        second.load(square_graph)

        assert first.positions() != second.positions()


class TestScheduleCancellation:
    """Host scheduling handles are released when the target changes"""

    def test_load_cancels_bound_schedule(self, simulator, square_graph):
        """Replacing the graph cancels the host's tick source once"""
        calls = []
        simulator.load(square_graph)
        simulator.bind_schedule(lambda: calls.append("cancel"))

        simulator.load(parse(SAMPLE_DATA))
        simulator.load(square_graph)

        assert calls == ["cancel"]

    def test_clear_cancels_bound_schedule(self, simulator, square_graph):
        """Withdrawing the visualization cancels the tick source"""
        calls = []
        simulator.load(square_graph)
        simulator.bind_schedule(lambda: calls.append("cancel"))

        simulator.clear()

        assert calls == ["cancel"]

    def test_binding_while_idle_cancels_immediately(self, simulator):
        """There is nothing to drive while idle"""
        calls = []

        simulator.bind_schedule(lambda: calls.append("cancel"))

        assert calls == ["cancel"]

    def test_rebinding_releases_previous_handle(self, simulator, square_graph):
        """Only one schedule is bound at a time"""
        calls = []
        simulator.load(square_graph)
        simulator.bind_schedule(lambda: calls.append("first"))

        simulator.bind_schedule(lambda: calls.append("second"))
        simulator.clear()

        assert calls == ["first", "second"]


class TestDynamics:
    """Force model behaviour"""

    def test_isolated_node_moves_toward_center(self, simulator, layout_settings):
        """With gravity alone, distance to center shrinks every step"""
        simulator.load(Graph(nodes=("Solo",)))
        center = layout_settings.center
        last = distance(simulator.positions()["Solo"], center)
        assert last > 0

        for _ in range(250):
            current = distance(simulator.step()["Solo"], center)
            assert current <= last
            last = current

    def test_isolated_node_velocity_decays(self, simulator):
        """After the initial push, speed shrinks toward zero"""
        simulator.load(Graph(nodes=("Solo",)))
        speeds = []
        for _ in range(250):
            simulator.step()
            node = simulator.node_states()[0]
            speeds.append(math.hypot(node.vx, node.vy))

        tail = speeds[50:]
        assert all(later <= earlier for earlier, later in zip(tail, tail[1:], strict=False))
        assert speeds[-1] < speeds[50] / 5

    def test_self_loop_adds_no_force(self, layout_settings):
        """A self-loop follows exactly the isolated-node trajectory"""
        isolated = LayoutSimulator(layout_settings, rng=random.Random(9))
        looped = LayoutSimulator(layout_settings, rng=random.Random(9))
        isolated.load(Graph(nodes=("Solo",)))
        looped.load(parse("Solo,Solo"))

        for _ in range(50):
            assert looped.step() == isolated.step()

    def test_springs_pull_connected_nodes_together(self, layout_settings):
        """An edge shortens the settled distance between two nodes"""
        linked = LayoutSimulator(layout_settings, rng=random.Random(5))
        unlinked = LayoutSimulator(layout_settings, rng=random.Random(5))
        linked.load(parse("A,B"))
        unlinked.load(Graph(nodes=("A", "B")))

        for _ in range(600):
            linked_pos = linked.step()
            unlinked_pos = unlinked.step()

        assert distance(linked_pos["A"], linked_pos["B"]) < distance(unlinked_pos["A"], unlinked_pos["B"])

    def test_positions_clamped_to_canvas_inset(self, rng):
        """Strong repulsion cannot push nodes past the margin"""
        settings = LayoutSettings(repulsion=1e7)
        simulator = LayoutSimulator(settings, rng=rng)
        simulator.load(parse(SAMPLE_DATA))

        for _ in range(50):
            positions = simulator.step()

        for x, y in positions.values():
            assert settings.margin <= x <= settings.width - settings.margin
            assert settings.margin <= y <= settings.height - settings.margin

    def test_zero_dt_keeps_positions(self, simulator, square_graph):
        """dt scales the position update, not the velocity update"""
        simulator.load(square_graph)
        before = simulator.positions()

        after = simulator.step(dt=0.0)

        assert after == before
        assert simulator.kinetic_energy() > 0

    def test_step_returns_current_positions(self, simulator, square_graph):
        """step() reports the same positions as positions()"""
        simulator.load(square_graph)

        assert simulator.step() == simulator.positions()


class TestDamping:
    """Hot-then-cool annealing schedule"""

    def test_hot_then_cool(self, simulator):
        """0.85 for the first 300 steps, 0.95 afterwards"""
        simulator.load(Graph(nodes=("Solo",)))
        assert simulator.damping == 0.85

        for _ in range(299):
            simulator.step()
        assert simulator.damping == 0.85

        simulator.step()
        assert simulator.step_count == 300
        assert simulator.damping == 0.95

    def test_reload_restarts_hot_phase(self, simulator):
        """A new graph starts hot again"""
        simulator.load(Graph(nodes=("Solo",)))
        for _ in range(300):
            simulator.step()

        simulator.load(Graph(nodes=("Solo",)))

        assert simulator.damping == 0.85


class TestNodeViews:
    """Render-ready node descriptions"""

    def test_default_style_without_snapshot(self, simulator, square_graph):
        """Before analysis every node uses the default radius and first colour"""
        simulator.load(square_graph)

        views = simulator.node_views()

        assert [v.id for v in views] == list(square_graph.nodes)
        assert {v.radius for v in views} == {12.0}
        assert {v.color for v in views} == {"#3b82f6"}

    def test_style_from_attached_snapshot(self, simulator):
        """Degree sizes nodes once a snapshot is attached"""
        graph = parse("H,A\nH,B\nH,C")
        simulator.load(graph)
        simulator.attach_snapshot(build_snapshot(graph))

        radii = {v.id: v.radius for v in simulator.node_views()}

        assert radii == {"H": 12.0, "A": 10.0, "B": 10.0, "C": 10.0}

    def test_load_drops_stale_snapshot(self, simulator, square_graph):
        """A snapshot belongs to one graph and is cleared on reload"""
        simulator.load(square_graph, build_snapshot(square_graph))

        simulator.load(square_graph)

        assert simulator.snapshot is None


class TestStepLogging:
    """Per-step diagnostics only at TRACE"""

    def test_steps_logged_at_trace(self, simulator, square_graph, caplog):
        """Each step emits one TRACE record with damping and energy"""
        caplog.set_level(TRACE, logger="social_analytics.layout.simulator")
        simulator.load(square_graph)

        simulator.step()
        simulator.step()

        steps = [r for r in caplog.records if r.levelname == "TRACE"]
        assert [r.getMessage().split(":")[0] for r in steps] == ["Layout step 1", "Layout step 2"]
        assert "damping=0.85" in steps[0].getMessage()

    def test_debug_skips_step_diagnostics(self, simulator, square_graph, caplog, monkeypatch):
        """Below TRACE no step record is built and energy is not computed"""
        caplog.set_level(logging.DEBUG, logger="social_analytics.layout.simulator")
        simulator.load(square_graph)

        def fail() -> float:
            raise AssertionError("kinetic_energy computed for a disabled record")

        monkeypatch.setattr(simulator, "kinetic_energy", fail)
        simulator.step()

        assert not [r for r in caplog.records if r.levelname == "TRACE"]
