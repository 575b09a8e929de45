"""Tests for the asyncio frame ticker host"""

from __future__ import annotations

import asyncio

import pytest

from social_analytics.graph.builder import SAMPLE_DATA, parse
from social_analytics.layout.simulator import LayoutSimulator
from social_analytics.layout.ticker import FrameTicker


@pytest.fixture
def running_simulator(layout_settings, square_graph):
    """Simulator already loaded with the four-cycle."""
    simulator = LayoutSimulator(layout_settings)
    simulator.load(square_graph)
    return simulator


class TestFrameTicker:
    """Driving the simulator from an event loop"""

    def test_rejects_non_positive_fps(self, running_simulator):
        """A frame rate must be positive"""
        with pytest.raises(ValueError):
            FrameTicker(running_simulator, fps=0)

    @pytest.mark.asyncio
    async def test_stops_after_max_frames(self, running_simulator):
        """One step per frame until the limit"""
        frames = []
        ticker = FrameTicker(running_simulator, fps=1000, on_frame=frames.append, max_frames=5)

        ticker.start()
        await ticker.wait()

        assert ticker.frames == 5
        assert running_simulator.step_count == 5
        assert len(frames) == 5
        assert set(frames[-1]) == {"Alice", "Bob", "Charlie", "David"}

    @pytest.mark.asyncio
    async def test_new_graph_cancels_ticker(self, running_simulator):
        """Loading another graph stops the loop immediately"""
        ticker = FrameTicker(running_simulator, fps=1000)
        ticker.start()
        await asyncio.sleep(0.02)

        running_simulator.load(parse(SAMPLE_DATA))
        await ticker.wait()

        assert not ticker.running
        assert running_simulator.step_count == 0

    @pytest.mark.asyncio
    async def test_clear_cancels_ticker(self, running_simulator):
        """Withdrawing the visualization stops the loop"""
        ticker = FrameTicker(running_simulator, fps=1000)
        ticker.start()
        await asyncio.sleep(0.02)

        running_simulator.clear()
        await ticker.wait()

        assert not ticker.running

    @pytest.mark.asyncio
    async def test_idle_simulator_is_never_stepped(self, layout_settings):
        """A ticker bound to an idle simulator is cancelled at once"""
        simulator = LayoutSimulator(layout_settings)
        ticker = FrameTicker(simulator, fps=1000)

        ticker.start()
        await ticker.wait()

        assert ticker.frames == 0

    @pytest.mark.asyncio
    async def test_start_while_running_returns_same_task(self, running_simulator):
        """A second start() does not spawn another loop"""
        ticker = FrameTicker(running_simulator, fps=1000, max_frames=3)

        first = ticker.start()
        second = ticker.start()
        await ticker.wait()

        assert first is second
        assert ticker.frames == 3
