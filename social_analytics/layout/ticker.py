"""
Asyncio frame ticker for headless or embedded hosts.

The simulator never owns a scheduler; this is one host-side way to drive it.
The ticker binds its own cancel to the simulator, so loading a new graph or
clearing the simulator stops the loop immediately.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .simulator import LayoutSimulator, SimulatorState

logger = logging.getLogger(__name__)

FrameCallback = Callable[[dict[str, tuple[float, float]]], None]


class FrameTicker:
    """Calls simulator.step() at a fixed frame rate on the running event loop"""

    def __init__(
        self,
        simulator: LayoutSimulator,
        fps: float = 60.0,
        on_frame: FrameCallback | None = None,
        max_frames: int | None = None,
    ):
        """Initialize the ticker.

        Args:
            simulator: Simulator to drive
            fps: Target frames per second
            on_frame: Called with the positions after every step
            max_frames: Stop after this many frames (None runs until cancelled)
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.simulator = simulator
        self.interval = 1.0 / fps
        self.on_frame = on_frame
        self.max_frames = max_frames
        self.frames = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task[None]:
        """Start ticking; must be called from within a running event loop."""
        if self._task is not None and not self._task.done():
            return self._task
        self._task = asyncio.get_running_loop().create_task(self._run())
        self.simulator.bind_schedule(self.cancel)
        return self._task

    def cancel(self) -> None:
        """Stop the loop; safe to call more than once."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug(f"Frame ticker cancelled after {self.frames} frames")

    async def _run(self) -> None:
        while self.simulator.state is SimulatorState.RUNNING:
            if self.max_frames is not None and self.frames >= self.max_frames:
                break
            positions = self.simulator.step()
            self.frames += 1
            if self.on_frame is not None:
                self.on_frame(positions)
            await asyncio.sleep(self.interval)

    async def wait(self) -> None:
        """Wait for the loop to finish, treating cancellation as a normal stop."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            # Only swallow our own cancellation, not the waiter's
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
