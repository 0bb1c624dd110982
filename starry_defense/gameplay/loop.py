"""
Frame loop for Starry Defense.
Drives the host's per-frame callback at a fixed rate.
NO UI DEPENDENCIES.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


# Receives a monotonic timestamp in milliseconds since the loop started
FrameCallback = Callable[[float], None]


@dataclass
class FrameStats:
    """Statistics for frame timing."""

    frame_number: int
    timestamp_ms: float
    duration_ms: float


class FrameLoop:
    """
    Calls a frame callback at a fixed frame rate until stopped.

    Only one loop task exists at a time: start() while running is a no-op,
    so restarting a game never stacks a second loop. stop() waits for the
    task to finish, so nothing stays scheduled after it returns.
    """

    def __init__(self, frame_rate: int, on_frame: FrameCallback) -> None:
        if frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive, got {frame_rate}")

        self._frame_interval_ms = 1000.0 / frame_rate
        self._on_frame = on_frame

        self._frame_number = 0
        self._is_running = False
        self._is_paused = False
        self._task: asyncio.Task | None = None
        self._stop_event = asyncio.Event()
        self._started_at = time.perf_counter()

        # Frame statistics
        self._recent_stats: list[FrameStats] = []
        self._max_stats_history = 100

    @property
    def frame_number(self) -> int:
        """Current frame number."""
        return self._frame_number

    @property
    def is_running(self) -> bool:
        """Whether the loop is actively running (not paused)."""
        return self._is_running and not self._is_paused

    @property
    def is_paused(self) -> bool:
        """Whether the loop is paused."""
        return self._is_paused

    @property
    def has_task(self) -> bool:
        """Whether a loop task currently exists."""
        return self._task is not None

    def now_ms(self) -> float:
        """Milliseconds since the loop object was created."""
        return (time.perf_counter() - self._started_at) * 1000

    async def start(self) -> None:
        """Start the frame loop."""
        if self._task is not None:
            return

        self._is_running = True
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Frame loop started ({self._frame_interval_ms:.1f}ms per frame)")

    def request_stop(self) -> None:
        """
        Ask the loop to end after the current frame.
        Safe to call from inside the frame callback.
        """
        self._is_running = False
        self._stop_event.set()

    async def stop(self) -> None:
        """Stop the frame loop and wait for it to finish."""
        if self._task is None:
            return

        self.request_stop()

        try:
            await asyncio.wait_for(self._task, timeout=5.0)
        except asyncio.TimeoutError:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        self._task = None
        logger.info("Frame loop stopped")

    async def wait_closed(self) -> None:
        """Wait until the loop ends on its own (e.g. after request_stop()), then clean up."""
        if self._task is None:
            return
        try:
            await self._task
        finally:
            self._is_running = False
            self._task = None
            logger.info("Frame loop stopped")

    def pause(self) -> None:
        """Pause the frame loop."""
        self._is_paused = True
        logger.info(f"Frame loop paused at frame {self._frame_number}")

    def resume(self) -> None:
        """Resume the frame loop."""
        self._is_paused = False
        logger.info(f"Frame loop resumed at frame {self._frame_number}")

    async def step(self) -> None:
        """Execute a single frame (when paused)."""
        if not self._is_paused:
            return

        self._process_frame()
        logger.info(f"Manual frame step executed: {self._frame_number}")

    async def _run_loop(self) -> None:
        """
        Main frame loop.
        Fail-fast: errors raised by the frame callback end the loop.
        """
        while self._is_running:
            frame_start = time.perf_counter()

            if not self._is_paused:
                # No try/except here - callback errors should surface to the host
                self._process_frame()

            # Calculate sleep time to maintain frame rate
            frame_duration = (time.perf_counter() - frame_start) * 1000
            sleep_time = max(0, (self._frame_interval_ms - frame_duration) / 1000)

            # Wait for either sleep time or stop signal
            try:
                await asyncio.wait_for(
                    self._stop_event.wait(),
                    timeout=sleep_time,
                )
                # Stop event was set
                break
            except asyncio.TimeoutError:
                # Normal frame interval elapsed
                pass

    def _process_frame(self) -> None:
        """Process a single frame."""
        frame_start = time.perf_counter()
        self._frame_number += 1
        timestamp = self.now_ms()

        self._on_frame(timestamp)

        # Record stats
        frame_duration = (time.perf_counter() - frame_start) * 1000
        self._recent_stats.append(FrameStats(
            frame_number=self._frame_number,
            timestamp_ms=timestamp,
            duration_ms=frame_duration,
        ))
        if len(self._recent_stats) > self._max_stats_history:
            self._recent_stats.pop(0)

        if frame_duration > self._frame_interval_ms:
            logger.warning(
                f"Frame {self._frame_number} took {frame_duration:.1f}ms "
                f"(target: {self._frame_interval_ms:.1f}ms)"
            )

    def get_recent_stats(self) -> list[FrameStats]:
        """Get recent frame statistics."""
        return list(self._recent_stats)
