"""
GameLoopScheduler - fixed-timestep driver for the simulations.

The scheduler holds ``last_tick`` and asks an interval provider for the
current step length, so the cadence can follow difficulty (Snake speeds
up as it eats). Time comes from an injected clock: tests pass a fake,
the desktop launcher uses time.monotonic.

Each tick simulates at most once, then always renders. While the game
is not playing the scheduler keeps rendering overlays but never
simulates, and last_tick follows the clock so resuming does not burst.
"""
import asyncio
import time
from typing import Callable, Optional

from retroverse.logging import get_logger

log = get_logger('scheduler')

StepFn = Callable[[float], None]
RenderFn = Callable[[], None]


class GameLoopScheduler:
    """Fixed-interval simulation scheduler.

    Args:
        step: Called with the interval (seconds) when a simulation step is due
        render: Called after every tick, simulated or not
        interval_provider: Returns the current step interval in seconds
        is_active: Returns True while simulation is allowed (state == playing)
        clock: Monotonic time source in seconds
        max_catch_up: Intervals of debt after which last_tick is re-anchored to
            now instead of paying the debt back one step per tick. A gap this
            long between two tick() calls is logged as a host stall
    """

    def __init__(
        self,
        step: StepFn,
        render: RenderFn,
        interval_provider: Callable[[], float],
        is_active: Callable[[], bool],
        clock: Callable[[], float] = time.monotonic,
        max_catch_up: int = 5,
    ):
        if max_catch_up < 1:
            raise ValueError(f"max_catch_up must be >= 1, got {max_catch_up}")
        self._step = step
        self._render = render
        self._interval_provider = interval_provider
        self._is_active = is_active
        self._clock = clock
        self._max_catch_up = max_catch_up

        self._running = False
        self._last_tick = 0.0
        self._last_now = 0.0
        self.ticks_simulated = 0
        self.frames_rendered = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def last_tick(self) -> float:
        return self._last_tick

    def start(self, now: Optional[float] = None) -> None:
        """Begin scheduling; last_tick is anchored at ``now``."""
        self._last_tick = self._clock() if now is None else now
        self._last_now = self._last_tick
        self._running = True
        log.debug(f"Started at t={self._last_tick:.3f}")

    def stop(self) -> None:
        """Stop scheduling. Safe to call any number of times."""
        if self._running:
            log.debug(f"Stopped after {self.ticks_simulated} steps, {self.frames_rendered} frames")
        self._running = False

    def tick(self, now: Optional[float] = None) -> bool:
        """Advance the loop to ``now``.

        Returns:
            True if a simulation step ran during this tick
        """
        if not self._running:
            return False
        if now is None:
            now = self._clock()

        gap = now - self._last_now
        self._last_now = now

        simulated = False
        if self._is_active():
            interval = self._interval_provider()
            elapsed = now - self._last_tick
            if elapsed >= interval:
                simulated = True
                if gap >= interval * self._max_catch_up:
                    log.warning(f"Host stalled {gap:.3f}s (interval {interval:.3f}s), re-anchoring")
                    self._last_tick = now
                elif elapsed >= interval * self._max_catch_up:
                    # Frames slower than the step rate; drop the backlog
                    self._last_tick = now
                else:
                    self._last_tick += interval
                try:
                    self._step(interval)
                    self.ticks_simulated += 1
                except Exception:
                    log.exception("Simulation step failed")
        else:
            self._last_tick = now

        try:
            self._render()
            self.frames_rendered += 1
        except Exception:
            log.exception("Render failed")
        return simulated

    def run(
        self,
        poll_host: Callable[[], bool],
        frame_wait: Callable[[], None],
    ) -> None:
        """Blocking loop for desktop hosts.

        Args:
            poll_host: Processes host events; returns False to quit
            frame_wait: Sleeps or ticks a frame clock between iterations
        """
        if not self._running:
            self.start()
        while self._running:
            if not poll_host():
                break
            self.tick()
            frame_wait()
        self.stop()

    async def run_async(
        self,
        poll_host: Callable[[], bool],
        frame_wait: Optional[Callable[[], None]] = None,
    ) -> None:
        """Cooperative loop that yields to the asyncio event loop every frame."""
        if not self._running:
            self.start()
        while self._running:
            if not poll_host():
                break
            self.tick()
            if frame_wait is not None:
                frame_wait()
            # Must yield every frame or browser hosts freeze
            await asyncio.sleep(0)
        self.stop()
