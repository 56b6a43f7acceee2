"""
GameHost - wires a game to input, scheduler and render surface.

Control flow per tick:
    input sources -> IntentFrame -> game.handle_input (state machine gate)
    -> scheduler.tick -> game.step when due -> render surface draws game.frame()
"""
import time
from typing import Callable, Optional

from retroverse.games.base_game import BaseGame
from retroverse.games.input.input_manager import InputManager
from retroverse.games.render import RenderSurface
from retroverse.games.scheduler import GameLoopScheduler
from retroverse.logging import get_logger

log = get_logger('host')


class GameHost:
    """Drives one game session.

    Args:
        game: Game to run
        input_manager: Source of per-tick intent frames
        surface: Render surface receiving one draw list per tick
        clock: Monotonic time source (seconds)
        max_catch_up: Passed to the scheduler
    """

    def __init__(
        self,
        game: BaseGame,
        input_manager: InputManager,
        surface: RenderSurface,
        clock: Callable[[], float] = time.monotonic,
        max_catch_up: int = 5,
    ):
        self.game = game
        self.input = input_manager
        self.surface = surface
        self.scheduler = GameLoopScheduler(
            step=game.step,
            render=self._render,
            interval_provider=lambda: game.interval,
            is_active=lambda: game.machine.allows_simulation,
            clock=clock,
            max_catch_up=max_catch_up,
        )

    def _render(self) -> None:
        self.game.render(self.surface)

    def start(self, now: Optional[float] = None) -> None:
        log.info(f"Starting {self.game.NAME}")
        self.scheduler.start(now)

    def sample_input(self) -> None:
        """Hand this tick's intents to the game."""
        self.game.handle_input(self.input.sample())

    def tick(self, now: Optional[float] = None) -> bool:
        """Sample input, then let the scheduler step and render."""
        self.sample_input()
        return self.scheduler.tick(now)

    def run(self, poll_host: Callable[[], bool], frame_wait: Callable[[], None]) -> None:
        """Blocking loop; ``poll_host`` returns False to quit."""
        def poll() -> bool:
            if not poll_host():
                return False
            self.sample_input()
            return True

        try:
            self.scheduler.run(poll, frame_wait)
        finally:
            self.shutdown()

    async def run_async(self, poll_host: Callable[[], bool],
                        frame_wait: Optional[Callable[[], None]] = None) -> None:
        """Cooperative variant of run() for asyncio hosts."""
        def poll() -> bool:
            if not poll_host():
                return False
            self.sample_input()
            return True

        try:
            await self.scheduler.run_async(poll, frame_wait)
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        """Stop scheduling, drop pending input and persist the high score."""
        self.scheduler.stop()
        self.input.clear_events()
        self.game.shutdown()
