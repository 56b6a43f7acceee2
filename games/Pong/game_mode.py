"""Pong - first to five against the computer.

Features:
- Three AI difficulty profiles (easy, medium, hard)
- Ball angle follows where it meets the paddle; each hit speeds it up
- Keyboard (W/S, arrows) or touch: the paddle follows the finger
"""
from typing import Any, Dict, List, Tuple

from models import Color
from models.render import CirclePrimitive, DrawList, RectPrimitive, TextPrimitive
from retroverse.games import BaseGame, GameState
from retroverse.games.input.intent import IntentFrame

from . import config
from .config import AI_PROFILES, PongRules
from .game import simulation
from .game.simulation import PongState


class PongMode(BaseGame[PongState]):
    """Pong game mode."""

    # Game metadata
    NAME = "Pong"
    GAME_ID = "pong"
    DESCRIPTION = "Classic paddle duel. Angle your returns and outlast the computer."
    VERSION = "1.0.0"
    AUTHOR = "RetroVerse Team"

    ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--difficulty',
            'type': str,
            'default': config.DEFAULT_DIFFICULTY,
            'choices': sorted(AI_PROFILES),
            'help': 'Computer paddle skill'
        },
        {
            'name': '--win-score',
            'type': int,
            'default': config.WIN_SCORE,
            'help': 'Points needed to win the match'
        },
    ]

    def __init__(
        self,
        difficulty: str = config.DEFAULT_DIFFICULTY,
        win_score: int = config.WIN_SCORE,
        **kwargs,
    ):
        self._rules = PongRules(difficulty=difficulty, win_score=win_score)
        self._colors = {
            'paddle': Color.from_hex(config.PADDLE_COLOR),
            'ball': Color.from_hex(config.BALL_COLOR),
            'net': Color.from_hex(config.NET_COLOR),
            'text': Color.from_hex(config.TEXT_COLOR),
        }
        super().__init__(**kwargs)

    @property
    def rules(self) -> PongRules:
        return self._rules

    @property
    def screen_size(self) -> Tuple[int, int]:
        return (int(self._rules.width), int(self._rules.height))

    def create_state(self, seed: int, high_score: int) -> PongState:
        return simulation.create_state(seed, high_score, self._rules)

    def simulate(self, state: PongState, frame: IntentFrame, dt: float) -> PongState:
        return simulation.simulate(state, frame, dt)

    def tick_interval(self, state: PongState) -> float:
        return 1.0 / config.TICK_RATE

    def overlay_text(self, state: PongState) -> List[str]:
        if self.state == GameState.GAME_OVER:
            winner = "YOU WIN!" if state.player_won else "COMPUTER WINS!"
            return ["GAME OVER", winner,
                    f"Final Score: {state.player_points} - {state.computer_points}",
                    "Press R to play again"]
        if self.state == GameState.WAITING:
            return ["PONG", "Press SPACE or tap to start",
                    f"Difficulty: {self._rules.difficulty.upper()}"]
        return super().overlay_text(state)

    def draw(self, state: PongState) -> DrawList:
        width, height = self.screen_size
        primitives: DrawList = []

        # Dashed net
        for y in range(0, height, 20):
            primitives.append(RectPrimitive(x=width / 2 - 1, y=y, width=2, height=10,
                                            color=self._colors['net']))

        for paddle in (state.player, state.computer):
            primitives.append(RectPrimitive(x=paddle.x, y=paddle.y, width=paddle.width,
                                            height=paddle.height, color=self._colors['paddle']))

        primitives.append(CirclePrimitive(x=state.ball.x, y=state.ball.y,
                                          radius=state.ball.radius, color=self._colors['ball']))

        text = self._colors['text']
        primitives.append(TextPrimitive(text=str(state.player_points), x=width / 4, y=60,
                                        color=text, size=48, align='center'))
        primitives.append(TextPrimitive(text=str(state.computer_points), x=3 * width / 4, y=60,
                                        color=text, size=48, align='center'))
        high = max(state.score.high_score, self.high_score)
        primitives.append(TextPrimitive(text=f"High Score: {high}", x=10, y=25, color=text))
        primitives.append(TextPrimitive(text=f"Difficulty: {self._rules.difficulty.upper()}",
                                        x=width - 10, y=25, color=text, align='right'))
        return primitives
