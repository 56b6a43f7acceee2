"""Snake - eat, grow, don't bite yourself.

Features:
- 20x20 grid, one cell per step
- Speeds up by one step per second every 5 points (capped at 20)
- Arrow keys / WASD or swipes
"""
from typing import Any, Dict, List, Optional, Tuple

from models import Color
from models.render import DrawList, RectPrimitive, TextPrimitive
from retroverse.games import BaseGame
from retroverse.games.input.intent import IntentFrame

from . import config
from .config import SnakeRules
from .game import simulation
from .game.simulation import SnakeState


def _color(hex_value: str) -> Color:
    return Color.from_hex(hex_value)


class SnakeMode(BaseGame[SnakeState]):
    """Snake game mode."""

    # Game metadata
    NAME = "Snake"
    GAME_ID = "snake"
    DESCRIPTION = "Guide the snake to the food. Every bite makes it longer and faster."
    VERSION = "1.0.0"
    AUTHOR = "RetroVerse Team"

    ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--grid-width',
            'type': int,
            'default': None,
            'help': f'Grid columns (default {config.GRID_WIDTH})'
        },
        {
            'name': '--grid-height',
            'type': int,
            'default': None,
            'help': f'Grid rows (default {config.GRID_HEIGHT})'
        },
        {
            'name': '--base-speed',
            'type': int,
            'default': None,
            'help': f'Starting steps per second (default {config.BASE_SPEED})'
        },
    ]

    def __init__(
        self,
        grid_width: Optional[int] = None,
        grid_height: Optional[int] = None,
        base_speed: Optional[int] = None,
        **kwargs,
    ):
        width = grid_width or config.GRID_WIDTH
        height = grid_height or config.GRID_HEIGHT
        self._rules = SnakeRules(
            grid_width=width,
            grid_height=height,
            start_x=width // 2,
            start_y=height // 2,
            base_speed=base_speed or config.BASE_SPEED,
            max_speed=max(config.MAX_SPEED, base_speed or config.BASE_SPEED),
        )
        self._cell = config.CELL_SIZE
        self._colors = {
            'snake': _color(config.SNAKE_COLOR),
            'head': _color(config.HEAD_COLOR),
            'eye': _color(config.EYE_COLOR),
            'food': _color(config.FOOD_COLOR),
            'stem': _color(config.STEM_COLOR),
            'text': _color(config.TEXT_COLOR),
        }
        super().__init__(**kwargs)

    @property
    def rules(self) -> SnakeRules:
        return self._rules

    @property
    def screen_size(self) -> Tuple[int, int]:
        return (self._rules.grid_width * self._cell, self._rules.grid_height * self._cell)

    def create_state(self, seed: int, high_score: int) -> SnakeState:
        return simulation.create_state(seed, high_score, self._rules)

    def on_start(self, state: SnakeState) -> SnakeState:
        return simulation.start(state)

    def simulate(self, state: SnakeState, frame: IntentFrame, dt: float) -> SnakeState:
        return simulation.simulate(state, frame, dt)

    def tick_interval(self, state: SnakeState) -> float:
        return state.interval

    def _eyes(self, x: int, y: int, direction) -> List[RectPrimitive]:
        c = self._cell
        dx, dy = direction or (1, 0)
        if dx == 1:
            spots = [(0.7, 0.3), (0.7, 0.7)]
        elif dx == -1:
            spots = [(0.1, 0.3), (0.1, 0.7)]
        elif dy == -1:
            spots = [(0.3, 0.1), (0.7, 0.1)]
        else:
            spots = [(0.3, 0.7), (0.7, 0.7)]
        return [
            RectPrimitive(x=x * c + fx * c, y=y * c + fy * c, width=c * 0.2, height=c * 0.2,
                          color=self._colors['eye'])
            for fx, fy in spots
        ]

    def draw(self, state: SnakeState) -> DrawList:
        c = self._cell
        width, _ = self.screen_size
        primitives: DrawList = []

        if state.food is not None:
            fx, fy = state.food
            primitives.append(RectPrimitive(x=fx * c, y=fy * c, width=c, height=c,
                                            color=self._colors['food']))
            primitives.append(RectPrimitive(x=fx * c + c * 0.4, y=fy * c - c * 0.2,
                                            width=c * 0.2, height=c * 0.3,
                                            color=self._colors['stem']))

        for index, (x, y) in enumerate(state.body.cells):
            color = self._colors['head'] if index == 0 else self._colors['snake']
            primitives.append(RectPrimitive(x=x * c, y=y * c, width=c - 1, height=c - 1, color=color))
        head_x, head_y = state.body.head
        primitives.extend(self._eyes(head_x, head_y, state.direction))

        primitives.append(TextPrimitive(text=f"Score: {state.score.score}", x=10, y=20,
                                        color=self._colors['text']))
        high = max(state.score.high_score, self.high_score)
        primitives.append(TextPrimitive(text=f"High Score: {high}", x=width - 10, y=20,
                                        color=self._colors['text'], align='right'))
        return primitives
