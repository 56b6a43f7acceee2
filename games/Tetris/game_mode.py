"""Tetris - stack falling tetrominoes and clear full lines.

Features:
- Wall kicks on rotation, soft and hard drop, hold once per piece
- Next-piece preview and ghost piece
- Faster gravity and score multipliers as the level rises; combo bonus
  for consecutive clears
"""
from typing import Any, Dict, List, Tuple

from models import Color
from models.render import DrawList, RectPrimitive, TextPrimitive
from retroverse.games import BaseGame
from retroverse.games.input.intent import IntentFrame

from . import config
from .config import TetrisRules
from .game import simulation
from .game.entities import Piece, Shape
from .game.simulation import TetrisState

PREVIEW_CELLS = 6


class TetrisMode(BaseGame[TetrisState]):
    """Tetris game mode."""

    # Game metadata
    NAME = "Tetris"
    GAME_ID = "tetris"
    DESCRIPTION = "Rotate and drop the blocks. Clear lines before the stack reaches the top."
    VERSION = "1.0.0"
    AUTHOR = "RetroVerse Team"

    ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--base-drop-ms',
            'type': float,
            'default': config.BASE_DROP_MS,
            'help': 'Gravity interval at level 1 in milliseconds'
        },
    ]

    def __init__(self, base_drop_ms: float = config.BASE_DROP_MS, **kwargs):
        self._rules = TetrisRules(base_drop_ms=base_drop_ms)
        self._block = config.BLOCK_SIZE
        self._palette = [Color.from_hex(value) for value in config.PIECE_COLORS]
        self._colors = {
            'grid': Color.from_hex(config.GRID_COLOR),
            'panel': Color.from_hex(config.PANEL_COLOR),
            'text': Color.from_hex(config.TEXT_COLOR),
            'combo': Color.from_hex(config.COMBO_COLOR),
            'highlight': Color(r=255, g=255, b=255, a=76),
        }
        super().__init__(**kwargs)

    @property
    def rules(self) -> TetrisRules:
        return self._rules

    @property
    def screen_size(self) -> Tuple[int, int]:
        return (self._rules.cols * self._block + config.SIDE_PANEL_WIDTH,
                self._rules.rows * self._block)

    def create_state(self, seed: int, high_score: int) -> TetrisState:
        return simulation.create_state(seed, high_score, self._rules)

    def simulate(self, state: TetrisState, frame: IntentFrame, dt: float) -> TetrisState:
        return simulation.simulate(state, frame, dt)

    def tick_interval(self, state: TetrisState) -> float:
        return 1.0 / config.TICK_RATE

    # =========================================================================
    # Drawing
    # =========================================================================

    def _block_at(self, x: float, y: float, value: int) -> List[RectPrimitive]:
        b = self._block
        return [
            RectPrimitive(x=x, y=y, width=b, height=b, color=self._palette[value]),
            RectPrimitive(x=x, y=y, width=b, height=b / 4, color=self._colors['highlight']),
            RectPrimitive(x=x, y=y, width=b, height=b, color=self._colors['panel'], filled=False),
        ]

    def _piece_blocks(self, piece: Piece) -> DrawList:
        primitives: DrawList = []
        for x, y in piece.cells():
            primitives.extend(self._block_at(x * self._block, y * self._block, piece.color))
        return primitives

    def _ghost_blocks(self, state: TetrisState) -> DrawList:
        ghost = state.ghost
        color = self._palette[ghost.color]
        return [
            RectPrimitive(x=x * self._block, y=y * self._block, width=self._block,
                          height=self._block, color=color, filled=False, line_width=2)
            for x, y in ghost.cells()
        ]

    def _preview(self, shape: Shape, label: str, top: float) -> DrawList:
        """Boxed preview of a shape in the side panel."""
        b = self._block
        left = self._rules.cols * b + 10
        box = PREVIEW_CELLS * b
        primitives: DrawList = [
            RectPrimitive(x=left, y=top, width=box, height=box, color=self._colors['panel'],
                          filled=False, line_width=2),
            TextPrimitive(text=label, x=left + box / 2, y=top + 12, color=self._colors['text'],
                          align='center'),
        ]
        offset_x = (PREVIEW_CELLS - len(shape[0])) / 2
        offset_y = (PREVIEW_CELLS - len(shape)) / 2
        for row_index, row in enumerate(shape):
            for col_index, value in enumerate(row):
                if value:
                    primitives.extend(self._block_at(left + (col_index + offset_x) * b,
                                                     top + (row_index + offset_y) * b, value))
        return primitives

    def draw(self, state: TetrisState) -> DrawList:
        b = self._block
        cols, rows = self._rules.cols, self._rules.rows
        board_width = cols * b
        primitives: DrawList = []

        for x in range(cols + 1):
            primitives.append(RectPrimitive(x=x * b, y=0, width=1, height=rows * b,
                                            color=self._colors['grid']))
        for y in range(rows + 1):
            primitives.append(RectPrimitive(x=0, y=y * b, width=board_width, height=1,
                                            color=self._colors['grid']))

        for y, row in enumerate(state.board):
            for x, value in enumerate(row):
                if value:
                    primitives.extend(self._block_at(x * b, y * b, value))

        if not state.over:
            primitives.extend(self._ghost_blocks(state))
        primitives.extend(self._piece_blocks(state.piece))

        # Side panel
        panel_x = board_width + 10
        primitives.extend(self._preview(state.next_shape, "NEXT", 10))
        text = self._colors['text']
        high = max(state.score.high_score, self.high_score)
        for index, line in enumerate((f"SCORE: {state.score.score}",
                                      f"LEVEL: {state.score.level}",
                                      f"LINES: {state.lines}",
                                      f"HIGH: {high}")):
            primitives.append(TextPrimitive(text=line, x=panel_x, y=150 + index * 22, color=text))
        if state.score.combo > 1:
            primitives.append(TextPrimitive(text=f"COMBO x{state.score.combo}", x=panel_x, y=240,
                                            color=self._colors['combo']))
        if state.hold_shape is not None:
            primitives.extend(self._preview(state.hold_shape, "HOLD", 260))
        return primitives
