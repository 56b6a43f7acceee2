"""Pure Tetris simulation.

The host steps Tetris at a fixed input cadence (60 Hz). Player moves
apply immediately; gravity accumulates ``dt`` and drops the piece one
row whenever the level's drop interval has elapsed. A piece locks when
gravity cannot move it or on a hard drop.
"""
import math
import random
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from models import ScoreState
from retroverse.games.audio import Tone, Waveform
from retroverse.games.input.intent import Intent, IntentFrame
from retroverse.games.scoring import ScoreKeeper, decaying_interval

from games.Tetris import config
from games.Tetris.config import TetrisRules
from .entities import (
    WALL_KICKS, Board, Piece, Shape, clear_lines, collides, drop_distance,
    empty_board, merge, random_shape,
)

ROTATE_TONE = Tone(400, 0.1, Waveform.SINE)
MOVE_TONE = Tone(200, 0.05, Waveform.SINE)
HARD_DROP_TONE = Tone(600, 0.2, Waveform.SQUARE)
HOLD_TONE = Tone(350, 0.1, Waveform.SINE)
LOCK_TONE = Tone(200, 0.2, Waveform.TRIANGLE)
GAME_OVER_TONE = Tone(150, 1.5, Waveform.SAWTOOTH)


def line_clear_tone(lines: int) -> Tone:
    return Tone(300 + 100 * lines, 0.3, Waveform.SAWTOOTH)


def level_up_tone(level: int) -> Tone:
    return Tone(440 + 50 * level, 0.3, Waveform.SQUARE)


@dataclass(frozen=True)
class TetrisState:
    """Complete Tetris session state.

    Attributes:
        board: Locked cells
        piece: Falling piece
        next_shape: Shape spawned after the current piece locks
        hold_shape: Shape set aside with HOLD, if any
        can_hold: False once HOLD was used for the current piece
        lines: Total lines cleared
        drop_timer: Seconds accumulated toward the next gravity step
        score: Score, level and combo (consecutive clearing locks)
        over: True after a top-out
        seed: Seed for the next step's random choices
        sounds: Tones reported by the step that produced this state
        rules: Board and timing constants
    """
    board: Board
    piece: Piece
    next_shape: Shape
    hold_shape: Optional[Shape] = None
    can_hold: bool = True
    lines: int = 0
    drop_timer: float = 0.0
    score: ScoreState = field(default_factory=ScoreState)
    over: bool = False
    seed: int = 0
    sounds: Tuple[Tone, ...] = ()
    rules: TetrisRules = field(default_factory=TetrisRules)

    @property
    def drop_interval(self) -> float:
        """Seconds between gravity steps at the current level."""
        rules = self.rules
        return decaying_interval(rules.base_drop_ms, rules.drop_decay,
                                 self.score.level, rules.min_drop_ms)

    @property
    def ghost(self) -> Piece:
        """Where the falling piece would land."""
        return self.piece.moved(0, drop_distance(self.board, self.piece))


def line_clear_points(lines: int, level: int, combo: int) -> int:
    """Points for clearing ``lines`` rows in one lock.

    ``combo`` counts consecutive clearing locks including this one, so
    the first clear of a streak has no combo bonus.
    """
    if lines < len(config.LINE_POINTS):
        base = config.LINE_POINTS[lines]
    else:
        base = config.BEYOND_TETRIS_POINTS
    multiplier = config.LEVEL_MULTIPLIER ** (level - 1) * (1 + config.COMBO_BONUS * (combo - 1))
    return math.floor(base * multiplier)


def level_for_lines(lines: int, max_level: int = config.MAX_LEVEL) -> int:
    """Level reached after ``lines`` total lines; later levels need more lines."""
    return min(max_level, lines // (10 + lines // 50)) + 1


def create_state(seed: int, high_score: int = 0, rules: Optional[TetrisRules] = None) -> TetrisState:
    rules = rules or TetrisRules()
    rng = random.Random(seed)
    piece = Piece.spawn(random_shape(rng), rules.cols)
    return TetrisState(
        board=empty_board(rules.cols, rules.rows),
        piece=piece,
        next_shape=random_shape(rng),
        score=ScoreState(high_score=high_score),
        seed=rng.randrange(2 ** 31),
        rules=rules,
    )


def _emit(state: TetrisState, *tones: Tone) -> TetrisState:
    return replace(state, sounds=state.sounds + tones)


def move(state: TetrisState, dx: int) -> TetrisState:
    """Shift the piece sideways if the target is free."""
    moved = state.piece.moved(dx, 0)
    if collides(state.board, moved):
        return state
    return _emit(replace(state, piece=moved), MOVE_TONE)


def rotate(state: TetrisState) -> TetrisState:
    """Rotate clockwise, trying each wall kick in order."""
    rotated = state.piece.rotated()
    for dx, dy in WALL_KICKS:
        candidate = rotated.moved(dx, dy)
        if not collides(state.board, candidate):
            return _emit(replace(state, piece=candidate), ROTATE_TONE)
    return state


def soft_drop(state: TetrisState) -> TetrisState:
    moved = state.piece.moved(0, 1)
    if collides(state.board, moved):
        return state
    return replace(state, piece=moved)


def spawn(state: TetrisState, shape: Shape) -> TetrisState:
    """Put a new piece at the top; a blocked spawn tops out."""
    piece = Piece.spawn(shape, state.rules.cols)
    if collides(state.board, piece):
        return _emit(replace(state, piece=piece, over=True), GAME_OVER_TONE)
    return replace(state, piece=piece)


def lock(state: TetrisState, rng: random.Random) -> TetrisState:
    """Write the piece into the board, clear lines, score and spawn the next piece."""
    upcoming = state.next_shape
    board, cleared = clear_lines(merge(state.board, state.piece))
    keeper = ScoreKeeper(state.score)
    lines = state.lines
    sounds: Tuple[Tone, ...] = ()

    if cleared:
        keeper = keeper.record_combo()
        points = line_clear_points(cleared, keeper.state.level, keeper.state.combo)
        keeper = keeper.add_points(points)
        sounds += (line_clear_tone(cleared),)
        lines += cleared
        new_level = level_for_lines(lines, state.rules.max_level)
        if new_level > keeper.state.level:
            keeper = keeper.raise_level(new_level)
            sounds += (level_up_tone(new_level),)
    else:
        keeper = keeper.reset_combo()
        sounds += (LOCK_TONE,)

    state = _emit(replace(
        state,
        board=board,
        lines=lines,
        score=keeper.state,
        can_hold=True,
        drop_timer=0.0,
        next_shape=random_shape(rng),
    ), *sounds)
    return spawn(state, upcoming)


def hard_drop(state: TetrisState, rng: random.Random) -> TetrisState:
    """Drop the piece as far as it goes, score 2 points per row and lock."""
    distance = drop_distance(state.board, state.piece)
    keeper = ScoreKeeper(state.score).add_points(distance * config.HARD_DROP_POINTS_PER_CELL)
    dropped = replace(state, piece=state.piece.moved(0, distance), score=keeper.state)
    return lock(_emit(dropped, HARD_DROP_TONE), rng)


def hold(state: TetrisState, rng: random.Random) -> TetrisState:
    """Swap the falling piece with the held one, once per piece.

    With nothing held yet the next piece comes into play and a new next
    piece is drawn.
    """
    if not state.can_hold:
        return state
    held = state.piece.shape
    if state.hold_shape is None:
        incoming = state.next_shape
        state = replace(state, next_shape=random_shape(rng))
    else:
        incoming = state.hold_shape
    state = _emit(replace(state, hold_shape=held, can_hold=False), HOLD_TONE)
    return spawn(state, incoming)


def apply_gravity(state: TetrisState, dt: float, rng: random.Random) -> TetrisState:
    """Accumulate ``dt`` and drop one row per elapsed drop interval.

    A gravity step that cannot move the piece locks it.
    """
    timer = state.drop_timer + dt
    interval = state.drop_interval
    if timer < interval:
        return replace(state, drop_timer=timer)
    state = replace(state, drop_timer=timer - interval)
    moved = state.piece.moved(0, 1)
    if collides(state.board, moved):
        return lock(state, rng)
    return replace(state, piece=moved)


def simulate(state: TetrisState, frame: IntentFrame, dt: float) -> TetrisState:
    """Advance Tetris by one input tick.

    Args:
        state: Current state
        frame: Intents since the previous tick, applied in order
        dt: Seconds since the previous tick, fed to gravity

    Returns:
        New state
    """
    if state.over:
        return replace(state, sounds=())

    rng = random.Random(state.seed)
    state = replace(state, sounds=())
    locked = False

    for intent in frame.pressed:
        if intent == Intent.LEFT:
            state = move(state, -1)
        elif intent == Intent.RIGHT:
            state = move(state, 1)
        elif intent == Intent.UP:
            state = rotate(state)
        elif intent == Intent.DOWN:
            state = soft_drop(state)
        elif intent == Intent.ACTION:
            state = hard_drop(state, rng)
            locked = True
        elif intent == Intent.HOLD:
            state = hold(state, rng)
        if state.over:
            break

    if not state.over and not locked:
        state = apply_gravity(state, dt, rng)

    return replace(state, seed=rng.randrange(2 ** 31))
