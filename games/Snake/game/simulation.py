"""Pure Snake simulation.

simulate(state, frame, dt) never mutates its input and is deterministic
for a given state: randomness comes from ``state.seed``.
"""
import random
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from models import ScoreState
from retroverse.games.audio import Tone, Waveform
from retroverse.games.collision import Cell, in_bounds
from retroverse.games.input.intent import Intent, IntentFrame
from retroverse.games.scoring import ScoreKeeper, speed_interval

from games.Snake.config import SnakeRules
from games.Snake.game.entities import DOWN, LEFT, RIGHT, UP, Direction, SnakeBody, is_reverse

INTENT_DIRECTIONS = {
    Intent.UP: UP,
    Intent.DOWN: DOWN,
    Intent.LEFT: LEFT,
    Intent.RIGHT: RIGHT,
}

EAT_TONE = Tone(600, 0.2, Waveform.SINE)
GAME_OVER_TONE = Tone(150, 1.0, Waveform.SQUARE)


@dataclass(frozen=True)
class SnakeState:
    """Complete Snake session state.

    Attributes:
        body: Snake cells, head first
        food: Cell holding the food (None once the grid is full)
        direction: Direction applied on the last step (None before start)
        next_direction: Queued direction for the next step
        speed: Steps per second
        score: Score/level/combo state
        over: True once the snake died
        seed: Seed for the next step's random choices
        sounds: Tones reported by the step that produced this state
        rules: Grid and speed constants
    """
    body: SnakeBody
    food: Optional[Cell]
    direction: Optional[Direction] = None
    next_direction: Optional[Direction] = None
    speed: int = 10
    score: ScoreState = field(default_factory=ScoreState)
    over: bool = False
    seed: int = 0
    sounds: Tuple[Tone, ...] = ()
    rules: SnakeRules = field(default_factory=SnakeRules)

    @property
    def interval(self) -> float:
        return speed_interval(self.speed)


def place_food(rng: random.Random, body: SnakeBody, rules: SnakeRules) -> Optional[Cell]:
    """Pick a uniformly random free cell.

    Draws random cells until one is free; after a bounded number of
    misses it chooses directly from the list of free cells. Returns None
    if the body fills the grid.
    """
    attempts = rules.grid_width * rules.grid_height
    for _ in range(attempts):
        cell = (rng.randrange(rules.grid_width), rng.randrange(rules.grid_height))
        if not body.occupies(cell):
            return cell
    free = [(x, y) for y in range(rules.grid_height) for x in range(rules.grid_width)
            if not body.occupies((x, y))]
    if not free:
        return None
    return rng.choice(free)


def create_state(seed: int, high_score: int = 0, rules: Optional[SnakeRules] = None) -> SnakeState:
    """Initial state: one-cell snake in the start cell, food elsewhere."""
    rules = rules or SnakeRules()
    rng = random.Random(seed)
    body = SnakeBody(cells=((rules.start_x, rules.start_y),))
    food = place_food(rng, body, rules)
    return SnakeState(
        body=body,
        food=food,
        speed=rules.base_speed,
        score=ScoreState(high_score=high_score),
        seed=rng.randrange(2 ** 31),
        rules=rules,
    )


def start(state: SnakeState) -> SnakeState:
    """Begin moving right when play starts."""
    if state.direction is not None:
        return state
    return replace(state, direction=RIGHT, next_direction=RIGHT)


def queue_direction(current: Optional[Direction], queued: Optional[Direction],
                    requested: Direction) -> Optional[Direction]:
    """Apply one direction request.

    A request that would reverse the snake into itself is rejected and
    the queued direction is kept. Otherwise the request replaces it.
    """
    if is_reverse(current, requested):
        return queued
    return requested


def speed_for_score(score: int, rules: SnakeRules) -> int:
    return min(rules.base_speed + score // rules.points_per_speedup, rules.max_speed)


def simulate(state: SnakeState, frame: IntentFrame, dt: float) -> SnakeState:
    """Advance the snake by one cell.

    Args:
        state: Current state
        frame: Intents since the previous step; the last valid direction wins
        dt: Step length in seconds (unused, the grid moves one cell per step)

    Returns:
        New state
    """
    if state.over:
        return replace(state, sounds=())

    rules = state.rules
    next_direction = state.next_direction
    for intent in frame.pressed:
        requested = INTENT_DIRECTIONS.get(intent)
        if requested is not None:
            next_direction = queue_direction(state.direction, next_direction, requested)

    if next_direction is None:
        return replace(state, next_direction=None, sounds=())

    rng = random.Random(state.seed)
    new_head = state.body.next_head(next_direction)
    eats = new_head == state.food
    body = state.body.advance(next_direction, grow=eats)

    if not in_bounds(new_head, rules.grid_width, rules.grid_height) or body.hits_itself():
        return replace(
            state,
            body=body,
            direction=next_direction,
            next_direction=next_direction,
            over=True,
            seed=rng.randrange(2 ** 31),
            sounds=(GAME_OVER_TONE,),
        )

    keeper = ScoreKeeper(state.score)
    food = state.food
    speed = state.speed
    sounds: Tuple[Tone, ...] = ()
    if eats:
        keeper = keeper.add_points(1)
        speed = speed_for_score(keeper.state.score, rules)
        keeper = keeper.raise_level(speed - rules.base_speed + 1)
        food = place_food(rng, body, rules)
        sounds = (EAT_TONE,)

    return replace(
        state,
        body=body,
        food=food,
        direction=next_direction,
        next_direction=next_direction,
        speed=speed,
        score=keeper.state,
        over=food is None,
        seed=rng.randrange(2 ** 31),
        sounds=sounds,
    )
