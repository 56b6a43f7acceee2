"""Shared fixtures for framework tests."""
import os
from dataclasses import dataclass, field, replace
from typing import Tuple

import pytest

from models import Color, ScoreState
from models.render import RectPrimitive
from retroverse.games.audio import NullAudio, Tone
from retroverse.games.base_game import BaseGame
from retroverse.games.input.intent import Intent
from retroverse.games.persistence import InMemoryHighScoreStore
from retroverse.games.scoring import ScoreKeeper

# Headless pygame for render and audio tests
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


# =============================================================================
# Minimal game used by framework tests
# =============================================================================

BEEP = Tone(440, 0.1)


@dataclass(frozen=True)
class CounterState:
    ticks: int = 0
    limit: int = 5
    score: ScoreState = field(default_factory=ScoreState)
    over: bool = False
    seed: int = 0
    sounds: Tuple[Tone, ...] = ()


class CounterGame(BaseGame[CounterState]):
    """Scores a point per ACTION press; over after ``limit`` steps."""

    NAME = "Counter"
    GAME_ID = "counter"
    ARGUMENTS = [{'name': '--limit', 'type': int, 'default': 5, 'help': 'Steps per session'}]

    def __init__(self, limit: int = 5, **kwargs):
        self._limit = limit
        super().__init__(**kwargs)

    @property
    def screen_size(self):
        return (100, 80)

    def create_state(self, seed, high_score):
        return CounterState(limit=self._limit, score=ScoreState(high_score=high_score), seed=seed)

    def simulate(self, state, frame, dt):
        if state.over:
            return replace(state, sounds=())
        keeper = ScoreKeeper(state.score)
        sounds = ()
        if frame.was_pressed(Intent.ACTION):
            keeper = keeper.add_points(1)
            sounds = (BEEP,)
        ticks = state.ticks + 1
        return replace(state, ticks=ticks, score=keeper.state, over=ticks >= state.limit, sounds=sounds)

    def draw(self, state):
        return [RectPrimitive(x=state.ticks, y=0, width=1, height=1, color=Color(r=255, g=255, b=255))]

    def tick_interval(self, state):
        return 0.1


@pytest.fixture
def store():
    return InMemoryHighScoreStore()


@pytest.fixture
def audio():
    return NullAudio()


@pytest.fixture
def counter_game(store, audio):
    return CounterGame(seed=3, store=store, audio=audio)
