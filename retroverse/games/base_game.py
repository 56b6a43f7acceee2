"""Base class for all arcade games.

All games inherit from BaseGame to get a consistent interface with
dev_game.py and the game registry.

Game metadata (NAME, DESCRIPTION, etc.) and CLI arguments (ARGUMENTS)
are declared as class attributes, making them part of the plugin architecture.

A game is a pure simulation plus a thin host:
- create_state(seed, high_score) builds the initial immutable state
- simulate(state, frame, dt) returns the next state, never mutating its input
- draw(state) turns a state into draw primitives

BaseGame owns everything impure around that core: the state machine,
input buffering between steps, playing the Tones a step reports, and
committing high scores when a session ends.
"""
import random
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from models import Color, ScoreState
from models.render import DrawList, RectPrimitive, TextPrimitive
from retroverse.games.audio import AudioPort, NullAudio, Tone
from retroverse.games.game_state import GameState
from retroverse.games.input.intent import Intent, IntentFrame, TRANSITION_INTENTS
from retroverse.games.persistence import InMemoryHighScoreStore, PersistencePort
from retroverse.games.scoring import ScoreKeeper
from retroverse.games.state_machine import GameStateMachine
from retroverse.logging import emit_record, get_logger

log = get_logger('base_game')

S = TypeVar('S')

OVERLAY_COLOR = Color(r=0, g=0, b=0, a=178)
OVERLAY_TEXT = Color(r=255, g=255, b=255)


class BaseGame(ABC, Generic[S]):
    """Abstract base class for all arcade games.

    Class Attributes (metadata):
        NAME: Display name for the game
        GAME_ID: Key used for high score persistence
        DESCRIPTION: Short description of gameplay
        VERSION: Semantic version string
        AUTHOR: Author/team name
        ARGUMENTS: List of CLI argument definitions for argparse

    Subclasses must implement:
        - create_state(seed, high_score) -> S: Fresh entities for a session
        - simulate(state, frame, dt) -> S: Pure step function
        - draw(state) -> DrawList: Frame primitives for a state
        - tick_interval(state) -> float: Seconds between simulation steps
        - screen_size -> (width, height)

    Optional overrides:
        - on_start(state) -> S: Adjust state when play begins
        - overlay_text(state) -> List[str]: Lines shown over non-playing states

    States must expose ``score`` (ScoreState), ``over`` (bool) and
    ``sounds`` (tuple of Tone emitted by the step that produced them).
    """

    # =========================================================================
    # Game Metadata (override in subclasses)
    # =========================================================================

    NAME: str = "Unnamed Game"
    GAME_ID: str = "unnamed"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    # CLI argument definitions for argparse
    # Each entry is a dict with keys: name, type, default, help, choices (optional), action (optional)
    ARGUMENTS: List[Dict[str, Any]] = []

    _BASE_ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--seed',
            'type': int,
            'default': None,
            'help': 'Random seed (same seed, same session)'
        },
    ]

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """Get all CLI arguments for this game (game-specific + base).

        Game-specific arguments come first, then base arguments.
        Duplicates by name are removed (game-specific takes precedence).
        """
        seen_names = set()
        result = []
        for arg in list(cls.ARGUMENTS) + list(cls._BASE_ARGUMENTS):
            name = arg.get('name', '')
            if name and name not in seen_names:
                seen_names.add(name)
                result.append(arg)
        return result

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Get game metadata as a dictionary."""
        return {
            'name': cls.NAME,
            'game_id': cls.GAME_ID,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'arguments': cls.get_arguments(),
        }

    # =========================================================================
    # Instance Initialization
    # =========================================================================

    def __init__(
        self,
        seed: Optional[int] = None,
        store: Optional[PersistencePort] = None,
        audio: Optional[AudioPort] = None,
        **kwargs,
    ):
        """Initialize base game.

        Args:
            seed: Fixed seed for every session; None picks a new one per session
            store: High score persistence (in-memory if omitted)
            audio: Tone playback (silent if omitted)
        """
        if kwargs:
            log.debug(f"{self.NAME}: ignoring arguments {sorted(kwargs)}")
        self._fixed_seed = seed
        self._store = store if store is not None else InMemoryHighScoreStore()
        self._audio = audio if audio is not None else NullAudio()
        self._machine = GameStateMachine()
        self._machine.add_listener(self._on_transition)

        self._held: frozenset = frozenset()
        self._pending: List[Intent] = []
        self._pointer = None

        self._high_score = ScoreKeeper.load(self._store, self.GAME_ID).state.high_score
        self._session_seed = self._next_seed()
        self._state: S = self.create_state(self._session_seed, self._high_score)

    def _next_seed(self) -> int:
        if self._fixed_seed is not None:
            return self._fixed_seed
        return random.randrange(2 ** 31)

    # =========================================================================
    # Simulation contract
    # =========================================================================

    @abstractmethod
    def create_state(self, seed: int, high_score: int) -> S:
        """Initial entities for a new session."""
        pass

    @abstractmethod
    def simulate(self, state: S, frame: IntentFrame, dt: float) -> S:
        """Advance ``state`` by one step. Must be pure."""
        pass

    @abstractmethod
    def draw(self, state: S) -> DrawList:
        """Draw primitives for ``state`` (without state overlays)."""
        pass

    @abstractmethod
    def tick_interval(self, state: S) -> float:
        """Seconds between simulation steps for ``state``."""
        pass

    @property
    @abstractmethod
    def screen_size(self) -> Tuple[int, int]:
        pass

    def on_start(self, state: S) -> S:
        return state

    # =========================================================================
    # Standard interface
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self._machine.state

    @property
    def machine(self) -> GameStateMachine:
        return self._machine

    @property
    def sim_state(self) -> S:
        """Current immutable simulation state."""
        return self._state

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def interval(self) -> float:
        return self.tick_interval(self._state)

    def get_score(self) -> int:
        return self._score_state().score

    def _score_state(self) -> ScoreState:
        return self._state.score

    def handle_input(self, frame: IntentFrame) -> None:
        """Buffer one sampled frame until the next simulation step.

        Transition intents go to the state machine immediately. Other
        presses are kept only while playing; in any other state they are
        rejected intents and dropped.
        """
        for intent in frame.pressed:
            if intent in TRANSITION_INTENTS:
                self._machine.handle(intent)
            elif self._machine.allows_simulation:
                self._pending.append(intent)
        self._held = frozenset(i for i in frame.held if i not in TRANSITION_INTENTS)
        if frame.pointer is not None:
            self._pointer = frame.pointer

    def step(self, dt: float) -> None:
        """Run one simulation step with the buffered input."""
        if not self._machine.allows_simulation:
            return
        frame = IntentFrame(held=self._held, pressed=tuple(self._pending), pointer=self._pointer)
        self._state = self.simulate(self._state, frame, dt)
        # Presses survive a step that raises
        self._pending.clear()
        self._play(self._state.sounds)
        if self._state.over:
            self._machine.lose()

    def _play(self, tones: Tuple[Tone, ...]) -> None:
        for tone in tones:
            try:
                self._audio.play(tone)
            except Exception:
                log.exception(f"Audio port failed on {tone}")

    def frame(self) -> DrawList:
        """Complete draw list for the current tick, overlays included."""
        primitives = list(self.draw(self._state))
        lines = self.overlay_text(self._state)
        if lines:
            width, height = self.screen_size
            primitives.append(RectPrimitive(x=0, y=0, width=width, height=height, color=OVERLAY_COLOR))
            top = height / 2 - (len(lines) - 1) * 18
            for index, line in enumerate(lines):
                primitives.append(TextPrimitive(
                    text=line, x=width / 2, y=top + index * 36,
                    color=OVERLAY_TEXT, size=32 if index == 0 else 24, align='center',
                ))
        return primitives

    def render(self, surface) -> None:
        """Draw the current frame on a RenderSurface."""
        surface.draw(self.frame())

    def overlay_text(self, state: S) -> List[str]:
        """Lines drawn over the field outside of play."""
        current = self._machine.state
        if current == GameState.WAITING:
            return [self.NAME.upper(), "Press SPACE or tap to start"]
        if current == GameState.PAUSED:
            return ["PAUSED", "Press P to resume"]
        if current == GameState.GAME_OVER:
            return ["GAME OVER", f"Score: {self.get_score()}", "Press R to play again"]
        return []

    def reset(self) -> None:
        """Re-create entities for a new session. High score is kept."""
        self._pending.clear()
        self._held = frozenset()
        self._session_seed = self._next_seed()
        self._state = self.create_state(self._session_seed, self._high_score)

    def shutdown(self) -> None:
        """Persist a pending high score before the host exits."""
        self._commit_high_score()

    # =========================================================================
    # State machine hooks
    # =========================================================================

    def _commit_high_score(self) -> None:
        keeper = ScoreKeeper(self._score_state()).commit_high_score(self._store, self.GAME_ID)
        self._high_score = max(self._high_score, keeper.state.high_score)

    def _on_transition(self, old: GameState, new: GameState) -> None:
        if old == GameState.WAITING and new == GameState.PLAYING:
            self._state = self.on_start(self._state)
        elif new == GameState.GAME_OVER:
            score = self._score_state()
            self._commit_high_score()
            log.info(f"{self.NAME} over: score={score.score} level={score.level}")
            emit_record('session', {
                'game': self.GAME_ID,
                'seed': self._session_seed,
                'score': score.score,
                'level': score.level,
                'high_score': self._high_score,
            })
        elif new == GameState.WAITING:
            self.reset()
