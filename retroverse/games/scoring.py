"""
Score keeping shared by all games.

ScoreKeeper follows an immutable state pattern: every operation returns
a new keeper wrapping a new ScoreState, so simulations can thread it
through a pure step function. Only commit_high_score() touches the
outside world, through a PersistencePort.

Examples:
    >>> keeper = ScoreKeeper()
    >>> keeper.add_points(10).record_combo().state.score
    10
    >>> keeper.state.score  # original unchanged
    0
"""
import math
from typing import Optional, TYPE_CHECKING

from models import ScoreState
from retroverse.logging import get_logger

if TYPE_CHECKING:
    from retroverse.games.persistence import PersistencePort

log = get_logger('scoring')


class ScoreKeeper:
    """Immutable score, level and combo bookkeeping.

    Attributes:
        _state: Internal ScoreState model (private, immutable)
    """

    def __init__(self, state: Optional[ScoreState] = None):
        self._state = state if state is not None else ScoreState()

    @property
    def state(self) -> ScoreState:
        return self._state

    def add_points(self, points: int) -> 'ScoreKeeper':
        """Return a keeper with ``points`` added to the score.

        Raises:
            ValueError: If points is negative
        """
        if points < 0:
            raise ValueError(f"Points must be non-negative, got {points}")
        return ScoreKeeper(self._state.model_copy(update={'score': self._state.score + points}))

    def record_combo(self) -> 'ScoreKeeper':
        """Extend the combo streak by one."""
        return ScoreKeeper(self._state.model_copy(update={'combo': self._state.combo + 1}))

    def reset_combo(self) -> 'ScoreKeeper':
        if self._state.combo == 0:
            return self
        return ScoreKeeper(self._state.model_copy(update={'combo': 0}))

    def raise_level(self, level: int) -> 'ScoreKeeper':
        """Move to ``level`` if it is higher; levels never decrease."""
        if level <= self._state.level:
            return self
        return ScoreKeeper(self._state.model_copy(update={'level': level}))

    def next_level(self) -> 'ScoreKeeper':
        return self.raise_level(self._state.level + 1)

    def commit_high_score(self, store: 'PersistencePort', game_id: str) -> 'ScoreKeeper':
        """Persist the session score if it beats the stored best.

        The store is only written when the score is strictly higher.
        Storage failures are logged and the in-memory high score is still
        updated so the HUD stays consistent.

        Args:
            store: High score persistence port
            game_id: Key the score is stored under

        Returns:
            Keeper whose high_score reflects the best known score
        """
        if not self._state.is_new_high_score:
            return self
        score = self._state.score
        try:
            store.set_high_score(game_id, score)
            log.info(f"New high score for {game_id}: {score}")
        except Exception:
            log.exception(f"Failed to persist high score for {game_id}")
        return ScoreKeeper(self._state.model_copy(update={'high_score': score}))

    @classmethod
    def load(cls, store: 'PersistencePort', game_id: str) -> 'ScoreKeeper':
        """Create a fresh keeper seeded with the stored high score."""
        try:
            stored = store.get_high_score(game_id)
        except Exception:
            log.exception(f"Failed to read high score for {game_id}")
            stored = None
        return cls(ScoreState(high_score=stored or 0))

    def __repr__(self) -> str:
        return f"ScoreKeeper({self._state!r})"


# =============================================================================
# Difficulty intervals
# =============================================================================

def speed_interval(ticks_per_second: float) -> float:
    """Step interval in seconds for a speed expressed in ticks per second."""
    if ticks_per_second <= 0:
        raise ValueError(f"Speed must be positive, got {ticks_per_second}")
    return 1.0 / ticks_per_second


def decaying_interval(base_ms: float, decay: float, level: int, floor_ms: float) -> float:
    """Interval shrinking geometrically with level, in seconds.

    ``max(floor_ms, floor(base_ms * decay ** (level - 1))) / 1000``
    """
    ms = max(floor_ms, math.floor(base_ms * decay ** (level - 1)))
    return ms / 1000.0
