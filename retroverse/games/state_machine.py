"""
GameStateMachine - play/pause/game-over lifecycle shared by every game.

    waiting --start--> playing
    playing --pause_toggle--> paused --pause_toggle--> playing
    playing --loss--> game_over
    game_over --reset--> waiting

Any other (state, intent) pair is a rejected intent: it is ignored and
no error is raised. The loss transition is not an input; games signal it
through lose().
"""
from typing import Callable, Dict, List, Tuple

from retroverse.games.game_state import GameState
from retroverse.games.input.intent import Intent
from retroverse.logging import get_logger

log = get_logger('state_machine')

TransitionListener = Callable[[GameState, GameState], None]

TRANSITIONS: Dict[Tuple[GameState, Intent], GameState] = {
    (GameState.WAITING, Intent.START): GameState.PLAYING,
    (GameState.PLAYING, Intent.PAUSE_TOGGLE): GameState.PAUSED,
    (GameState.PAUSED, Intent.PAUSE_TOGGLE): GameState.PLAYING,
    (GameState.GAME_OVER, Intent.RESET): GameState.WAITING,
}


class GameStateMachine:
    """Explicit lifecycle state with listener notification.

    Listeners are called as ``listener(old_state, new_state)`` after every
    accepted transition. A failing listener is logged and does not stop
    the transition or the remaining listeners.

    Examples:
        >>> machine = GameStateMachine()
        >>> machine.handle(Intent.START)
        True
        >>> machine.state
        <GameState.PLAYING: 'playing'>
        >>> machine.handle(Intent.RESET)  # rejected while playing
        False
    """

    def __init__(self, initial: GameState = GameState.WAITING):
        self._state = initial
        self._listeners: List[TransitionListener] = []

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def allows_simulation(self) -> bool:
        """True only while playing; intents move entities only then."""
        return self._state == GameState.PLAYING

    def add_listener(self, listener: TransitionListener) -> None:
        self._listeners.append(listener)

    def handle(self, intent: Intent) -> bool:
        """Apply a transition intent.

        Args:
            intent: Intent received from the input source

        Returns:
            True if the intent caused a transition, False if rejected
        """
        new_state = TRANSITIONS.get((self._state, intent))
        if new_state is None:
            log.trace(f"Rejected {intent.value} in {self._state.value}")
            return False
        self._transition(new_state)
        return True

    def lose(self) -> bool:
        """Signal the game-specific loss condition.

        Only meaningful while playing; ignored in every other state.

        Returns:
            True if the machine moved to GAME_OVER
        """
        if self._state != GameState.PLAYING:
            return False
        self._transition(GameState.GAME_OVER)
        return True

    def _transition(self, new_state: GameState) -> None:
        old_state = self._state
        self._state = new_state
        log.debug(f"{old_state.value} -> {new_state.value}")
        for listener in list(self._listeners):
            try:
                listener(old_state, new_state)
            except Exception:
                log.exception(f"Transition listener failed on {old_state.value} -> {new_state.value}")
