"""
Shared game framework.

Modules:
- game_state / state_machine: lifecycle states and transitions
- scheduler / host: fixed-tick loop driving a game
- base_game: plugin base class wrapping a pure simulation
- collision, scoring: shared rules helpers
- persistence, audio, render: ports to the outside world
- input: intents and input sources
"""

from retroverse.games.game_state import GameState
from retroverse.games.state_machine import GameStateMachine
from retroverse.games.scheduler import GameLoopScheduler
from retroverse.games.base_game import BaseGame

__all__ = ['GameState', 'GameStateMachine', 'GameLoopScheduler', 'BaseGame']
