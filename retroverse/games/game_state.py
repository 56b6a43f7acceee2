"""Common GameState enum for all arcade games.

All games report one of these states. The GameStateMachine owns the
transitions between them; games only signal the loss condition.
"""
from enum import Enum


class GameState(Enum):
    """Standard game states used by the arcade engine.

    States:
        WAITING: Entities initialized, waiting for the player to start
        PLAYING: Active gameplay; the only state in which intents move entities
        PAUSED: Simulation suspended, overlays still rendered
        GAME_OVER: Session ended; only reset is accepted
    """
    WAITING = "waiting"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
