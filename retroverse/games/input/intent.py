"""
Intent - normalized player input.

Input sources translate raw keyboard, touch and pointer events into
intents. Once per tick the held set and the queue of edge-triggered
presses are sampled into an immutable IntentFrame.
"""
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from models import Point2D


class Intent(Enum):
    """Discrete player intents shared by all games."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ACTION = "action"
    HOLD = "hold"
    PAUSE_TOGGLE = "pause_toggle"
    START = "start"
    RESET = "reset"


DIRECTIONS = (Intent.UP, Intent.DOWN, Intent.LEFT, Intent.RIGHT)

# Intents that drive the state machine rather than the simulation
TRANSITION_INTENTS = (Intent.START, Intent.PAUSE_TOGGLE, Intent.RESET)


class IntentFrame(BaseModel):
    """Input sampled for a single tick.

    Attributes:
        held: Intents whose key or gesture is currently held down
        pressed: Edge-triggered intents queued since the previous tick,
            in arrival order
        pointer: Latest pointer position in surface pixels, if any

    Examples:
        >>> frame = IntentFrame(pressed=(Intent.LEFT, Intent.UP))
        >>> frame.was_pressed(Intent.UP)
        True
        >>> frame.is_held(Intent.UP)
        False
    """
    held: FrozenSet[Intent] = Field(default_factory=frozenset)
    pressed: Tuple[Intent, ...] = ()
    pointer: Optional[Point2D] = None

    model_config = ConfigDict(frozen=True)

    def is_held(self, intent: Intent) -> bool:
        return intent in self.held

    def was_pressed(self, intent: Intent) -> bool:
        return intent in self.pressed

    def is_active(self, intent: Intent) -> bool:
        """Held now or pressed since the last tick."""
        return intent in self.held or intent in self.pressed


EMPTY_FRAME = IntentFrame()
