"""
Base Input Source - Abstract interface for input backends.

This is a shared module used by all games.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Set

import pygame

from models import Point2D
from retroverse.games.input.intent import Intent, IntentFrame


class InputSource(ABC):
    """Abstract base class for input sources.

    Sources translate raw pygame events into intents. Held intents are
    kept in a set; edge-triggered presses are queued in arrival order
    until the next poll_frame().
    """

    def __init__(self):
        self._held: Set[Intent] = set()
        self._pressed: List[Intent] = []
        self._pointer: Optional[Point2D] = None

    @abstractmethod
    def handle_event(self, event) -> bool:
        """Translate one pygame event.

        Returns:
            True if the event was consumed by this source
        """
        pass

    def update(self, dt: float) -> None:
        """Drain the pygame queue, re-posting events this source ignores.

        Args:
            dt: Delta time in seconds since last update.
        """
        for event in pygame.event.get():
            if not self.handle_event(event):
                # Re-post for the main loop (QUIT, window events)
                pygame.event.post(event)

    def poll_frame(self) -> IntentFrame:
        """Sample held intents and drain the pressed queue."""
        frame = IntentFrame(
            held=frozenset(self._held),
            pressed=tuple(self._pressed),
            pointer=self._pointer,
        )
        self._pressed.clear()
        return frame

    def clear(self) -> None:
        """Forget held keys and queued presses."""
        self._held.clear()
        self._pressed.clear()

    def _press(self, intent: Intent) -> None:
        self._held.add(intent)
        self._pressed.append(intent)

    def _release(self, intent: Intent) -> None:
        self._held.discard(intent)
