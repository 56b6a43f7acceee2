"""
Touch Input Source - swipes, taps and a continuous pointer.

This is a shared module used by all games. Works with pygame FINGER*
events (normalized coordinates) and with mouse drags on desktop.
"""
from typing import Callable, Optional, Tuple

import pygame

from models import Point2D
from retroverse.games.game_state import GameState
from retroverse.games.input.intent import Intent
from retroverse.games.input.sources.base import InputSource

TAP_INTENTS = {
    GameState.WAITING: Intent.START,
    GameState.PAUSED: Intent.PAUSE_TOGGLE,
    GameState.GAME_OVER: Intent.RESET,
    GameState.PLAYING: Intent.ACTION,
}


class TouchInputSource(InputSource):
    """Touch/drag input source.

    While a finger is down, movement beyond the swipe thresholds along
    the dominant axis queues a direction and re-anchors the gesture, so a
    long drag produces several moves. A release that never swiped is a
    tap, whose meaning depends on the game state: start, unpause, reset,
    or action while playing.

    Args:
        surface_size: (width, height) used to scale normalized finger coordinates
        state_provider: Returns the current GameState for tap mapping
        horizontal_threshold: Pixels of horizontal travel for a left/right swipe
        vertical_threshold: Pixels of vertical travel for an up/down swipe
    """

    def __init__(
        self,
        surface_size: Tuple[int, int],
        state_provider: Callable[[], GameState],
        horizontal_threshold: float = 20.0,
        vertical_threshold: float = 50.0,
    ):
        super().__init__()
        self._surface_size = surface_size
        self._state_provider = state_provider
        self._h_threshold = horizontal_threshold
        self._v_threshold = vertical_threshold
        self._anchor: Optional[Point2D] = None
        self._swiped = False

    def _to_pixels(self, event) -> Point2D:
        if event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION, pygame.FINGERUP):
            width, height = self._surface_size
            return Point2D(x=event.x * width, y=event.y * height)
        x, y = event.pos
        return Point2D(x=float(x), y=float(y))

    def _begin(self, point: Point2D) -> None:
        self._anchor = point
        self._swiped = False
        self._pointer = point

    def _move(self, point: Point2D) -> None:
        self._pointer = point
        if self._anchor is None:
            return
        dx = point.x - self._anchor.x
        dy = point.y - self._anchor.y
        direction = None
        if abs(dx) > abs(dy):
            if dx > self._h_threshold:
                direction = Intent.RIGHT
            elif dx < -self._h_threshold:
                direction = Intent.LEFT
        else:
            if dy < -self._v_threshold:
                direction = Intent.UP
            elif dy > self._v_threshold:
                direction = Intent.DOWN
        if direction is not None:
            self._pressed.append(direction)
            self._anchor = point
            self._swiped = True

    def _end(self, point: Point2D) -> None:
        self._pointer = point
        if self._anchor is not None and not self._swiped:
            self._pressed.append(TAP_INTENTS[self._state_provider()])
        self._anchor = None
        self._swiped = False

    def handle_event(self, event) -> bool:
        if event.type in (pygame.FINGERDOWN, pygame.MOUSEBUTTONDOWN):
            if event.type == pygame.MOUSEBUTTONDOWN and event.button != 1:
                return False
            self._begin(self._to_pixels(event))
            return True
        if event.type in (pygame.FINGERMOTION, pygame.MOUSEMOTION):
            self._move(self._to_pixels(event))
            return True
        if event.type in (pygame.FINGERUP, pygame.MOUSEBUTTONUP):
            if event.type == pygame.MOUSEBUTTONUP and event.button != 1:
                return False
            self._end(self._to_pixels(event))
            return True
        return False
