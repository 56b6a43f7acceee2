"""
Keyboard Input Source - arrow keys / WASD and command keys.

This is a shared module used by all games.
"""
from typing import Dict, Optional, Set, Tuple

import pygame

from retroverse.games.input.intent import Intent
from retroverse.games.input.sources.base import InputSource

DEFAULT_KEY_MAP: Dict[int, Tuple[Intent, ...]] = {
    pygame.K_UP: (Intent.UP,),
    pygame.K_w: (Intent.UP,),
    pygame.K_DOWN: (Intent.DOWN,),
    pygame.K_s: (Intent.DOWN,),
    pygame.K_LEFT: (Intent.LEFT,),
    pygame.K_a: (Intent.LEFT,),
    pygame.K_RIGHT: (Intent.RIGHT,),
    pygame.K_d: (Intent.RIGHT,),
    pygame.K_SPACE: (Intent.ACTION, Intent.START),
    pygame.K_RETURN: (Intent.START,),
    pygame.K_c: (Intent.HOLD,),
    pygame.K_p: (Intent.PAUSE_TOGGLE,),
    pygame.K_r: (Intent.RESET,),
}

# Only movement repeats; a held P or R must not toggle twice
REPEATABLE_INTENTS = frozenset({Intent.UP, Intent.DOWN, Intent.LEFT, Intent.RIGHT})

# Held keys repeat after KEY_REPEAT_DELAY ms, then every KEY_REPEAT_INTERVAL ms
KEY_REPEAT_DELAY = 170
KEY_REPEAT_INTERVAL = 50


def enable_key_repeat(delay: int = KEY_REPEAT_DELAY, interval: int = KEY_REPEAT_INTERVAL) -> None:
    """Turn on pygame key repeat so held arrows send repeated KEYDOWNs.

    Tetris auto-shift depends on it. Needs an initialized display.
    """
    pygame.key.set_repeat(delay, interval)


class KeyboardInputSource(InputSource):
    """Keyboard input source.

    KEYDOWN queues the mapped intents and marks them held; KEYUP releases
    them. Repeated KEYDOWNs (see enable_key_repeat) queue further
    movement presses while the key stays held. Non-keyboard events and
    unmapped keys are left for the main loop.
    """

    def __init__(self, key_map: Optional[Dict[int, Tuple[Intent, ...]]] = None):
        """Initialize the keyboard input source.

        Args:
            key_map: pygame key code to intents; defaults to DEFAULT_KEY_MAP
        """
        super().__init__()
        self._key_map = dict(DEFAULT_KEY_MAP if key_map is None else key_map)
        self._keys_down: Set[int] = set()

    def handle_event(self, event) -> bool:
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return False
        intents = self._key_map.get(event.key)
        if intents is None:
            return False
        if event.type == pygame.KEYUP:
            self._keys_down.discard(event.key)
            for intent in intents:
                self._release(intent)
            return True

        repeat = event.key in self._keys_down
        self._keys_down.add(event.key)
        for intent in intents:
            if not repeat or intent in REPEATABLE_INTENTS:
                self._press(intent)
        return True

    def clear(self) -> None:
        super().clear()
        self._keys_down.clear()
