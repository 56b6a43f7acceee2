"""
Input abstraction layer for arcade games.

Provides unified input handling that works identically with keyboard,
touch and pointer backends.
"""

from retroverse.games.input.intent import Intent, IntentFrame, EMPTY_FRAME
from retroverse.games.input.input_manager import InputManager

__all__ = ['Intent', 'IntentFrame', 'EMPTY_FRAME', 'InputManager']
