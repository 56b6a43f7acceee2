"""
Input source implementations.
"""

from retroverse.games.input.sources.base import InputSource
from retroverse.games.input.sources.keyboard import KeyboardInputSource
from retroverse.games.input.sources.touch import TouchInputSource

__all__ = ['InputSource', 'KeyboardInputSource', 'TouchInputSource']
