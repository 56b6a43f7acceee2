"""
RetroVerse - a small real-time arcade engine.

The engine drives four arcade simulations (Snake, Pong, Tetris and
Space Invaders) with a shared fixed-tick scheduler, state machine,
collision helpers and score keeping. Games live in the top-level
``games`` package; shared data models live in ``models``.
"""

__version__ = '1.0.0'
