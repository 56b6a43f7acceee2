"""
Input Manager - Collects intents from various sources.

This is a shared module used by all games.
"""
from typing import List, Optional

import pygame

from retroverse.games.input.intent import IntentFrame, EMPTY_FRAME
from retroverse.games.input.sources.base import InputSource


class InputManager:
    """Manages input sources and samples one IntentFrame per tick.

    Several sources can be active at once (keyboard plus touch); their
    frames are merged with presses kept in source order.
    """

    def __init__(self, source: Optional[InputSource] = None):
        """Initialize with an optional input source."""
        self._sources: List[InputSource] = [source] if source is not None else []

    def add_source(self, source: InputSource) -> None:
        self._sources.append(source)

    def update(self, dt: float) -> None:
        """Let each source handle queued pygame events.

        The pygame queue is drained once and each event goes to the first
        source that consumes it.
        """
        if not self._sources:
            return
        if len(self._sources) == 1:
            self._sources[0].update(dt)
            return
        for event in pygame.event.get():
            if not any(source.handle_event(event) for source in self._sources):
                pygame.event.post(event)

    def handle_event(self, event) -> bool:
        """Offer one event to the sources, for hosts that own the event loop."""
        return any(source.handle_event(event) for source in self._sources)

    def sample(self) -> IntentFrame:
        """Intent frame for this tick, merged across sources."""
        if not self._sources:
            return EMPTY_FRAME
        frames = [source.poll_frame() for source in self._sources]
        if len(frames) == 1:
            return frames[0]
        held = frozenset().union(*(f.held for f in frames))
        pressed = tuple(i for f in frames for i in f.pressed)
        pointer = next((f.pointer for f in reversed(frames) if f.pointer is not None), None)
        return IntentFrame(held=held, pressed=pressed, pointer=pointer)

    def clear_events(self) -> None:
        """Clear pending intents from all sources."""
        for source in self._sources:
            source.clear()
