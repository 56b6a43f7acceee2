"""
Render surfaces.

Games produce a list of draw primitives once per tick; a RenderSurface
turns that list into pixels. Surfaces contain no game logic.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

import pygame

from models import Color
from models.render import CirclePrimitive, DrawPrimitive, RectPrimitive, TextPrimitive
from retroverse.logging import get_logger

log = get_logger('render')

BACKGROUND = Color(r=0, g=0, b=0)


class RenderSurface(ABC):
    """Consumer of per-tick draw lists."""

    @abstractmethod
    def draw(self, primitives: Sequence[DrawPrimitive]) -> None:
        pass


class RecordingSurface(RenderSurface):
    """Keeps the last frame in memory. Used by tests and headless runs."""

    def __init__(self):
        self.frames: List[List[DrawPrimitive]] = []

    @property
    def last_frame(self) -> List[DrawPrimitive]:
        return self.frames[-1] if self.frames else []

    def draw(self, primitives: Sequence[DrawPrimitive]) -> None:
        self.frames.append(list(primitives))


class PygameRenderSurface(RenderSurface):
    """Draws primitives onto a pygame surface.

    Fonts are created lazily and cached per size. A primitive that fails
    to draw is logged and skipped; the rest of the frame still draws.
    """

    def __init__(self, screen: pygame.Surface, background: Color = BACKGROUND,
                 flip: bool = True):
        self._screen = screen
        self._background = background
        self._flip = flip
        self._fonts: Dict[int, pygame.font.Font] = {}

    @property
    def size(self) -> Tuple[int, int]:
        return self._screen.get_size()

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def _target(self, color: Color, rect: pygame.Rect) -> Tuple[pygame.Surface, Optional[pygame.Rect]]:
        """Surface to draw on; translucent colors go through a temporary layer."""
        if color.a >= 255:
            return self._screen, None
        layer = pygame.Surface((max(1, rect.width), max(1, rect.height)), pygame.SRCALPHA)
        return layer, rect

    def _draw_rect(self, prim: RectPrimitive) -> None:
        rect = pygame.Rect(int(prim.x), int(prim.y), int(prim.width), int(prim.height))
        target, layer_rect = self._target(prim.color, rect)
        draw_rect = rect if layer_rect is None else pygame.Rect(0, 0, rect.width, rect.height)
        width = 0 if prim.filled else prim.line_width
        pygame.draw.rect(target, prim.color.as_tuple, draw_rect, width)
        if layer_rect is not None:
            self._screen.blit(target, layer_rect.topleft)

    def _draw_circle(self, prim: CirclePrimitive) -> None:
        r = int(round(prim.radius))
        rect = pygame.Rect(int(prim.x) - r, int(prim.y) - r, 2 * r, 2 * r)
        target, layer_rect = self._target(prim.color, rect)
        center = (int(prim.x), int(prim.y)) if layer_rect is None else (r, r)
        pygame.draw.circle(target, prim.color.as_tuple, center, r)
        if layer_rect is not None:
            self._screen.blit(target, layer_rect.topleft)

    def _draw_text(self, prim: TextPrimitive) -> None:
        text_surface = self._font(prim.size).render(prim.text, True, prim.color.as_rgb_tuple)
        if prim.color.a < 255:
            text_surface.set_alpha(prim.color.a)
        text_rect = text_surface.get_rect()
        text_rect.centery = int(prim.y)
        if prim.align == 'center':
            text_rect.centerx = int(prim.x)
        elif prim.align == 'right':
            text_rect.right = int(prim.x)
        else:
            text_rect.left = int(prim.x)
        self._screen.blit(text_surface, text_rect)

    def draw(self, primitives: Sequence[DrawPrimitive]) -> None:
        self._screen.fill(self._background.as_rgb_tuple)
        for prim in primitives:
            try:
                if isinstance(prim, RectPrimitive):
                    self._draw_rect(prim)
                elif isinstance(prim, CirclePrimitive):
                    self._draw_circle(prim)
                elif isinstance(prim, TextPrimitive):
                    self._draw_text(prim)
                else:
                    log.warning(f"Unknown primitive {type(prim).__name__}")
            except Exception:
                log.exception(f"Failed to draw {prim.kind}")
        if self._flip:
            try:
                pygame.display.flip()
            except pygame.error as e:
                log.warning(f"Display flip failed: {e}")
