"""
Draw primitives produced by the games once per tick.

A frame is a plain list of these immutable primitives. The render surface
consumes the list and performs no game logic; games never touch pygame
surfaces directly.
"""

from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .primitives import Color


class RectPrimitive(BaseModel):
    """Axis-aligned rectangle, filled or outlined.

    Attributes:
        x, y: Top-left corner in surface pixels
        width, height: Size in pixels
        color: Fill or outline color (alpha honoured by the surface)
        filled: False draws an outline of ``line_width`` pixels
    """
    kind: Literal['rect'] = 'rect'
    x: float
    y: float
    width: float
    height: float
    color: Color
    filled: bool = True
    line_width: int = Field(default=1, ge=1)

    model_config = ConfigDict(frozen=True)


class CirclePrimitive(BaseModel):
    """Filled circle centered on (x, y)."""
    kind: Literal['circle'] = 'circle'
    x: float
    y: float
    radius: float = Field(..., gt=0)
    color: Color

    model_config = ConfigDict(frozen=True)


class TextPrimitive(BaseModel):
    """Single line of text anchored at (x, y).

    ``align`` selects which point of the rendered text sits on x:
    its left edge, its center, or its right edge. y is the text's
    vertical center.
    """
    kind: Literal['text'] = 'text'
    text: str
    x: float
    y: float
    color: Color
    size: int = Field(default=16, gt=0)
    align: Literal['left', 'center', 'right'] = 'left'

    model_config = ConfigDict(frozen=True)


DrawPrimitive = Union[RectPrimitive, CirclePrimitive, TextPrimitive]
DrawList = List[DrawPrimitive]
