"""
Unified models library for the RetroVerse arcade.

This package provides the Pydantic data models used across the engine:
- Primitives: Basic geometric and color types (Point2D, Color, Rectangle)
- Render: Draw primitives emitted once per tick (RectPrimitive, CirclePrimitive, TextPrimitive)
- Scoring: ScoreState shared by all games

Usage:
    >>> from models import Point2D, Color
    >>> from models.render import RectPrimitive
"""

from .primitives import (
    Point2D,
    Color,
    Rectangle,
)
from .render import (
    RectPrimitive,
    CirclePrimitive,
    TextPrimitive,
    DrawPrimitive,
    DrawList,
)
from .scoring import ScoreState

__all__ = [
    # Primitives
    "Point2D",
    "Color",
    "Rectangle",
    # Render
    "RectPrimitive",
    "CirclePrimitive",
    "TextPrimitive",
    "DrawPrimitive",
    "DrawList",
    # Scoring
    "ScoreState",
]
