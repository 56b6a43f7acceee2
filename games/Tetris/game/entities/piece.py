"""Tetromino shapes and the falling piece.

Shapes are square matrices of cell values; the non-zero value is the
piece's colour id (1-7).
"""

import random
from dataclasses import dataclass, replace
from typing import Iterator, Tuple

from retroverse.games.collision import Cell, shape_cells

Shape = Tuple[Tuple[int, ...], ...]

SHAPES: Tuple[Shape, ...] = (
    # I
    ((0, 0, 0, 0),
     (1, 1, 1, 1),
     (0, 0, 0, 0),
     (0, 0, 0, 0)),
    # J
    ((2, 0, 0),
     (2, 2, 2),
     (0, 0, 0)),
    # L
    ((0, 0, 3),
     (3, 3, 3),
     (0, 0, 0)),
    # O
    ((4, 4),
     (4, 4)),
    # S
    ((0, 5, 5),
     (5, 5, 0),
     (0, 0, 0)),
    # T
    ((0, 6, 0),
     (6, 6, 6),
     (0, 0, 0)),
    # Z
    ((7, 7, 0),
     (0, 7, 7),
     (0, 0, 0)),
)

SHAPE_NAMES = ('I', 'J', 'L', 'O', 'S', 'T', 'Z')

# Offsets tried in order when a rotation does not fit in place
WALL_KICKS: Tuple[Tuple[int, int], ...] = ((0, 0), (1, 0), (-1, 0), (0, -1), (1, -1), (-1, -1))


def rotate_clockwise(shape: Shape) -> Shape:
    return tuple(zip(*reversed(shape)))


def random_shape(rng: random.Random) -> Shape:
    return SHAPES[rng.randrange(len(SHAPES))]


def shape_color(shape: Shape) -> int:
    """Colour id of a shape (its non-zero cell value)."""
    for row in shape:
        for value in row:
            if value:
                return value
    return 0


@dataclass(frozen=True)
class Piece:
    """A tetromino on the board; (x, y) is the top-left of its matrix."""
    shape: Shape
    x: int
    y: int = 0

    @classmethod
    def spawn(cls, shape: Shape, cols: int) -> 'Piece':
        """New piece centred at the top of a board ``cols`` wide."""
        return cls(shape=shape, x=cols // 2 - len(shape[0]) // 2, y=0)

    @property
    def color(self) -> int:
        return shape_color(self.shape)

    def cells(self) -> Iterator[Cell]:
        return shape_cells(self.shape, self.x, self.y)

    def moved(self, dx: int, dy: int) -> 'Piece':
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> 'Piece':
        return replace(self, shape=rotate_clockwise(self.shape))
