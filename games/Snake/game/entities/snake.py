"""Snake body entity.

The body is an ordered tuple of grid cells, head first. Consecutive
cells always share an edge. Movement returns a new body.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from retroverse.games.collision import Cell, cell_occupied

Direction = Tuple[int, int]

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)


def is_reverse(a: Optional[Direction], b: Optional[Direction]) -> bool:
    """True if ``b`` points straight back along ``a``."""
    if a is None or b is None:
        return False
    return a[0] == -b[0] and a[1] == -b[1]


@dataclass(frozen=True)
class SnakeBody:
    """Immutable snake body.

    Attributes:
        cells: Occupied cells, head first
    """
    cells: Tuple[Cell, ...]

    def __post_init__(self):
        if not self.cells:
            raise ValueError("Snake body needs at least one cell")

    @property
    def head(self) -> Cell:
        return self.cells[0]

    @property
    def length(self) -> int:
        return len(self.cells)

    def next_head(self, direction: Direction) -> Cell:
        return (self.head[0] + direction[0], self.head[1] + direction[1])

    def advance(self, direction: Direction, grow: bool = False) -> 'SnakeBody':
        """Move one cell; the tail follows unless ``grow``."""
        body = (self.next_head(direction),) + self.cells
        if not grow:
            body = body[:-1]
        return SnakeBody(cells=body)

    def occupies(self, cell: Cell) -> bool:
        return cell_occupied(cell, self.cells)

    def hits_itself(self) -> bool:
        """Head overlaps any other segment."""
        return cell_occupied(self.head, self.cells[1:])
