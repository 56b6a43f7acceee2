"""Collision detection shared by all games.

Two families of tests:
- AABB overlap for pixel games (Pong, Space Invaders). Overlap is strict:
  boxes that only touch along an edge do not collide.
- Grid occupancy for cell games (Snake, Tetris).

When one projectile can hit several targets, the first target in list
order wins.
"""

from typing import Iterable, Iterator, Optional, Protocol, Sequence, Tuple

Cell = Tuple[int, int]


class Box(Protocol):
    """Anything with an axis-aligned bounding box (top-left origin)."""
    x: float
    y: float
    width: float
    height: float


def aabb_overlap(a: Box, b: Box) -> bool:
    """Strict AABB overlap test.

    Args:
        a: First box
        b: Second box

    Returns:
        True if the interiors of the boxes intersect
    """
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


def first_overlap(box: Box, candidates: Sequence[Box]) -> Optional[int]:
    """Index of the first candidate overlapping ``box``, or None."""
    for index, candidate in enumerate(candidates):
        if aabb_overlap(box, candidate):
            return index
    return None


def in_bounds(cell: Cell, width: int, height: int) -> bool:
    """Check a cell lies inside a width x height grid."""
    x, y = cell
    return 0 <= x < width and 0 <= y < height


def cells_in_bounds(cells: Iterable[Cell], width: int, height: int) -> bool:
    return all(in_bounds(cell, width, height) for cell in cells)


def cell_occupied(cell: Cell, occupied: Iterable[Cell]) -> bool:
    """Exact cell membership test."""
    return cell in occupied


def shape_cells(shape: Sequence[Sequence[int]], origin_x: int, origin_y: int) -> Iterator[Cell]:
    """Yield board cells covered by the non-zero entries of a shape matrix."""
    for row_index, row in enumerate(shape):
        for col_index, value in enumerate(row):
            if value:
                yield origin_x + col_index, origin_y + row_index
