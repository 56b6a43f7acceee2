"""Immutable Tetris board.

Rows are tuples of cell values, row 0 at the top. 0 is empty, 1-7 are
locked blocks of the matching piece colour.
"""

from typing import Tuple

from retroverse.games.collision import cells_in_bounds

from .piece import Piece

Row = Tuple[int, ...]
Board = Tuple[Row, ...]


def empty_board(cols: int, rows: int) -> Board:
    return tuple((0,) * cols for _ in range(rows))


def board_size(board: Board) -> Tuple[int, int]:
    return len(board[0]), len(board)


def collides(board: Board, piece: Piece) -> bool:
    """True if any block of ``piece`` is off the board or on a locked cell.

    Cells above the top edge count as collisions.
    """
    cols, rows = board_size(board)
    cells = list(piece.cells())
    if not cells_in_bounds(cells, cols, rows):
        return True
    return any(board[y][x] for x, y in cells)


def drop_distance(board: Board, piece: Piece) -> int:
    """Rows the piece can fall before it would collide."""
    distance = 0
    while not collides(board, piece.moved(0, distance + 1)):
        distance += 1
    return distance


def merge(board: Board, piece: Piece) -> Board:
    """Board with the piece's blocks written in."""
    rows = [list(row) for row in board]
    for x, y in piece.cells():
        rows[y][x] = piece.color
    return tuple(tuple(row) for row in rows)


def clear_lines(board: Board) -> Tuple[Board, int]:
    """Remove full rows and prepend as many empty rows.

    Returns:
        (new board, number of rows cleared)
    """
    cols, _ = board_size(board)
    kept = tuple(row for row in board if not all(row))
    cleared = len(board) - len(kept)
    return tuple((0,) * cols for _ in range(cleared)) + kept, cleared
