"""Tetris entities."""

from .board import Board, clear_lines, collides, drop_distance, empty_board, merge
from .piece import SHAPES, SHAPE_NAMES, WALL_KICKS, Piece, Shape, random_shape, rotate_clockwise

__all__ = [
    'Board', 'clear_lines', 'collides', 'drop_distance', 'empty_board', 'merge',
    'SHAPES', 'SHAPE_NAMES', 'WALL_KICKS', 'Piece', 'Shape', 'random_shape', 'rotate_clockwise',
]
