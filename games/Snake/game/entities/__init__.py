"""Snake game entities."""

from .snake import SnakeBody, Direction, UP, DOWN, LEFT, RIGHT, is_reverse

__all__ = ['SnakeBody', 'Direction', 'UP', 'DOWN', 'LEFT', 'RIGHT', 'is_reverse']
