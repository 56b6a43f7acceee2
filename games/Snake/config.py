"""Configuration for Snake game.

Values can be overridden with environment variables or a .env file
next to this module (e.g. SNAKE_GRID_WIDTH=30).
"""
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


# Grid
GRID_WIDTH = _get_int('SNAKE_GRID_WIDTH', 20)
GRID_HEIGHT = _get_int('SNAKE_GRID_HEIGHT', 20)
CELL_SIZE = _get_int('SNAKE_CELL_SIZE', 20)
START_X = GRID_WIDTH // 2
START_Y = GRID_HEIGHT // 2

# Speed in ticks per second
BASE_SPEED = _get_int('SNAKE_BASE_SPEED', 10)
MAX_SPEED = _get_int('SNAKE_MAX_SPEED', 20)
POINTS_PER_SPEEDUP = _get_int('SNAKE_POINTS_PER_SPEEDUP', 5)

# Display
SCREEN_WIDTH = GRID_WIDTH * CELL_SIZE
SCREEN_HEIGHT = GRID_HEIGHT * CELL_SIZE

# Colors
BACKGROUND_COLOR = '#000000'
SNAKE_COLOR = '#00FF00'
HEAD_COLOR = '#FFFF00'
EYE_COLOR = '#000000'
FOOD_COLOR = '#FF0000'
STEM_COLOR = '#8B4513'
TEXT_COLOR = '#00FFFF'


@dataclass(frozen=True)
class SnakeRules:
    """Rule constants for one Snake session."""
    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    start_x: int = START_X
    start_y: int = START_Y
    base_speed: int = BASE_SPEED
    max_speed: int = MAX_SPEED
    points_per_speedup: int = POINTS_PER_SPEEDUP

    def __post_init__(self):
        if self.grid_width < 2 or self.grid_height < 2:
            raise ValueError(f"Grid must be at least 2x2, got {self.grid_width}x{self.grid_height}")
        if not (0 <= self.start_x < self.grid_width and 0 <= self.start_y < self.grid_height):
            raise ValueError(f"Start cell ({self.start_x}, {self.start_y}) outside grid")
        if not 0 < self.base_speed <= self.max_speed:
            raise ValueError(f"Need 0 < base_speed <= max_speed, got {self.base_speed}, {self.max_speed}")
