"""Configuration for Tetris game.

Board size, drop timing and colors. Values can be overridden with
environment variables or a .env file next to this module.
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


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Board
COLS = _get_int('TETRIS_COLS', 10)
ROWS = _get_int('TETRIS_ROWS', 20)
BLOCK_SIZE = _get_int('TETRIS_BLOCK_SIZE', 20)
SIDE_PANEL_WIDTH = 200

# Input cadence; gravity runs on its own drop interval
TICK_RATE = 60

# Drop interval: max(MIN_DROP_MS, floor(BASE_DROP_MS * DROP_DECAY ** (level - 1)))
BASE_DROP_MS = _get_float('TETRIS_BASE_DROP_MS', 800.0)
DROP_DECAY = _get_float('TETRIS_DROP_DECAY', 0.85)
MIN_DROP_MS = _get_float('TETRIS_MIN_DROP_MS', 100.0)

# Scoring
MAX_LEVEL = 15
LINE_POINTS = (0, 100, 300, 500, 800)
BEYOND_TETRIS_POINTS = 1000
LEVEL_MULTIPLIER = 1.2
COMBO_BONUS = 0.1
HARD_DROP_POINTS_PER_CELL = 2

# Colors, indexed by cell value (0 is empty)
PIECE_COLORS = (
    '#000000',
    '#00FFFF',  # I
    '#0000FF',  # J
    '#FF8800',  # L
    '#FFFF00',  # O
    '#00FF00',  # S
    '#FF00FF',  # T
    '#FF0000',  # Z
)
GRID_COLOR = '#222222'
PANEL_COLOR = '#FFFFFF'
TEXT_COLOR = '#FFFFFF'
COMBO_COLOR = '#FFFF00'


@dataclass(frozen=True)
class TetrisRules:
    """Rule constants for one Tetris session."""
    cols: int = COLS
    rows: int = ROWS
    base_drop_ms: float = BASE_DROP_MS
    drop_decay: float = DROP_DECAY
    min_drop_ms: float = MIN_DROP_MS
    max_level: int = MAX_LEVEL

    def __post_init__(self):
        if self.cols < 4 or self.rows < 4:
            raise ValueError(f"Board must be at least 4x4, got {self.cols}x{self.rows}")
        if not 0 < self.drop_decay <= 1:
            raise ValueError(f"drop_decay must be in (0, 1], got {self.drop_decay}")
        if self.min_drop_ms <= 0:
            raise ValueError(f"min_drop_ms must be positive, got {self.min_drop_ms}")
