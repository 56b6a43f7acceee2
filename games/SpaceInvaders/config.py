"""Configuration for Space Invaders.

Field size, ship, bullet, formation, shield and power-up constants.
Speeds are in pixels per tick at 75 ticks per second. Values can be
overridden with environment variables or a .env file next to this module.
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


# Field
SCREEN_WIDTH = _get_int('INVADERS_WIDTH', 500)
SCREEN_HEIGHT = _get_int('INVADERS_HEIGHT', 500)
TICK_RATE = _get_int('INVADERS_TICK_RATE', 75)

# Player
PLAYER_WIDTH = 40.0
PLAYER_HEIGHT = 20.0
PLAYER_SPEED = _get_float('INVADERS_PLAYER_SPEED', 5.0)
PLAYER_BOTTOM_MARGIN = 20.0
LIVES = _get_int('INVADERS_LIVES', 3)

# Player bullets
BULLET_WIDTH = 4.0
BULLET_HEIGHT = 10.0
BULLET_SPEED = 15.0
MAX_BULLETS = _get_int('INVADERS_MAX_BULLETS', 4)
BULLET_COOLDOWN = 0.08  # seconds
MULTI_SHOT_ANGLES = (-0.2, 0.0, 0.2)

# Formation
ENEMY_WIDTH = 30.0
ENEMY_HEIGHT = 20.0
ENEMY_PADDING = 15.0
FORMATION_TOP = 50.0
ENEMY_SPEED = _get_float('INVADERS_ENEMY_SPEED', 1.0)
ENEMY_DROP = 20.0
MAX_ROWS = 5
MAX_COLS = 10

# Enemy bullets
ENEMY_FIRE_RATE = _get_float('INVADERS_ENEMY_FIRE_RATE', 0.01)
ENEMY_BULLET_WIDTH = 3.0
ENEMY_BULLET_HEIGHT = 10.0
ENEMY_BULLET_SPEED = 3.0

# Shields
SHIELD_COUNT = 4
SHIELD_WIDTH = 60.0
SHIELD_HEIGHT = 20.0
SHIELD_HEALTH = 3
SHIELD_BOTTOM_OFFSET = 100.0

# Power-ups
POWER_UP_SIZE = 20.0
POWER_UP_SPEED = 2.0
POWER_UP_SPAWN_Y = 50.0
POWER_UP_CHANCE = 0.01
POWER_UP_EVERY = 3  # ticks between spawn rolls
POWER_UP_DURATION = 10.0  # seconds

# Colors
BACKGROUND_COLOR = '#000000'
PLAYER_COLOR = '#00FFFF'
CANNON_COLOR = '#FFFFFF'
BULLET_COLOR = '#FFFF00'
ENEMY_BULLET_COLOR = '#FF0000'
SHIELD_COLOR = '#00FF00'
STAR_COLOR = '#FFFFFF'
TEXT_COLOR = '#FFFFFF'
ENEMY_COLORS = {
    'advanced': '#FF00FF',
    'medium': '#00FF00',
    'basic': '#FF0000',
}
POWER_UP_COLORS = {
    'rapid_fire': '#FFFF00',
    'shield': '#00FF00',
    'multi_shot': '#FF00FF',
}


@dataclass(frozen=True)
class InvaderRules:
    """Rule constants for one Space Invaders session."""
    width: float = SCREEN_WIDTH
    height: float = SCREEN_HEIGHT
    player_speed: float = PLAYER_SPEED
    lives: int = LIVES
    max_bullets: int = MAX_BULLETS
    bullet_cooldown: float = BULLET_COOLDOWN
    enemy_speed: float = ENEMY_SPEED
    enemy_drop: float = ENEMY_DROP
    enemy_fire_rate: float = ENEMY_FIRE_RATE
    power_up_chance: float = POWER_UP_CHANCE

    def __post_init__(self):
        if self.lives < 1:
            raise ValueError(f"lives must be >= 1, got {self.lives}")
        if self.max_bullets < 1:
            raise ValueError(f"max_bullets must be >= 1, got {self.max_bullets}")
        if not 0 <= self.enemy_fire_rate <= 1:
            raise ValueError(f"enemy_fire_rate must be in [0, 1], got {self.enemy_fire_rate}")
        if not 0 <= self.power_up_chance <= 1:
            raise ValueError(f"power_up_chance must be in [0, 1], got {self.power_up_chance}")
