"""Configuration for Pong game.

Contains field dimensions, physics constants, AI difficulty profiles
and color definitions. Values can be overridden with environment
variables or a .env file next to this module.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

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
SCREEN_WIDTH = _get_int('PONG_WIDTH', 600)
SCREEN_HEIGHT = _get_int('PONG_HEIGHT', 400)
TICK_RATE = _get_int('PONG_TICK_RATE', 60)

# Paddles
PADDLE_WIDTH = 10.0
PADDLE_HEIGHT = _get_float('PONG_PADDLE_HEIGHT', 80.0)
PADDLE_MARGIN = 10.0
PLAYER_PADDLE_SPEED = _get_float('PONG_PLAYER_SPEED', 8.0)

# Ball (pixels per tick)
BALL_RADIUS = 8.0
BALL_SPEED = _get_float('PONG_BALL_SPEED', 5.0)
BALL_MAX_SPEED = _get_float('PONG_BALL_MAX_SPEED', 15.0)
BALL_SPEEDUP = 1.05

# Match
WIN_SCORE = _get_int('PONG_WIN_SCORE', 5)
DEFAULT_DIFFICULTY = os.getenv('PONG_DIFFICULTY', 'medium')

# Colors
BACKGROUND_COLOR = '#000000'
PADDLE_COLOR = '#FFFF00'
BALL_COLOR = '#00FFFF'
NET_COLOR = '#FFFFFF'
TEXT_COLOR = '#00FF00'


@dataclass(frozen=True)
class AIProfile:
    """Computer paddle behaviour for one difficulty.

    Attributes:
        paddle_speed: Pixels per tick while tracking the ball
        reaction: Dead zone around the ball before the paddle reacts
        error: Half-width of the uniform aiming error
        return_band: Dead zone around the field centre while the ball moves away
    """
    paddle_speed: float
    reaction: float
    error: float
    return_band: float = 20.0


AI_PROFILES: Dict[str, AIProfile] = {
    'easy': AIProfile(paddle_speed=3.0, reaction=50.0, error=10.0),
    'medium': AIProfile(paddle_speed=5.0, reaction=25.0, error=5.0),
    'hard': AIProfile(paddle_speed=7.0, reaction=10.0, error=2.5),
}


def get_ai_profile(name: str) -> AIProfile:
    """Look up a difficulty profile.

    Raises:
        ValueError: If the difficulty is unknown
    """
    try:
        return AI_PROFILES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown difficulty {name!r}; choose from {sorted(AI_PROFILES)}") from None


@dataclass(frozen=True)
class PongRules:
    """Rule constants for one Pong match."""
    width: float = SCREEN_WIDTH
    height: float = SCREEN_HEIGHT
    paddle_width: float = PADDLE_WIDTH
    paddle_height: float = PADDLE_HEIGHT
    paddle_margin: float = PADDLE_MARGIN
    player_speed: float = PLAYER_PADDLE_SPEED
    ball_radius: float = BALL_RADIUS
    ball_speed: float = BALL_SPEED
    max_ball_speed: float = BALL_MAX_SPEED
    speedup: float = BALL_SPEEDUP
    win_score: int = WIN_SCORE
    difficulty: str = DEFAULT_DIFFICULTY

    def __post_init__(self):
        get_ai_profile(self.difficulty)
        if self.win_score < 1:
            raise ValueError(f"win_score must be >= 1, got {self.win_score}")
        if self.paddle_height >= self.height:
            raise ValueError("Paddle taller than the field")

    @property
    def ai(self) -> AIProfile:
        return get_ai_profile(self.difficulty)

    @property
    def ai_x(self) -> float:
        return self.width - self.paddle_margin - self.paddle_width
