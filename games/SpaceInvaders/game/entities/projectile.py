"""Bullets fired by the player and by invaders."""

import math
from dataclasses import dataclass, replace

from games.SpaceInvaders import config


@dataclass(frozen=True)
class Bullet:
    """Player bullet travelling up, optionally at an angle (radians from vertical)."""
    x: float
    y: float
    angle: float = 0.0
    width: float = config.BULLET_WIDTH
    height: float = config.BULLET_HEIGHT

    def moved(self, speed: float = config.BULLET_SPEED) -> 'Bullet':
        return replace(self, x=self.x + speed * math.sin(self.angle), y=self.y - speed)


@dataclass(frozen=True)
class EnemyBullet:
    """Invader bullet travelling straight down."""
    x: float
    y: float
    width: float = config.ENEMY_BULLET_WIDTH
    height: float = config.ENEMY_BULLET_HEIGHT

    def moved(self, speed: float = config.ENEMY_BULLET_SPEED) -> 'EnemyBullet':
        return replace(self, y=self.y + speed)
