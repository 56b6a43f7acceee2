"""Space Invaders entities."""

from .enemy import Enemy, EnemyType
from .player import Player
from .powerup import POWER_UP_TYPES, PowerUp, PowerUpType
from .projectile import Bullet, EnemyBullet
from .shield import Shield, create_shields

__all__ = [
    'Enemy', 'EnemyType', 'Player', 'POWER_UP_TYPES', 'PowerUp', 'PowerUpType',
    'Bullet', 'EnemyBullet', 'Shield', 'create_shields',
]
