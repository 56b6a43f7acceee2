"""Falling power-ups and their effects."""

from dataclasses import dataclass, replace
from enum import Enum

from games.SpaceInvaders import config


class PowerUpType(Enum):
    RAPID_FIRE = 'rapid_fire'   # half cooldown, double bullet cap
    SHIELD = 'shield'           # enemy bullets are absorbed
    MULTI_SHOT = 'multi_shot'   # three bullets in a fan

    @property
    def label(self) -> str:
        return self.value.replace('_', ' ').upper()


POWER_UP_TYPES = (PowerUpType.RAPID_FIRE, PowerUpType.SHIELD, PowerUpType.MULTI_SHOT)


@dataclass(frozen=True)
class PowerUp:
    x: float
    y: float
    kind: PowerUpType
    width: float = config.POWER_UP_SIZE
    height: float = config.POWER_UP_SIZE

    def fallen(self, speed: float = config.POWER_UP_SPEED) -> 'PowerUp':
        return replace(self, y=self.y + speed)
