"""Enemy invaders.

The formation's first two rows are advanced invaders, the third row
medium and the rest basic.
"""

from dataclasses import dataclass, replace
from enum import Enum

from games.SpaceInvaders import config


class EnemyType(Enum):
    ADVANCED = 'advanced'
    MEDIUM = 'medium'
    BASIC = 'basic'

    @property
    def points(self) -> int:
        return ENEMY_POINTS[self]

    @classmethod
    def for_row(cls, row: int) -> 'EnemyType':
        if row <= 1:
            return cls.ADVANCED
        if row == 2:
            return cls.MEDIUM
        return cls.BASIC


ENEMY_POINTS = {
    EnemyType.ADVANCED: 30,
    EnemyType.MEDIUM: 20,
    EnemyType.BASIC: 10,
}


@dataclass(frozen=True)
class Enemy:
    """One invader; (x, y) is its top-left corner."""
    x: float
    y: float
    kind: EnemyType = EnemyType.BASIC
    width: float = config.ENEMY_WIDTH
    height: float = config.ENEMY_HEIGHT

    @property
    def points(self) -> int:
        return self.kind.points

    def moved(self, dx: float, dy: float) -> 'Enemy':
        return replace(self, x=self.x + dx, y=self.y + dy)
