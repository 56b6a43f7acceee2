"""Destructible shields between the player and the formation."""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from games.SpaceInvaders import config


@dataclass(frozen=True)
class Shield:
    x: float
    y: float
    health: int = config.SHIELD_HEALTH
    width: float = config.SHIELD_WIDTH
    height: float = config.SHIELD_HEIGHT

    def damaged(self) -> Optional['Shield']:
        """Shield after one hit, or None once its health is gone."""
        if self.health <= 1:
            return None
        return replace(self, health=self.health - 1)


def create_shields(field_width: float, field_height: float,
                   count: int = config.SHIELD_COUNT) -> Tuple[Shield, ...]:
    """Evenly spaced shields 100 px above the bottom edge."""
    spacing = field_width / (count + 1)
    return tuple(
        Shield(x=spacing * (i + 1) - config.SHIELD_WIDTH / 2,
               y=field_height - config.SHIELD_BOTTOM_OFFSET)
        for i in range(count)
    )
