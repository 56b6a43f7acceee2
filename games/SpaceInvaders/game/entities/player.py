"""Player ship."""

from dataclasses import dataclass, replace

from games.SpaceInvaders import config


@dataclass(frozen=True)
class Player:
    """Player cannon with its top-left corner at (x, y)."""
    x: float
    y: float
    width: float = config.PLAYER_WIDTH
    height: float = config.PLAYER_HEIGHT
    speed: float = config.PLAYER_SPEED

    @classmethod
    def centered(cls, field_width: float, field_height: float, speed: float = config.PLAYER_SPEED) -> 'Player':
        """Ship centred horizontally, 20 px above the bottom edge."""
        return cls(
            x=field_width / 2 - config.PLAYER_WIDTH / 2,
            y=field_height - config.PLAYER_HEIGHT - config.PLAYER_BOTTOM_MARGIN,
            speed=speed,
        )

    @property
    def muzzle_x(self) -> float:
        return self.x + self.width / 2

    def move(self, dx: float, field_width: float) -> 'Player':
        """Move sideways, staying inside the field."""
        x = max(0.0, min(field_width - self.width, self.x + dx))
        return replace(self, x=x)

    def center_on(self, x: float, field_width: float) -> 'Player':
        return self.move(x - self.width / 2 - self.x, field_width)
