"""Paddle entity.

Vertical position is always clamped to the field.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Paddle:
    """Vertical paddle with its top-left corner at (x, y).

    Attributes:
        x, y: Top-left corner
        width, height: Size in pixels
        speed: Pixels per tick
    """
    x: float
    y: float
    width: float = 10.0
    height: float = 80.0
    speed: float = 8.0

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def clamped_to(self, field_height: float) -> 'Paddle':
        return replace(self, y=max(0.0, min(self.y, field_height - self.height)))

    def move(self, dy: float, field_height: float) -> 'Paddle':
        """Move by ``dy`` pixels, staying inside the field."""
        return replace(self, y=self.y + dy).clamped_to(field_height)

    def center_on(self, y: float, field_height: float) -> 'Paddle':
        """Place the paddle centre at ``y``, staying inside the field."""
        return replace(self, y=y - self.height / 2).clamped_to(field_height)
